"""Check kind definitions."""

from enum import Enum


class CheckKind(str, Enum):
    """Kinds of checks a definition can describe."""

    SCRIPT = "script"
    DOCKER = "docker"
    HTTP = "http"
    TCP = "tcp"
    GRPC = "grpc"
    TTL = "ttl"
    ALIAS = "alias"
