"""Health status definitions."""

from enum import Enum


class HealthStatus(str, Enum):
    """Statuses a health check can report."""

    PASSING = "passing"
    WARNING = "warning"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"
