"""Inventory of check definitions loaded from a configuration file.

Check files are YAML (or JSON, which parses as YAML) with a ``check``
object, a ``checks`` list, or both.
"""

import os
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

from check_definitions.decoder import decode_check_definition, resolve_keys
from check_definitions.errors import MalformedValueError
from check_definitions.models.check_definition import CheckDefinition
from check_definitions.models.check_type import CheckType
from check_definitions.models.health_check import HealthCheck
from check_definitions.projection import to_check_type, to_health_check


class CheckInventory:
    """Manages check definitions loaded from a YAML or JSON file."""

    def __init__(self, config_path: Optional[str] = None) -> None:
        """Initialize inventory from a check file.

        Args:
            config_path (str, optional): Path to the check file.
                If None, uses checks.example.yaml in this directory.

        Raises:
            FileNotFoundError: If the check file is not found.
            ValueError: If the check file is invalid.
            MalformedValueError: If a check holds a value that cannot be decoded.
        """
        if config_path is None:
            config_path = os.path.join(
                os.path.dirname(os.path.abspath(__file__)), "checks.example.yaml"
            )

        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Check file not found: {config_path}")

        self.config_path = config_path
        self.checks: List[CheckDefinition] = []

        self._load_from_file()

    def _load_from_file(self) -> None:
        """Load check definitions from the check file.

        Raises:
            ValueError: If the file is invalid or a token variable is not set.
        """
        try:
            with open(self.config_path, "r") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse check file {self.config_path}: {e}") from e

        if not isinstance(config, dict) or not ("check" in config or "checks" in config):
            raise ValueError(
                f"Invalid check file format: missing 'check' or 'checks' section in {self.config_path}"
            )

        documents: List[Any] = []
        if config.get("check") is not None:
            documents.append(config["check"])
        checks_config = config.get("checks") or []
        if not isinstance(checks_config, list):
            raise ValueError(f"Invalid check file format: 'checks' must be a list in {self.config_path}")
        documents.extend(checks_config)

        if not documents:
            raise ValueError(f"No checks configured in {self.config_path}")

        for index, document in enumerate(documents):
            if not isinstance(document, dict):
                raise ValueError(f"Invalid check #{index} in {self.config_path}: expected a mapping")

            try:
                definition = decode_check_definition(self._resolve_token(document, index))
            except MalformedValueError as e:
                logger.error(f"[DECODE] Check #{index} in {self.config_path}: {e}")
                raise

            logger.debug(
                f"[DECODE] Loaded check #{index}: id={definition.id!r} name={definition.name!r}"
            )
            self.checks.append(definition)

        logger.debug(f"[CONFIG] Loaded {len(self.checks)} checks from {self.config_path}")

    @staticmethod
    def _resolve_token(document: Dict[str, Any], index: int) -> Dict[str, Any]:
        """Resolve a ${ENV_VAR} token reference from the environment.

        Args:
            document: The raw check document.
            index: The position of the check in the file, used in errors.

        Returns:
            The document with keys resolved, the token replaced when it was a reference.
        """
        document = resolve_keys(document)
        token = document.get("Token")
        if not (isinstance(token, str) and token.startswith("${") and token.endswith("}")):
            return document

        env_var = token[2:-1]
        value = os.environ.get(env_var, "")
        if not value:
            raise ValueError(f"Environment variable {env_var} not set for check #{index}")
        return {**document, "Token": value}

    def get_check(self, check_id: str) -> Optional[CheckDefinition]:
        """Get a check by id, falling back to its name when it has no id.

        Args:
            check_id (str): Check identifier.

        Returns:
            CheckDefinition: The check or None if not found.
        """
        for check in self.checks:
            if (check.id or check.name) == check_id:
                return check
        return None

    def get_check_ids(self) -> List[str]:
        """Get the ids of all configured checks.

        Returns:
            List[str]: Sorted list of check ids, names standing in for empty ids.
        """
        return sorted(check.id or check.name for check in self.checks)

    def get_all_checks(self) -> List[CheckDefinition]:
        """Get all configured checks in file order."""
        return list(self.checks)

    def health_checks(self, node: str) -> List[HealthCheck]:
        """Get the health view of every check on a node."""
        return [to_health_check(check, node) for check in self.checks]

    def check_types(self) -> List[CheckType]:
        """Get the execution view of every check."""
        return [to_check_type(check) for check in self.checks]
