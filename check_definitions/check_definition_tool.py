#!/usr/bin/env python3
"""Check Definition Tool.

Loads check definitions from a check file and prints the decoded checks
and their health view for a node.
"""

import argparse
import sys
from typing import Dict, List, Optional

from loguru import logger
from tabulate import tabulate

from check_definitions.check_inventory import CheckInventory
from check_definitions.duration import format_duration
from check_definitions.models.check_status import HealthStatus


# -----------------------------------------------------------------------
# Colors
# -----------------------------------------------------------------------
class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[32m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    RESET = "\033[0m"


STATUS_COLORS = {
    HealthStatus.PASSING.value: Colors.GREEN,
    HealthStatus.WARNING.value: Colors.YELLOW,
    HealthStatus.CRITICAL.value: Colors.RED,
    HealthStatus.MAINTENANCE.value: Colors.BLUE,
}


# -----------------------------------------------------------------------
# Tool Class
# -----------------------------------------------------------------------
class CheckDefinitionTool:
    """Loads check definitions and reports on them."""

    def __init__(
        self, config_path: Optional[str] = None, node: str = "local", debug: bool = False
    ) -> None:
        """Initialize the check definition tool.

        Args:
            config_path (str): Path to the check file. Defaults to checks.example.yaml.
            node (str): The node the health view is reported for.
            debug (bool): Enable debug logging.
        """
        self.config_path = config_path
        self.node = node
        self.debug = debug

        # Setup logging
        logger.remove()
        if self.debug:
            logger.add(sys.stderr, level="DEBUG")
        else:
            logger.add(sys.stderr, level="INFO")

        if self.debug:
            logger.debug(f"[INIT] CheckDefinitionTool initialized: node={node} debug={debug}")

        self.inventory = CheckInventory(config_path)
        logger.info(
            f"[CONFIG] Loaded {len(self.inventory.get_all_checks())} checks from {self.inventory.config_path}"
        )

    def list_checks(self) -> List[Dict[str, str]]:
        """List all decoded checks.

        Returns:
            List[Dict]: Checks with id, name, kinds and formatted durations.
        """
        result = []
        for check in self.inventory.get_all_checks():
            result.append(
                {
                    "id": check.id,
                    "name": check.name,
                    "kinds": ", ".join(kind.value for kind in check.kinds()),
                    "interval": format_duration(check.interval),
                    "timeout": format_duration(check.timeout),
                    "ttl": format_duration(check.ttl),
                }
            )
        return result

    def print_checks(self) -> None:
        """Print all decoded checks in tabular format."""
        checks = self.list_checks()

        if not checks:
            print("No checks configured.")
            return

        print("\n" + "=" * 100)
        print("Check Definitions")
        print("=" * 100)

        headers = ["ID", "Name", "Kinds", "Interval", "Timeout", "TTL"]
        table_data = [
            [
                check["id"],
                check["name"],
                check["kinds"],
                check["interval"],
                check["timeout"],
                check["ttl"],
            ]
            for check in checks
        ]
        print(
            tabulate(
                table_data,
                headers=headers,
                tablefmt="pretty",
                colalign=("left", "left", "left", "right", "right", "right"),
            )
        )

    def print_health(self) -> None:
        """Print the health view of every check with color-coded status."""
        health_checks = self.inventory.health_checks(self.node)

        print("\n" + "=" * 100)
        print(f"Health Checks on {self.node}")
        print("=" * 100)

        table_data = []
        for health in health_checks:
            color = STATUS_COLORS.get(health.status, Colors.RESET)
            table_data.append(
                [
                    health.check_id,
                    health.service_id,
                    f"{color}{health.status}{Colors.RESET}",
                    health.notes,
                ]
            )

        headers = ["Check ID", "Service", "Status", "Notes"]
        print(
            tabulate(
                table_data,
                headers=headers,
                tablefmt="pretty",
                colalign=("left", "left", "center", "left"),
            )
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the tool from the command line."""
    parser = argparse.ArgumentParser(description="Decode and report check definitions")
    parser.add_argument("config_path", nargs="?", help="Check file (YAML or JSON)")
    parser.add_argument("--node", default="local", help="Node to report health checks for")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    try:
        tool = CheckDefinitionTool(args.config_path, node=args.node, debug=args.debug)
        tool.print_checks()
        tool.print_health()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Loading checks failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
