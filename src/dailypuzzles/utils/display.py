"""
Console display utilities for dailypuzzles.
"""

import sys
from typing import Any, Dict
from datetime import datetime


class StatusDisplay:
    """Formatted console output for the command line."""

    ICONS = {
        "info": "ℹ️",
        "success": "✅",
        "warning": "⚠️",
        "error": "❌",
        "move": "🧩",
        "solved": "🏆",
    }

    @staticmethod
    def print_header(title: str, width: int = 60):
        """Print a formatted header."""
        print("\n" + "=" * width)
        print(f"{title:^{width}}")
        print("=" * width)

    @staticmethod
    def print_section(title: str, width: int = 60):
        """Print a section header."""
        print(f"\n📋 {title}")
        print("-" * width)

    @staticmethod
    def print_config(config_dict: Dict[str, Any], title: str = "Configuration"):
        """Print key/value pairs under a section header."""
        StatusDisplay.print_section(title)
        for key, value in config_dict.items():
            print(f"  {key:<20} : {value}")

    @staticmethod
    def print_status(message: str, status: str = "info", stream=None):
        """Print a timestamped status line with an icon."""
        icon = StatusDisplay.ICONS.get(status, StatusDisplay.ICONS["info"])
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"{icon} [{timestamp}] {message}", file=stream or sys.stdout)

    @staticmethod
    def print_results(results: Dict[str, Any], title: str = "Results"):
        """Print session results."""
        StatusDisplay.print_section(title)
        for key, value in results.items():
            if isinstance(value, bool):
                icon = "✅" if value else "❌"
                print(f"  {key:<20} : {icon} {value}")
            else:
                print(f"  {key:<20} : {value}")

    @staticmethod
    def print_board(description: str):
        """Print a board description block."""
        print()
        for line in description.splitlines():
            print(f"  {line}")
        print()


class LiveLogger:
    """Verbosity-aware status logging for interactive play."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def log_action(self, action_name: str, details: str = ""):
        """Log an action being performed."""
        if self.verbose:
            message = f"Executing: {action_name}"
            if details:
                message += f" - {details}"
            StatusDisplay.print_status(message, "move")

    def log_result(self, message: str, success: bool = True):
        """Log the outcome of an action."""
        if self.verbose:
            StatusDisplay.print_status(message, "success" if success else "error")

    def log_solved(self, message: str):
        StatusDisplay.print_status(message, "solved")

    def log_info(self, message: str):
        """Log an info message."""
        if self.verbose:
            StatusDisplay.print_status(message, "info")

    def log_warning(self, message: str):
        """Log a warning message."""
        if self.verbose:
            StatusDisplay.print_status(message, "warning")

    def log_error(self, message: str):
        """Errors are always shown, on stderr."""
        StatusDisplay.print_status(message, "error", stream=sys.stderr)
