"""Shared console output utilities."""

import json
import sys
from typing import Any

from rich.console import Console

# Shared console instance for all CLI output
console = Console()


def is_non_interactive() -> bool:
    """Return True when stdin is not a TTY.

    Used to refuse destructive prompts that would otherwise hang scripts.
    """
    return not sys.stdin.isatty()


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout (datetimes become strings)."""
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
