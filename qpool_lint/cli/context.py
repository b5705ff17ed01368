"""
CLI context and configuration.

Manages exit codes and logging setup shared by CLI commands.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class ExitCode(IntEnum):
    """CLI exit codes following Unix conventions."""

    SUCCESS = 0  # No issues found
    ERROR = 1  # Validation findings reported
    FATAL = 2  # Input could not be read
    USAGE = 64  # Command line usage error
    CONFIG = 78  # Configuration error


def get_exit_code(finding_count: int) -> ExitCode:
    """Determine exit code from the number of findings."""
    return ExitCode.ERROR if finding_count > 0 else ExitCode.SUCCESS


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )
