"""
Output adapter base classes.

Every adapter renders a ValidationReport to a string; the CLI decides where
the string goes.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from qpool_lint.core.rules.models import ValidationReport


class OutputFormat(Enum):
    """Supported output formats."""

    TERMINAL = "terminal"
    JSON = "json"


class OutputAdapter(ABC):
    """Base class for report renderers."""

    format: OutputFormat

    def __init__(self, stream: TextIO | None = None, color: bool = True):
        # Only consulted for TTY detection
        self.stream = stream or sys.stdout
        self.color = color

    @abstractmethod
    def render_report(self, report: ValidationReport) -> str:
        """Render a validation report to string."""

    def summarize(self, report: ValidationReport) -> dict[str, Any]:
        """Counts shared by all formats."""
        return {
            "row_count": report.row_count,
            "total_findings": len(report.findings),
            "lines_with_findings": len(report.lines_with_findings),
            "codes": dict(report.code_counts),
            "has_errors": report.has_errors,
        }


def get_output_adapter(
    format: OutputFormat | str,
    stream: TextIO | None = None,
    color: bool = True,
) -> OutputAdapter:
    """Get an output adapter by format."""
    from qpool_lint.cli.output.json import JsonOutput
    from qpool_lint.cli.output.terminal import TerminalOutput

    adapters: dict[OutputFormat, type[OutputAdapter]] = {
        OutputFormat.TERMINAL: TerminalOutput,
        OutputFormat.JSON: JsonOutput,
    }
    try:
        adapter_class = adapters[OutputFormat(format)]
    except (ValueError, KeyError):
        raise ValueError(f"Unknown output format: {format}") from None
    return adapter_class(stream=stream, color=color)
