"""
JSON output adapter.

Renders findings as JSON for machine processing.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

from qpool_lint.cli.output.base import OutputAdapter, OutputFormat

if TYPE_CHECKING:
    from qpool_lint.core.parser.models import Finding
    from qpool_lint.core.rules.models import ValidationReport


class JsonOutput(OutputAdapter):
    """JSON output adapter."""

    format = OutputFormat.JSON

    def __init__(self, stream: TextIO | None = None, color: bool = False, indent: int = 2):
        super().__init__(stream=stream, color=False)  # Never colorize JSON
        self.indent = indent

    def render_report(self, report: ValidationReport) -> str:
        """Render validation report as JSON."""
        output: dict[str, Any] = {
            "file": report.file,
            "encoding": report.encoding,
            "findings": [self._finding_to_dict(f) for f in report.findings],
            "summary": self.summarize(report),
        }
        return json.dumps(output, indent=self.indent)

    def _finding_to_dict(self, finding: Finding) -> dict[str, Any]:
        """Convert finding to dictionary."""
        return {
            "line": finding.line,
            "field": finding.field,
            "error": finding.error,
            "code": finding.code,
        }
