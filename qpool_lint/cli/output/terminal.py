"""
Terminal output adapter.

Renders a report grouped by line. Each offending line is echoed with its raw
fields highlighted in rotating colors, and a caret marker under every field
that has a finding.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from qpool_lint.cli.output.base import OutputAdapter, OutputFormat

if TYPE_CHECKING:
    from qpool_lint.core.parser.models import Finding
    from qpool_lint.core.rules.models import ReportLine, ValidationReport


def _supports_unicode() -> bool:
    """Check if terminal supports Unicode."""
    try:
        "✓".encode(sys.stdout.encoding or "utf-8")
        return True
    except (UnicodeEncodeError, LookupError):
        return False


ERROR_SYMBOL_UNICODE = "✖"
ERROR_SYMBOL_ASCII = "X"
SUCCESS_SYMBOL_UNICODE = "✓"
SUCCESS_SYMBOL_ASCII = "OK"

# ANSI codes, including soft backgrounds used to tell fields apart
STYLES = {
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "bold red": "\033[1;31m",
    "field0": "\033[48;5;224m",
    "field1": "\033[48;5;153m",
    "field2": "\033[48;5;229m",
    "field3": "\033[48;5;158m",
    "field4": "\033[48;5;189m",
    "field5": "\033[48;5;223m",
    "error field": "\033[1;4;31m",
}
RESET = "\033[0m"
FIELD_STYLE_COUNT = 6


class TerminalOutput(OutputAdapter):
    """Terminal output with ANSI colors."""

    format = OutputFormat.TERMINAL

    def __init__(self, stream: TextIO | None = None, color: bool = True):
        super().__init__(stream=stream, color=color)
        self._use_color = color and self._is_tty()
        self._use_unicode = _supports_unicode()
        self._error_symbol = ERROR_SYMBOL_UNICODE if self._use_unicode else ERROR_SYMBOL_ASCII
        self._success_symbol = SUCCESS_SYMBOL_UNICODE if self._use_unicode else SUCCESS_SYMBOL_ASCII

    def _is_tty(self) -> bool:
        """Check if output is a TTY."""
        return hasattr(self.stream, "isatty") and self.stream.isatty()

    def render_report(self, report: ValidationReport) -> str:
        """Render report with each offending line shown in context."""
        if not report.findings:
            return self._style(f"{self._success_symbol} No issues found.", "green")

        lines = [self._style(f"\n{report.file or '<unknown>'}", "bold")]

        for line_no in report.lines_with_findings:
            line_findings = report.findings_for_line(line_no)
            lines.append(self._style(f"Line {line_no}:", "bold"))

            source = report.get_line(line_no)
            if source is not None:
                error_fields = {f.field for f in line_findings if not f.is_row_level}
                lines.append("    " + self._format_source(source, error_fields))
                if error_fields:
                    lines.append("    " + self._style(self._markers(source, error_fields), "red"))

            for finding in line_findings:
                lines.append(self._format_finding(finding))

        lines.append("")
        lines.append(self._format_summary(report))
        return "\n".join(lines)

    def _format_source(self, source: ReportLine, error_fields: set[int]) -> str:
        """Echo the raw line with one style per field."""
        parts = []
        for index, raw in enumerate(source.raw_fields):
            if index + 1 in error_fields:
                parts.append(self._style(raw, "error field"))
            else:
                parts.append(self._style(raw, f"field{index % FIELD_STYLE_COUNT}"))
        return ",".join(parts)

    def _markers(self, source: ReportLine, error_fields: set[int]) -> str:
        """Caret line under the fields that have findings.

        Carets start at each flagged field's column in the echoed line. An
        empty flagged field still gets one caret, placed on the delimiter
        that follows it.
        """
        width = sum(len(raw) for raw in source.raw_fields) + len(source.raw_fields)
        marks = [" "] * width
        column = 0
        for index, raw in enumerate(source.raw_fields):
            if index + 1 in error_fields:
                for offset in range(max(len(raw), 1)):
                    marks[column + offset] = "^"
            column += len(raw) + 1
        return "".join(marks).rstrip()

    def _format_finding(self, finding: Finding) -> str:
        """Format a single finding."""
        location = "Row" if finding.is_row_level else f"F{finding.field}"
        styled_symbol = self._style(self._error_symbol, "red")
        styled_code = self._style(finding.code, "dim")
        return f"  {styled_symbol} {location}: {finding.error} [{styled_code}]"

    def _format_summary(self, report: ValidationReport) -> str:
        """Format summary line."""
        counts = self.summarize(report)
        return self._style(
            f"Found: {counts['total_findings']} issue(s) on "
            f"{counts['lines_with_findings']} line(s)",
            "bold red",
        )

    def _style(self, text: str, style: str) -> str:
        """Apply style to text if colors are enabled."""
        if not self._use_color:
            return text

        code = STYLES.get(style, "")
        if code:
            return f"{code}{text}{RESET}"
        return text
