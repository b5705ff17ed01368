"""
Validation result models.
"""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field

from qpool_lint.core.parser.models import Finding


class ReportLine(BaseModel, frozen=True):
    """A non-blank line as it was tokenized."""

    line_no: int = Field(ge=1, description="1-based physical line number")
    text: str
    values: list[str]
    raw_fields: list[str]

    model_config = {"frozen": True}


class ValidationReport(BaseModel):
    """
    Findings for one document, together with its tokenized lines.

    The lines let output adapters show each offending line with its
    raw fields highlighted.
    """

    file: str | None = None
    encoding: str | None = None
    header: list[str] = Field(default_factory=list)
    lines: list[ReportLine] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if any finding was reported."""
        return bool(self.findings)

    @property
    def row_count(self) -> int:
        """Number of data rows (non-blank lines after the header)."""
        return max(len(self.lines) - 1, 0)

    @property
    def lines_with_findings(self) -> list[int]:
        """Line numbers that have at least one finding, ascending."""
        return sorted({f.line for f in self.findings})

    @property
    def code_counts(self) -> list[tuple[str, int]]:
        """Finding codes by frequency."""
        return Counter(f.code for f in self.findings).most_common()

    def findings_for_line(self, line_no: int) -> list[Finding]:
        """Findings reported on a line, in report order."""
        return [f for f in self.findings if f.line == line_no]

    def has_field_error(self, line_no: int, field: int) -> bool:
        """Check if the 1-based field on a line has a finding."""
        return any(f.line == line_no and f.field == field for f in self.findings)

    def get_line(self, line_no: int) -> ReportLine | None:
        """Tokenized line by physical line number."""
        for line in self.lines:
            if line.line_no == line_no:
                return line
        return None
