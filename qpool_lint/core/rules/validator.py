"""
Document validator.

Walks every line of a question pool document, derives the schema from the
first non-blank line and applies the row checks in a fixed order:

1. schema establishment (header only)
2. field count
3. field contents (quoting, escaping, length)
4. correct<N> flags (data rows only)
5. choice<N>/correct<N> pairing (data rows only)
6. tokenizer parse errors

Findings come out ordered by line, then by the step order above.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from qpool_lint.core.config import ValidatorConfig
from qpool_lint.core.parser.tokenizer import tokenize_line

from .checks import (
    check_choice_pairs,
    check_correct_flags,
    check_field_contents,
    check_field_count,
    parse_error_findings,
)
from .models import ReportLine, ValidationReport
from .schema import QuestionPoolSchema, build_schema

if TYPE_CHECKING:
    from collections.abc import Iterator

    from qpool_lint.core.parser.models import Finding, LineTokens

logger = logging.getLogger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")


def _validate_line(
    tokens: LineTokens,
    schema: QuestionPoolSchema,
    line_no: int,
    is_header: bool,
    config: ValidatorConfig,
) -> list[Finding]:
    """Run all checks on one tokenized line."""
    findings: list[Finding] = []

    if not is_header:
        findings.extend(check_field_count(tokens, schema, line_no))

    findings.extend(check_field_contents(tokens, schema, line_no, config.max_field_length))

    if not is_header:
        findings.extend(check_correct_flags(tokens.values, schema, line_no))
        findings.extend(check_choice_pairs(tokens.values, schema, line_no))

    findings.extend(parse_error_findings(tokens, line_no))
    return findings


def iter_lines(
    text: str, config: ValidatorConfig | None = None
) -> Iterator[tuple[ReportLine, list[Finding]]]:
    """
    Validate a document line by line.

    Args:
        text: Full document text, lines separated by LF or CRLF
        config: Validator settings (defaults apply when None)

    Yields:
        (ReportLine, findings) for every non-blank line, in document order
    """
    if config is None:
        config = ValidatorConfig()

    schema: QuestionPoolSchema | None = None

    for line_no, line in enumerate(LINE_SPLIT.split(text), start=1):
        if line.strip() == "":
            continue

        tokens = tokenize_line(line, schema.header if schema is not None else None)

        is_header = schema is None
        if schema is None:
            schema = build_schema(tokens.values)
            logger.debug(
                "Header on line %d: %d fields, choice columns %s, correct columns %s",
                line_no,
                schema.field_count,
                sorted(schema.choice_columns),
                sorted(schema.correct_columns),
            )

        findings = _validate_line(tokens, schema, line_no, is_header, config)
        report_line = ReportLine(
            line_no=line_no, text=line, values=tokens.values, raw_fields=tokens.raw_fields
        )
        yield report_line, findings


def iter_findings(text: str, config: ValidatorConfig | None = None) -> Iterator[Finding]:
    """Yield findings for a document in report order."""
    for _, findings in iter_lines(text, config):
        yield from findings


def validate_text(text: str, config: ValidatorConfig | None = None) -> list[Finding]:
    """
    Validate a question pool document.

    Never raises for malformed content; an empty list means the document is clean.

    Args:
        text: Full document text
        config: Validator settings (defaults apply when None)

    Returns:
        All findings, ordered by line and check order
    """
    findings = list(iter_findings(text, config))
    logger.debug("Validation finished with %d finding(s)", len(findings))
    return findings


def build_report(
    text: str,
    config: ValidatorConfig | None = None,
    *,
    file: str | None = None,
    encoding: str | None = None,
) -> ValidationReport:
    """
    Validate a document and keep its tokenized lines for display.

    Args:
        text: Full document text
        config: Validator settings
        file: Display name of the source
        encoding: Encoding the text was decoded with

    Returns:
        ValidationReport with findings and lines
    """
    lines: list[ReportLine] = []
    findings: list[Finding] = []

    for report_line, line_findings in iter_lines(text, config):
        lines.append(report_line)
        findings.extend(line_findings)

    logger.debug(
        "Validated %s: %d line(s), %d finding(s)", file or "<text>", len(lines), len(findings)
    )

    return ValidationReport(
        file=file,
        encoding=encoding,
        header=lines[0].values if lines else [],
        lines=lines,
        findings=findings,
    )
