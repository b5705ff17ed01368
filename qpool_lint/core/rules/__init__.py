"""
Question pool rule engine.

Provides document-level validation for question pool files.

Usage:
    from qpool_lint.core.parser import read_file
    from qpool_lint.core.rules import validate_document

    report = validate_document(read_file("pool.csv"))

    for finding in report.findings:
        print(f"{finding.line}:{finding.field} {finding.error}")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .checks import (
    check_choice_pairs,
    check_correct_flags,
    check_field_contents,
    check_field_count,
)
from .models import ReportLine, ValidationReport
from .schema import QuestionPoolSchema, build_schema
from .validator import build_report, iter_findings, iter_lines, validate_text

if TYPE_CHECKING:
    from qpool_lint.core.config import ValidatorConfig
    from qpool_lint.core.parser.models import DecodedDocument


def validate_document(
    document: DecodedDocument,
    config: ValidatorConfig | None = None,
) -> ValidationReport:
    """
    Validate a decoded question pool file.

    Args:
        document: Result from read_file() or read_bytes()
        config: Validator settings, or None for defaults

    Returns:
        ValidationReport with findings and tokenized lines
    """
    return build_report(document.text, config, file=document.name, encoding=document.encoding)


__all__ = [
    "QuestionPoolSchema",
    "ReportLine",
    "ValidationReport",
    "build_report",
    "build_schema",
    "check_choice_pairs",
    "check_correct_flags",
    "check_field_contents",
    "check_field_count",
    "iter_findings",
    "iter_lines",
    "validate_document",
    "validate_text",
]
