"""
Row checks.

Each check takes one tokenized line and returns its findings in order.
Checks are independent: none of them depends on another having passed.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from qpool_lint.core.parser.errors import (
    BAD_QUOTE_ESCAPE,
    FIELD_COUNT_MISMATCH,
    FIELD_TOO_LONG,
    INVALID_CORRECT_FLAG,
    MUST_BE_QUOTED,
    NO_CORRECT_ANSWER,
    UNPAIRED_CHOICE,
)
from qpool_lint.core.parser.models import Finding, LineTokens

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .schema import QuestionPoolSchema

# Characters that force a field to be quoted
SPECIAL_CHARS = (",", "\r", "\n", '"')

# A lone doubled quote left in an already unescaped value
BAD_ESCAPE_PATTERN = re.compile(r'(^|[^"])""(?!")')

CORRECT_VALUES = ("", "TRUE", "FALSE")


def _cell(values: Sequence[str], index: int) -> str:
    """Value at a 0-based index, empty for short rows."""
    return values[index] if index < len(values) else ""


def _is_blank(value: str) -> bool:
    return value.strip() == ""


def check_field_count(tokens: LineTokens, schema: QuestionPoolSchema, line_no: int) -> list[Finding]:
    """Row must have as many fields as the header."""
    if tokens.field_count == schema.field_count:
        return []
    return [
        Finding(
            line=line_no,
            field=0,
            error=(
                f"[Row] Inconsistent number of fields: "
                f"expected {schema.field_count}, got {tokens.field_count}"
            ),
            code=FIELD_COUNT_MISMATCH,
        )
    ]


def check_field_contents(
    tokens: LineTokens,
    schema: QuestionPoolSchema,
    line_no: int,
    max_field_length: int,
) -> list[Finding]:
    """Quoting, escaping and length rules for every field of a line."""
    findings: list[Finding] = []

    for index, (value, quoted) in enumerate(zip(tokens.values, tokens.quoted)):
        name = schema.field_name(index)

        if not quoted and any(c in value for c in SPECIAL_CHARS):
            findings.append(
                Finding(
                    line=line_no,
                    field=index + 1,
                    error=f"[{name}] Field containing comma, CR, LF, or double quote must be quoted",
                    code=MUST_BE_QUOTED,
                )
            )

        if quoted and BAD_ESCAPE_PATTERN.search(value):
            findings.append(
                Finding(
                    line=line_no,
                    field=index + 1,
                    error=f"[{name}] Field has improperly escaped double quotes",
                    code=BAD_QUOTE_ESCAPE,
                )
            )

        if len(value) > max_field_length:
            findings.append(
                Finding(
                    line=line_no,
                    field=index + 1,
                    error=(
                        f"[{name}] Field exceeds maximum length of {max_field_length} "
                        f"characters (actual: {len(value)})"
                    ),
                    code=FIELD_TOO_LONG,
                )
            )

    return findings


def has_unanswered_choice(values: Sequence[str], schema: QuestionPoolSchema) -> bool:
    """Check if some filled choice<N> has an empty correct<N>."""
    return any(
        not _is_blank(_cell(values, schema.choice_columns[n]))
        and _is_blank(_cell(values, schema.correct_columns[n]))
        for n in schema.pair_numbers
    )


def check_correct_flags(
    values: Sequence[str], schema: QuestionPoolSchema, line_no: int
) -> list[Finding]:
    """
    correct<N> values must be TRUE, FALSE or empty, and at least one must be TRUE.

    The row-level "no TRUE" finding is left out when a filled choice<N> has an
    empty correct<N>: the row is already reported by the pairing check.
    """
    if not schema.has_correct_columns:
        return []

    findings: list[Finding] = []
    has_true = False

    for index in sorted(schema.correct_columns.values()):
        flag = _cell(values, index).strip().upper()
        if flag not in CORRECT_VALUES:
            findings.append(
                Finding(
                    line=line_no,
                    field=index + 1,
                    error=f"[{schema.field_name(index)}] Value must be either TRUE or FALSE",
                    code=INVALID_CORRECT_FLAG,
                )
            )
        if flag == "TRUE":
            has_true = True

    if not has_true and not has_unanswered_choice(values, schema):
        findings.append(
            Finding(
                line=line_no,
                field=0,
                error="[Row] At least one correct field must be TRUE",
                code=NO_CORRECT_ANSWER,
            )
        )

    return findings


def check_choice_pairs(
    values: Sequence[str], schema: QuestionPoolSchema, line_no: int
) -> list[Finding]:
    """choice<N> and correct<N> must be both filled or both empty."""
    findings: list[Finding] = []

    for number in schema.pair_numbers:
        choice_index = schema.choice_columns[number]
        correct_index = schema.correct_columns[number]
        choice_blank = _is_blank(_cell(values, choice_index))
        correct_blank = _is_blank(_cell(values, correct_index))

        if choice_blank == correct_blank:
            continue

        # Report against the empty side, naming the filled one
        missing, present = (
            (correct_index, choice_index) if correct_blank else (choice_index, correct_index)
        )
        missing_name = schema.field_name(missing)
        present_name = schema.field_name(present)
        findings.append(
            Finding(
                line=line_no,
                field=missing + 1,
                error=(
                    f"[{missing_name}] {missing_name} must not be empty "
                    f"when {present_name} is not empty"
                ),
                code=UNPAIRED_CHOICE,
            )
        )

    return findings


def parse_error_findings(tokens: LineTokens, line_no: int) -> list[Finding]:
    """Convert tokenizer parse errors into findings."""
    return [
        Finding(line=line_no, field=e.field, error=e.error, code=e.code) for e in tokens.errors
    ]
