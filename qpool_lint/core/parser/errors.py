"""
Error codes and exceptions.

Every finding produced by the validator carries a code from the
QPL-XXX-NNN taxonomy. Exceptions are only used by the outer layer
(file reading, configuration); malformed CSV content never raises.
"""

from __future__ import annotations

# =============================================================================
# Finding Codes Registry
# =============================================================================

# CSV errors (reported by the line tokenizer)
UNESCAPED_QUOTE = "QPL-CSV-001"
UNCLOSED_QUOTE = "QPL-CSV-002"

# Row errors
FIELD_COUNT_MISMATCH = "QPL-ROW-001"

# Field errors
MUST_BE_QUOTED = "QPL-FIELD-001"
BAD_QUOTE_ESCAPE = "QPL-FIELD-002"
FIELD_TOO_LONG = "QPL-FIELD-003"

# Question pool errors
INVALID_CORRECT_FLAG = "QPL-CORRECT-001"
NO_CORRECT_ANSWER = "QPL-CORRECT-002"
UNPAIRED_CHOICE = "QPL-PAIR-001"

FINDING_CODES: dict[str, str] = {
    UNESCAPED_QUOTE: "Unescaped quote found in unquoted field",
    UNCLOSED_QUOTE: "Line ended inside a quoted field",
    FIELD_COUNT_MISMATCH: "Row has a different number of fields than the header",
    MUST_BE_QUOTED: "Field containing comma, CR, LF, or double quote is not quoted",
    BAD_QUOTE_ESCAPE: "Quoted field has improperly escaped double quotes",
    FIELD_TOO_LONG: "Field exceeds maximum length",
    INVALID_CORRECT_FLAG: "correct<N> value is not TRUE, FALSE or empty",
    NO_CORRECT_ANSWER: "No correct<N> field in the row is TRUE",
    UNPAIRED_CHOICE: "choice<N> and correct<N> must both be filled or both be empty",
}

FINDING_DETAILS: dict[str, str] = {
    UNESCAPED_QUOTE: (
        "A double quote appeared inside a field that did not start with a quote. "
        "Quote the whole field and double the inner quote: \"say \"\"hi\"\"\"."
    ),
    UNCLOSED_QUOTE: (
        "The line ended while a quoted field was still open. "
        "Close the field with a matching double quote."
    ),
    FIELD_COUNT_MISMATCH: (
        "Every row must have as many fields as the header line. "
        "Check for missing or extra commas, or commas that should be quoted."
    ),
    MUST_BE_QUOTED: (
        "Fields containing a comma, carriage return, line feed or double quote "
        "must be wrapped in double quotes."
    ),
    BAD_QUOTE_ESCAPE: (
        "A quoted field contains a lone doubled quote sequence after unescaping. "
        "Each literal quote must be written as two double quotes."
    ),
    FIELD_TOO_LONG: "Field values may not exceed the configured maximum length (default 1000).",
    INVALID_CORRECT_FLAG: "Each correct<N> column accepts only TRUE, FALSE or an empty value.",
    NO_CORRECT_ANSWER: "Every question needs at least one correct<N> column set to TRUE.",
    UNPAIRED_CHOICE: (
        "A choice<N> with text needs a TRUE/FALSE value in correct<N>, "
        "and a filled correct<N> needs text in choice<N>."
    ),
}


def get_code_title(code: str) -> str | None:
    """Get the short title for a finding code."""
    return FINDING_CODES.get(code)


def get_code_details(code: str) -> str | None:
    """Get the long description for a finding code."""
    return FINDING_DETAILS.get(code)


# =============================================================================
# Exceptions
# =============================================================================


class QpoolLintError(Exception):
    """Base class for qpool-lint errors outside the validator core."""


class DocumentTooLargeError(QpoolLintError):
    """Input exceeds the configured size limit."""

    def __init__(self, source: str, max_bytes: int, size: int | None = None) -> None:
        self.source = source
        self.max_bytes = max_bytes
        self.size = size
        super().__init__(f"{source} exceeds maximum size of {max_bytes} bytes")


class ConfigError(QpoolLintError):
    """Configuration could not be loaded or is invalid."""
