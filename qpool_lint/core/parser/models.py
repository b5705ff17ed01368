"""
Parser data models.

Core data models for question pool parsing.

DESIGN DECISIONS:
- Field indexes in errors and findings are 1-based; 0 means "the whole row"
- LineTokens keeps resolved values and raw substrings side by side
- All models are frozen (immutable)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# =============================================================================
# Tokenizer Models
# =============================================================================


class TokenError(BaseModel, frozen=True):
    """Soft parse error reported by the line tokenizer."""

    field: int = Field(ge=1, description="1-based index of the offending field")
    error: str = Field(description="Human-readable message, prefixed with the field name")
    code: str = Field(pattern=r"^QPL-[A-Z]{2,7}-\d{3}$")

    model_config = {"frozen": True}


class LineTokens(BaseModel, frozen=True):
    """
    Result of tokenizing a single line.

    values, quoted and raw_fields are parallel lists with one entry per field.
    The tokenizer never fails; anomalies are listed in errors.
    """

    values: list[str] = Field(description="Field values with quoting resolved")
    quoted: list[bool] = Field(description="Whether each field was opened with a quote")
    raw_fields: list[str] = Field(
        description="Raw field substrings, quotes and escaping intact",
    )
    errors: list[TokenError] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def field_count(self) -> int:
        """Number of fields in the line."""
        return len(self.values)

    @property
    def has_errors(self) -> bool:
        """Check if the tokenizer reported any parse errors."""
        return bool(self.errors)


# =============================================================================
# Finding Model
# =============================================================================


class Finding(BaseModel, frozen=True):
    """
    A single reported defect.

    field is the 1-based field index, or 0 for row-level findings.
    """

    line: int = Field(ge=1, description="1-based physical line number")
    field: int = Field(ge=0, description="1-based field index, 0 for the whole row")
    error: str = Field(description="Human-readable message")
    code: str = Field(
        pattern=r"^QPL-[A-Z]{2,7}-\d{3}$",
        description="Finding code, e.g. 'QPL-FIELD-003'",
    )

    model_config = {"frozen": True}

    @property
    def is_row_level(self) -> bool:
        """Check if the finding concerns the row as a whole."""
        return self.field == 0

    def __str__(self) -> str:
        """Format finding for display."""
        return f"line {self.line}, field {self.field}: {self.error} [{self.code}]"


# =============================================================================
# Document Model
# =============================================================================


class DecodedDocument(BaseModel, frozen=True):
    """Document text read from disk or bytes."""

    path: Path | None = None
    text: str
    encoding: str
    size: int = Field(ge=0, description="Size of the raw input in bytes")

    model_config = {"frozen": True}

    @property
    def name(self) -> str:
        """Display name for output."""
        return str(self.path) if self.path is not None else "<bytes>"
