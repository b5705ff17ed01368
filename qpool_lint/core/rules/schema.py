"""
Header schema for question pool files.

Derives the expected field count and the choice<N>/correct<N> column map
from the header line. The schema is built once per document.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from qpool_lint.core.parser.tokenizer import field_label

if TYPE_CHECKING:
    from collections.abc import Sequence

CHOICE_PATTERN = re.compile(r"^choice(\d+)$", re.IGNORECASE)
CORRECT_PATTERN = re.compile(r"^correct(\d+)$", re.IGNORECASE)


class QuestionPoolSchema(BaseModel, frozen=True):
    """
    Schema derived from the header line.

    choice_columns and correct_columns map the numeric suffix N to the
    0-based index of the choice<N> / correct<N> column. Either side may
    have numbers the other lacks.
    """

    header: list[str] = Field(description="Header field values")
    field_count: int = Field(ge=1, description="Expected number of fields per row")
    choice_columns: dict[int, int] = Field(default_factory=dict)
    correct_columns: dict[int, int] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def field_name(self, index: int) -> str:
        """Name of the 0-based field, or '#<n>' beyond the header."""
        return field_label(index, self.header)

    @property
    def has_correct_columns(self) -> bool:
        """Check if the header has any correct<N> column."""
        return bool(self.correct_columns)

    @property
    def pair_numbers(self) -> list[int]:
        """Suffixes N that have both a choice<N> and a correct<N> column."""
        return sorted(self.choice_columns.keys() & self.correct_columns.keys())


def build_schema(header: Sequence[str]) -> QuestionPoolSchema:
    """
    Build the schema from header field values.

    Header names are matched case-insensitively after trimming. When a name
    repeats, the first column wins.
    """
    choice_columns: dict[int, int] = {}
    correct_columns: dict[int, int] = {}

    for index, name in enumerate(header):
        label = name.strip()

        match = CHOICE_PATTERN.match(label)
        if match:
            choice_columns.setdefault(int(match.group(1)), index)
            continue

        match = CORRECT_PATTERN.match(label)
        if match:
            correct_columns.setdefault(int(match.group(1)), index)

    return QuestionPoolSchema(
        header=list(header),
        field_count=len(header),
        choice_columns=choice_columns,
        correct_columns=correct_columns,
    )
