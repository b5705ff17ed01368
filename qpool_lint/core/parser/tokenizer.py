"""
CSV line tokenizer for question pool files.

Question pool files use plain RFC 4180 style CSV:
- Delimiter: comma (,)
- Quote character: double quote (")
- Escape: doubled quotes ("")

This module implements a single-pass state-machine tokenizer that never
aborts. Malformed quoting is reported as a TokenError and parsing continues,
so every line always yields a complete row.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from .errors import UNCLOSED_QUOTE, UNESCAPED_QUOTE
from .models import LineTokens, TokenError

if TYPE_CHECKING:
    from collections.abc import Sequence

DELIMITER = ","
QUOTECHAR = '"'


class TokenizerState(Enum):
    """State of the tokenizer state machine."""

    FIELD_START = auto()  # At start of a field
    IN_UNQUOTED = auto()  # Inside an unquoted field
    IN_QUOTED = auto()  # Inside a quoted field
    QUOTE_IN_QUOTED = auto()  # Just saw a quote inside a quoted field


def field_label(index: int, header: Sequence[str] | None) -> str:
    """
    Name a field for error messages.

    Args:
        index: 0-based field position
        header: Header names, if known

    Returns:
        The header name at that position, or '#<n>' with the 1-based index
    """
    if header is not None and index < len(header):
        name = header[index].strip()
        if name:
            return name
    return f"#{index + 1}"


def tokenize_line(line: str, header: Sequence[str] | None = None) -> LineTokens:
    """
    Tokenize a single line into fields.

    Note: The line must not contain its line terminator. Quoted fields cannot
    span lines; a line ending inside a quote is reported as unclosed.

    Args:
        line: The line to tokenize
        header: Header names used to label errors (None for the header line itself)

    Returns:
        LineTokens with values, quote flags, raw substrings and parse errors
    """
    values: list[str] = []
    quoted: list[bool] = []
    raw_fields: list[str] = []
    errors: list[TokenError] = []

    field_buffer: list[str] = []
    field_quoted = False
    field_start = 0
    state = TokenizerState.FIELD_START

    def end_field(end: int) -> None:
        nonlocal field_buffer, field_quoted, field_start
        values.append("".join(field_buffer))
        quoted.append(field_quoted)
        raw_fields.append(line[field_start:end])
        field_buffer = []
        field_quoted = False
        field_start = end + 1

    for i, char in enumerate(line):
        if state == TokenizerState.FIELD_START:
            if char == QUOTECHAR:
                field_quoted = True
                state = TokenizerState.IN_QUOTED
            elif char == DELIMITER:
                end_field(i)
            else:
                field_buffer.append(char)
                state = TokenizerState.IN_UNQUOTED

        elif state == TokenizerState.IN_UNQUOTED:
            if char == DELIMITER:
                end_field(i)
                state = TokenizerState.FIELD_START
            else:
                if char == QUOTECHAR:
                    field_no = len(values)
                    name = field_label(field_no, header)
                    errors.append(
                        TokenError(
                            field=field_no + 1,
                            error=f"[{name}] Unescaped quote found in unquoted field",
                            code=UNESCAPED_QUOTE,
                        )
                    )
                # Kept as an ordinary character, so the value also fails the
                # "must be quoted" check (see DESIGN.md, decision 2)
                field_buffer.append(char)

        elif state == TokenizerState.IN_QUOTED:
            if char == QUOTECHAR:
                state = TokenizerState.QUOTE_IN_QUOTED
            else:
                field_buffer.append(char)

        elif state == TokenizerState.QUOTE_IN_QUOTED:
            if char == QUOTECHAR:
                # Escaped quote
                field_buffer.append(QUOTECHAR)
                state = TokenizerState.IN_QUOTED
            elif char == DELIMITER:
                end_field(i)
                state = TokenizerState.FIELD_START
            else:
                # Quote closed, but there's more content
                field_buffer.append(char)
                state = TokenizerState.IN_UNQUOTED

    # End of line is the final field's sentinel
    if state == TokenizerState.IN_QUOTED:
        field_no = len(values)
        errors.append(
            TokenError(
                field=field_no + 1,
                error=f"[{field_label(field_no, header)}] Unclosed quoted field",
                code=UNCLOSED_QUOTE,
            )
        )
    end_field(len(line))

    return LineTokens(values=values, quoted=quoted, raw_fields=raw_fields, errors=errors)
