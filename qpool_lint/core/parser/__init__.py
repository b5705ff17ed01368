"""
Question pool parser.

Public API for reading and tokenizing question pool CSV files.

Usage:
    from qpool_lint.core.parser import read_file, tokenize_line

    document = read_file("pool.csv")
    for line in document.text.splitlines():
        tokens = tokenize_line(line)
        print(tokens.values)

API Functions:
    read_file(path) -> DecodedDocument
    read_bytes(data, source) -> DecodedDocument
    tokenize_line(line, header) -> LineTokens
    detect_encoding(data) -> str
"""

from __future__ import annotations

import logging
from pathlib import Path

from .encoding import decode_with_fallback, detect_encoding
from .errors import ConfigError, DocumentTooLargeError, QpoolLintError
from .models import DecodedDocument, Finding, LineTokens, TokenError
from .tokenizer import field_label, tokenize_line

logger = logging.getLogger(__name__)


def read_file(path: Path | str, *, max_bytes: int | None = None) -> DecodedDocument:
    """
    Read and decode a question pool file.

    Args:
        path: Path to the CSV file
        max_bytes: Maximum bytes to read (None or <= 0 = unlimited)

    Returns:
        DecodedDocument with the full text

    Raises:
        FileNotFoundError: If file does not exist
        DocumentTooLargeError: If the file exceeds max_bytes
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if max_bytes is not None and max_bytes > 0:
        with path.open("rb") as f:
            data = f.read(max_bytes + 1)
        if len(data) > max_bytes:
            file_size: int | None
            try:
                file_size = path.stat().st_size
            except OSError:
                file_size = None
            raise DocumentTooLargeError(str(path), max_bytes, file_size)
    else:
        data = path.read_bytes()

    return read_bytes(data, path)


def read_bytes(
    data: bytes, source: Path | str | None = None, *, max_bytes: int | None = None
) -> DecodedDocument:
    """
    Decode question pool data from bytes.

    Args:
        data: Raw file content
        source: Optional path used for display and error messages
        max_bytes: Maximum accepted size (None or <= 0 = unlimited)

    Returns:
        DecodedDocument with the full text

    Raises:
        DocumentTooLargeError: If data exceeds max_bytes
    """
    path = Path(source) if source is not None else None

    if max_bytes is not None and max_bytes > 0 and len(data) > max_bytes:
        raise DocumentTooLargeError(str(path or "<bytes>"), max_bytes, len(data))

    encoding = detect_encoding(data)
    logger.debug("Detected encoding %s for %s", encoding, path or "<bytes>")

    text = decode_with_fallback(data, encoding)
    return DecodedDocument(path=path, text=text, encoding=encoding, size=len(data))


# =============================================================================
# Public API Exports
# =============================================================================

__all__ = [
    "ConfigError",
    "DecodedDocument",
    "DocumentTooLargeError",
    "Finding",
    "LineTokens",
    "QpoolLintError",
    "TokenError",
    "decode_with_fallback",
    "detect_encoding",
    "field_label",
    "read_bytes",
    "read_file",
    "tokenize_line",
]
