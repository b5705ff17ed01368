"""
Encoding detection for question pool files.

Question pools are usually exported from spreadsheets or learning platforms as:
- UTF-8 with BOM (Excel "CSV UTF-8")
- UTF-8 without BOM
- UTF-16 (Excel "Unicode text" saved as .csv)
- Windows-1252 (older Excel exports)

An explicit byte order mark wins; everything else goes through
charset-normalizer. Decoding never fails and never leaves a BOM in front of
the header line.
"""

from __future__ import annotations

from charset_normalizer import from_bytes

DETECTION_SAMPLE_SIZE = 8192

BOM_ENCODINGS: tuple[tuple[bytes, str], ...] = (
    (b"\xef\xbb\xbf", "utf-8-sig"),
    (b"\xff\xfe", "utf-16"),
    (b"\xfe\xff", "utf-16"),
)

UTF8_NAMES = frozenset({"ascii", "utf-8", "utf8", "utf_8"})
CP1252_NAMES = frozenset({"cp1252", "windows-1252", "latin-1", "latin_1", "iso-8859-1"})


def _canonical(encoding: str) -> str:
    """Collapse the names charset-normalizer reports for the common pool encodings."""
    name = encoding.lower()
    if name in UTF8_NAMES:
        return "utf-8"
    if name in CP1252_NAMES:
        return "windows-1252"
    return name


def detect_encoding(data: bytes) -> str:
    """
    Detect encoding of question pool data.

    Args:
        data: File content (only the first ~8KB is inspected)

    Returns:
        Encoding name, e.g. "utf-8-sig", "utf-8", "utf-16" or "windows-1252"
    """
    for bom, encoding in BOM_ENCODINGS:
        if data.startswith(bom):
            return encoding

    sample = data[:DETECTION_SAMPLE_SIZE]
    best = from_bytes(sample).best()
    if best is not None:
        return _canonical(best.encoding)

    # Undecidable sample (empty or binary noise)
    try:
        sample.decode("utf-8")
    except UnicodeDecodeError:
        return "windows-1252"
    return "utf-8"


def decode_with_fallback(data: bytes, encoding: str) -> str:
    """
    Decode pool data, replacing invalid sequences and dropping a leading BOM.

    A BOM can survive decoding when detection settled on a codec without
    signature handling (e.g. "utf-8" for a sample charset-normalizer saw
    past the marker), so it is stripped here as well.

    Args:
        data: Bytes to decode
        encoding: Target encoding

    Returns:
        Decoded text, with U+FFFD for undecodable bytes
    """
    text = data.decode(encoding, errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]
    return text
