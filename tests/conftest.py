"""
Pytest configuration and fixtures for qpool-lint tests.

Provides fixtures for:
- Golden test files (question pool samples)
- Generated documents
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator

# =============================================================================
# Path Fixtures
# =============================================================================

FIXTURES_DIR = Path(__file__).parent / "fixtures"
GOLDEN_DIR = FIXTURES_DIR / "golden"


@pytest.fixture
def golden_dir() -> Path:
    """Return the golden files directory path."""
    return GOLDEN_DIR


# =============================================================================
# Golden File Fixtures
# =============================================================================


@pytest.fixture
def valid_pool(golden_dir: Path) -> Path:
    """Clean question pool with three questions."""
    return golden_dir / "valid_pool.csv"


@pytest.fixture
def broken_pool(golden_dir: Path) -> Path:
    """Question pool with quoting, field count and choice/correct errors (CRLF, blank line)."""
    return golden_dir / "broken_pool.csv"


@pytest.fixture
def encoding_utf8_bom(golden_dir: Path) -> Path:
    """UTF-8 with BOM encoded file."""
    return golden_dir / "encoding_utf8_bom.csv"


@pytest.fixture
def encoding_windows1252(golden_dir: Path) -> Path:
    """Windows-1252 encoded pool whose questions contain non-ASCII letters (ü, ß, ä)."""
    return golden_dir / "encoding_windows1252.csv"


# =============================================================================
# Generated Documents
# =============================================================================


@pytest.fixture(scope="session")
def large_pool(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Path]:
    """Generate a clean 5k question pool file."""
    tmp_dir = tmp_path_factory.mktemp("generated")
    file_path = tmp_dir / "large_pool.csv"

    _generate_pool_file(file_path, num_rows=5_000)

    yield file_path


def _generate_pool_file(path: Path, num_rows: int) -> None:
    """Create a valid question pool with four choices per question."""
    lines = ["id,question,choice1,correct1,choice2,correct2,choice3,correct3,choice4,correct4"]

    for i in range(1, num_rows + 1):
        right = i % 4
        flags = ["TRUE" if n == right else "FALSE" for n in range(4)]
        lines.append(
            f'{i},"Question {i}, part {i % 7}?",'
            f"a{i},{flags[0]},b{i},{flags[1]},c{i},{flags[2]},d{i},{flags[3]}"
        )

    content = "\r\n".join(lines) + "\r\n"
    path.write_bytes(content.encode("utf-8"))
