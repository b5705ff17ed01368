"""
CLI for qpool-lint.

Command-line interface for validating question pool files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from qpool_lint.cli.context import ExitCode

if TYPE_CHECKING:
    from typer import Typer

    app: Typer


def __getattr__(name: str) -> Any:
    if name == "app":
        from qpool_lint.cli.main import app as _app

        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ExitCode",
    "app",
]
