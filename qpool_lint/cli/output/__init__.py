"""
Output adapters for CLI.

Provides different output formats: terminal, JSON.
"""

from qpool_lint.cli.output.base import OutputAdapter, OutputFormat, get_output_adapter
from qpool_lint.cli.output.json import JsonOutput
from qpool_lint.cli.output.terminal import TerminalOutput

__all__ = [
    "JsonOutput",
    "OutputAdapter",
    "OutputFormat",
    "TerminalOutput",
    "get_output_adapter",
]
