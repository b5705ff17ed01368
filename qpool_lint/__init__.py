"""
qpool-lint: question pool CSV validator and linter.

A library and CLI tool for validating question pool CSV files.
Detects quoting problems, schema violations, and inconsistent
choice/correct columns, reporting every defect instead of stopping at the first.

Usage:
    from qpool_lint.core.rules import validate_text
    findings = validate_text(open("pool.csv", encoding="utf-8").read())
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
