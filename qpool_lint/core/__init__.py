"""
qpool-lint core library.

This package contains the core functionality:
- parser: document reading, encoding detection and line tokenizing
- rules: schema derivation and document validation
- config: validator configuration
"""

__all__: list[str] = []
