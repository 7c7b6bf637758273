"""
hledger-parse core library.

This package contains the core functionality:
- parser: journal grammar and record tree
"""

__all__: list[str] = []
