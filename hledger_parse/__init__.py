"""
hledger-parse: parser for the hledger plaintext accounting journal format.

A library (and a thin CLI) that turns journal text into an immutable record
tree of transaction entries, price declarations and comments. Amounts keep the
exact decimal layout the user typed.

Usage:
    from hledger_parse.core.parser import parse_all
    blocks = parse_all(text)
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
