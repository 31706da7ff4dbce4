"""Lexer for match snippets and C-family source text.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode, normalize_depths
├── core.py              # Lexer class (dispatch, navigation, depth fold)
├── modes.py             # LexerMode enum, operator and marker tables
└── scanners.py          # String literal and comment scanning

Usage:
    >>> from smartpatch.lexer import Lexer, LexerMode
    >>> [t.text for t in Lexer("x = 1; // set", LexerMode.SOURCE).tokenize()]
    ['x', '=', '1', ';']

"""

from smartpatch.lexer.core import Lexer, normalize_depths
from smartpatch.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode", "normalize_depths"]
