"""
Style system - genre catalogs that narrow the progression space.

Styles don't force specific choices, they narrow what's appropriate.
"""

from chuk_mcp_fretboard.styles.loader import DEFAULT_STYLE, StyleLoader

__all__ = [
    "DEFAULT_STYLE",
    "StyleLoader",
]
