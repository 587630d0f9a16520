"""
Pydantic models for the fretboard system.

This module provides:
- StyleConfig: Genre template catalog and harmonic preferences
- ProgressionTemplate: Named chord pattern with parsed tokens
- StyleMetadata: Listing summary of a style
- Session: Selected key, scale and neck
"""

from chuk_mcp_fretboard.models.session import Session
from chuk_mcp_fretboard.models.style import (
    ProgressionTemplate,
    StyleConfig,
    StyleMetadata,
)

__all__ = [
    "ProgressionTemplate",
    "Session",
    "StyleConfig",
    "StyleMetadata",
]
