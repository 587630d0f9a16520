"""
Session - the key, scale and neck a caller is working in.

There is no ambient "current scale": a Session is an immutable value that
callers pass around. Changing any part produces a new Session.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_fretboard.constants import (
    DEFAULT_MAX_FRET,
    DEFAULT_TUNING,
    TUNINGS,
    DisplayMode,
)
from chuk_mcp_fretboard.core.fretboard import FretPosition, get_fretboard_positions
from chuk_mcp_fretboard.core.pitch import interval_name, is_valid_note
from chuk_mcp_fretboard.core.scale import SCALE_PATTERNS, Scale, generate_scale


class Session(BaseModel):
    """Selected root, scale type, display mode and neck."""

    root: str = Field("C", description="Root note")
    scale_type: str = Field("major", description="Scale key from the catalog")
    display_mode: DisplayMode = Field(DisplayMode.NOTES, description="What markers show")
    tuning: str = Field(DEFAULT_TUNING, description="Tuning name")
    max_fret: int = Field(DEFAULT_MAX_FRET, ge=0, le=DEFAULT_MAX_FRET)

    model_config = {"frozen": True}

    @field_validator("root")
    @classmethod
    def _check_root(cls, v: str) -> str:
        if not is_valid_note(v):
            raise ValueError(f"Invalid note: '{v}'")
        return v

    @field_validator("scale_type")
    @classmethod
    def _check_scale_type(cls, v: str) -> str:
        if v not in SCALE_PATTERNS:
            raise ValueError(f"Scale type '{v}' not found")
        return v

    @field_validator("tuning")
    @classmethod
    def _check_tuning(cls, v: str) -> str:
        if v not in TUNINGS:
            raise ValueError(f"Tuning '{v}' not found")
        return v

    def with_root(self, root: str) -> Session:
        """New session in another key."""
        return Session.model_validate({**self.model_dump(), "root": root})

    def with_scale_type(self, scale_type: str) -> Session:
        """New session with another scale type."""
        return Session.model_validate({**self.model_dump(), "scale_type": scale_type})

    def with_display_mode(self, display_mode: DisplayMode) -> Session:
        """New session showing markers differently."""
        return self.model_copy(update={"display_mode": display_mode})

    def scale(self) -> Scale:
        """The scale for this session."""
        scale = generate_scale(self.root, self.scale_type)
        if scale is None:
            raise ValueError(f"Cannot build {self.scale_type} scale on {self.root}")
        return scale

    def positions(self) -> list[FretPosition]:
        """Scale positions on this session's neck."""
        return get_fretboard_positions(self.scale(), TUNINGS[self.tuning], self.max_fret)

    def marker_label(self, position: FretPosition) -> str:
        """Text shown on a fretboard marker for the current display mode."""
        if self.display_mode == DisplayMode.DEGREES:
            return position.degree
        if self.display_mode == DisplayMode.INTERVALS:
            return interval_name(position.interval)
        return position.note
