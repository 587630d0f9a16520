"""
Style models - template catalogs and harmonic preferences per genre.

Styles don't force specific progressions, they narrow what's appropriate:
which templates to draw from, how often to reach for chromatic chords,
how to approach the final cadence and which degrees to favour.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from chuk_mcp_fretboard.constants import CadenceStyle, Complexity
from chuk_mcp_fretboard.harmony.tokens import (
    DegreeToken,
    DiatonicToken,
    normalize_numeral,
    parse_token,
)

# Scales a style's chromatic chance by requested complexity
COMPLEXITY_CHROMATIC_SCALE: dict[Complexity, float] = {
    Complexity.SIMPLE: 0.3,
    Complexity.MODERATE: 1.0,
    Complexity.COMPLEX: 1.5,
}


class ProgressionTemplate(BaseModel):
    """
    A named chord pattern.

    `degrees` keeps the raw entries (0-6 or chord strings); `tokens` holds
    them parsed, filled in once at construction.
    """

    name: str = Field(..., description="Template name")
    degrees: tuple[int | str, ...] = Field(
        default=(),
        description="Raw template entries: 0-6 for I-VII or strings like 'V/ii', 'bVII'",
    )
    description: str = Field("", description="Human-readable description")
    tokens: tuple[DegreeToken, ...] = Field(default=(), description="Parsed entries")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _parse_degrees(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("tokens"):
            data = dict(data)
            data["tokens"] = tuple(parse_token(raw) for raw in data.get("degrees", ()))
        return data

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def first_tonic_index(self) -> int | None:
        """Position of the first tonic entry, if the template has one."""
        for i, token in enumerate(self.tokens):
            if isinstance(token, DiatonicToken) and token.index == 0:
                return i
        return None

    def fits(self, length: int) -> bool:
        """Whether the template can be used for a progression of `length` chords."""
        return 0 < len(self.tokens) <= length


class StyleConfig(BaseModel):
    """A genre's template catalog and harmonic preferences."""

    schema_version: str = Field("style/v1", alias="schema")
    key: str = Field(..., description="Style key used in API calls (e.g. 'jazz')")
    name: str = Field(..., description="Display name")
    description: str = Field("", description="Style description")
    templates: tuple[ProgressionTemplate, ...] = Field(default=())
    chromatic_chance: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Base probability of inserting a secondary dominant",
    )
    preferred_cadence: CadenceStyle = Field(default=CadenceStyle.AUTHENTIC)
    degree_preferences: dict[str, int] = Field(
        default_factory=dict,
        description="Score bonus per Roman numeral (e.g. {'vi': 8})",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def templates_fitting(self, length: int) -> list[ProgressionTemplate]:
        """Templates usable for a progression of `length` chords."""
        return [t for t in self.templates if t.fits(length)]

    def chromatic_chance_for(self, complexity: Complexity) -> float:
        """Chance of prepending a secondary dominant at a complexity level."""
        return self.chromatic_chance * COMPLEXITY_CHROMATIC_SCALE[complexity]

    def degree_bonus(self, numeral: str) -> int:
        """Preference bonus for moving to a chord with this numeral (case-insensitive)."""
        target = normalize_numeral(numeral)
        for key, bonus in self.degree_preferences.items():
            if normalize_numeral(key) == target:
                return bonus
        return 0

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert to YAML-serializable dictionary."""
        return {
            "schema": self.schema_version,
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "chromatic_chance": self.chromatic_chance,
            "preferred_cadence": self.preferred_cadence.value,
            "degree_preferences": dict(self.degree_preferences),
            "templates": [
                {
                    "name": t.name,
                    "degrees": list(t.degrees),
                    "description": t.description,
                }
                for t in self.templates
            ],
        }


class StyleMetadata(BaseModel):
    """Lightweight metadata for listing styles."""

    key: str
    name: str
    description: str
    template_count: int
    chromatic_chance: float
    preferred_cadence: CadenceStyle

    model_config = {"frozen": True}

    @classmethod
    def from_style(cls, style: StyleConfig) -> StyleMetadata:
        """Create metadata from a style."""
        return cls(
            key=style.key,
            name=style.name,
            description=style.description,
            template_count=len(style.templates),
            chromatic_chance=style.chromatic_chance,
            preferred_cadence=style.preferred_cadence,
        )
