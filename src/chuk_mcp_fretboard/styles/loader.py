"""
Style loader - discovers and loads genre style definitions.

Styles can come from:
1. Built-in library (shipped with package)
2. Project styles (user's project/styles directory)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_fretboard.models.style import StyleConfig, StyleMetadata

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "pop"


class StyleLoader:
    """
    Discovers and loads style definitions.

    Styles are loaded from YAML files in the library and project directories.
    Project styles override library styles with the same key.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the style loader.

        Args:
            library_path: Path to built-in style library
            project_path: Path to project styles directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, StyleConfig] = {}

    def list_styles(self) -> list[StyleMetadata]:
        """
        List all available styles, sorted by key.

        Project styles take precedence over library styles.
        """
        styles: dict[str, StyleMetadata] = {}

        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                style = self._load_style_file(path)
                if style:
                    styles[style.key] = StyleMetadata.from_style(style)

        return [styles[key] for key in sorted(styles)]

    def get_style(self, key: str) -> StyleConfig | None:
        """
        Get a style by key.

        Args:
            key: Style key (e.g. 'jazz')

        Returns:
            StyleConfig if found, None otherwise
        """
        if key in self._cache:
            return self._cache[key]

        candidates: list[Path] = []
        if self.project_path:
            candidates.append(self.project_path / f"{key}.yaml")
        candidates.append(self.library_path / f"{key}.yaml")

        for path in candidates:
            if path.exists():
                style = self._load_style_file(path)
                if style:
                    self._cache[key] = style
                    return style

        return None

    def get_style_or_default(self, key: str | None) -> StyleConfig:
        """
        Get a style, falling back to the default style for unknown keys.

        Raises:
            LookupError: If neither the style nor the default can be loaded
        """
        if key:
            style = self.get_style(key)
            if style:
                return style
            logger.warning("Unknown style %r, falling back to %r", key, DEFAULT_STYLE)

        style = self.get_style(DEFAULT_STYLE)
        if style is None:
            raise LookupError(f"Default style '{DEFAULT_STYLE}' not found in {self.library_path}")
        return style

    def _load_style_file(self, path: Path) -> StyleConfig | None:
        """Load a style from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            return self._parse_style(data, default_key=path.stem)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            logger.warning("Skipping style file %s: %s", path, e)
            return None

    def _parse_style(self, data: dict[str, Any], default_key: str) -> StyleConfig:
        """Parse style from YAML data."""
        if not isinstance(data, dict):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        data = dict(data)
        data.setdefault("key", default_key)
        data.setdefault("name", data["key"].title())
        return StyleConfig.model_validate(data)

    def clear_cache(self) -> None:
        """Clear the style cache."""
        self._cache.clear()
