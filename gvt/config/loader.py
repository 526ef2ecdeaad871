"""Configuration loader for gvt.

Handles loading and merging configuration from multiple sources.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..utils.env import get_global_config_dir
from ..utils.fs import safe_json_load
from ..utils.log import log_debug
from .types import GvtConfig


PROJECT_CONFIG_NAME = ".gvt.json"


class ConfigLoader:
    """Loads and manages gvt configuration."""

    def __init__(self, project_root: Path | None = None):
        """Initialize config loader.

        Args:
            project_root: Working directory (for project-local config)
        """
        self.project_root = project_root
        self._config: GvtConfig | None = None

    @property
    def config(self) -> GvtConfig:
        """Get loaded configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> GvtConfig:
        """Load configuration from all sources.

        Priority (highest to lowest):
        1. Project-local config (<root>/.gvt.json)
        2. Global config (~/.config/gvt/config.json)
        3. Default values

        Returns:
            Merged GvtConfig
        """
        merged: dict[str, Any] = {}

        global_config_path = self.global_config_path()
        if global_config_path.exists():
            log_debug(f"Loading config: {global_config_path}")
            merged = self._deep_merge(merged, self._read(global_config_path))

        if self.project_root:
            project_config_path = self.project_root / PROJECT_CONFIG_NAME
            if project_config_path.exists():
                log_debug(f"Loading config: {project_config_path}")
                merged = self._deep_merge(merged, self._read(project_config_path))

        return GvtConfig.from_dict(merged)

    def reload(self) -> GvtConfig:
        """Force reload configuration."""
        self._config = None
        return self.config

    @staticmethod
    def global_config_path() -> Path:
        return get_global_config_dir() / "config.json"

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        data = safe_json_load(path, {})
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Dictionary to merge (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
