"""Environment utilities for gvt."""

from __future__ import annotations

import os
from pathlib import Path


def is_debug_mode() -> bool:
    """Check if debug mode is enabled.

    Returns:
        True if GVT_DEBUG is set to a truthy value
    """
    val = os.environ.get("GVT_DEBUG", "").lower()
    return val in ("1", "true", "yes", "on")


def get_home_dir() -> Path:
    """Get user home directory.

    Returns:
        Path to home directory
    """
    return Path.home()


def get_global_config_dir() -> Path:
    """Get global gvt config directory (~/.config/gvt).

    Returns:
        Path to global config directory
    """
    return get_home_dir() / ".config" / "gvt"


def get_project_root() -> Path:
    """Resolve the working directory gvt operates on.

    GVT_PROJECT_ROOT wins over the process cwd.
    """
    val = os.environ.get("GVT_PROJECT_ROOT")
    if isinstance(val, str) and val.strip():
        return Path(val.strip()).expanduser()
    return Path.cwd()
