"""Utility modules for gvt."""

from .fs import atomic_write, safe_json_load
from .env import get_home_dir, get_global_config_dir, get_project_root, is_debug_mode
from .log import log_debug, log_exception

__all__ = [
    "atomic_write",
    "safe_json_load",
    "get_home_dir",
    "get_global_config_dir",
    "get_project_root",
    "is_debug_mode",
    "log_debug",
    "log_exception",
]
