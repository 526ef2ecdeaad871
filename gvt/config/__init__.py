"""Configuration management for gvt."""

from .types import (
    DEFAULT_CONTROL_DIR,
    GvtConfig,
    HistoryConfig,
    MessageTemplates,
)
from .loader import ConfigLoader

__all__ = [
    "DEFAULT_CONTROL_DIR",
    "GvtConfig",
    "HistoryConfig",
    "MessageTemplates",
    "ConfigLoader",
]
