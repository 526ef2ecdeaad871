"""Core modules for gvt."""

from .controller import GvtController
from .history import HistoryEntry, HistoryInspector, render_history
from .snapshot import copy_file, copy_tree, remove_file
from .tracking import FileTracker, TrackResult
from .version_store import VersionInfo, VersionStore

__all__ = [
    "GvtController",
    "HistoryEntry",
    "HistoryInspector",
    "render_history",
    "copy_file",
    "copy_tree",
    "remove_file",
    "FileTracker",
    "TrackResult",
    "VersionInfo",
    "VersionStore",
]
