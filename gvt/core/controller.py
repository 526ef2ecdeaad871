"""gvt controller - main orchestrator.

Builds the version store and engines for one invocation from configuration
and exposes one method per user-facing operation.
"""

from __future__ import annotations

from pathlib import Path

from ..config import ConfigLoader, GvtConfig
from ..utils.log import log_debug
from .history import HistoryEntry, HistoryInspector
from .tracking import FileTracker, TrackResult
from .version_store import VersionInfo, VersionStore


class GvtController:
    """Main controller for gvt operations."""

    def __init__(self, project_root: Path | str | None = None, config: GvtConfig | None = None):
        """Initialize controller.

        Args:
            project_root: Working directory (defaults to cwd)
            config: Explicit configuration; loaded from disk when omitted
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._config_loader = ConfigLoader(project_root=self.project_root)
        self._config = config
        self._store: VersionStore | None = None
        self._tracker: FileTracker | None = None
        self._inspector: HistoryInspector | None = None

    @property
    def config(self) -> GvtConfig:
        """Get current configuration."""
        if self._config is None:
            self._config = self._config_loader.config
        return self._config

    @property
    def store(self) -> VersionStore:
        """Get version store (lazy init)."""
        if self._store is None:
            self._store = VersionStore(self.project_root, control_dir=self.config.control_dir)
            log_debug(f"Repository: {self._store.control_dir}")
        return self._store

    @property
    def tracker(self) -> FileTracker:
        if self._tracker is None:
            self._tracker = FileTracker(self.store, messages=self.config.messages)
        return self._tracker

    @property
    def inspector(self) -> HistoryInspector:
        if self._inspector is None:
            self._inspector = HistoryInspector(self.store)
        return self._inspector

    def is_initialized(self) -> bool:
        return self.store.is_initialized()

    def init(self) -> None:
        self.store.initialize()

    def add(self, file_name: str, message: str | None = None) -> TrackResult:
        return self.tracker.track(file_name, message)

    def detach(self, file_name: str, message: str | None = None) -> TrackResult:
        return self.tracker.untrack(file_name, message)

    def commit(self, file_name: str, message: str | None = None) -> TrackResult:
        return self.tracker.record(file_name, message)

    def checkout(self, version_id: int | str | None) -> int:
        return self.inspector.checkout(version_id)

    def history(self, limit: int | None = None) -> list[HistoryEntry]:
        """List versions newest first; falls back to ``history.defaultLimit``."""
        if limit is None:
            limit = self.config.history.default_limit
        return self.inspector.history(limit)

    def version(self, version_id: int | str | None = None) -> VersionInfo:
        return self.inspector.show_version(version_id)
