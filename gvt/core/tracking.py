"""File tracking for gvt.

Every mutation has the same shape: read the latest version, decide, copy the
latest version forward into a new one, apply exactly one change, commit.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Callable

from ..config.types import MessageTemplates
from ..errors import FileMissing
from ..utils.log import log_debug
from .snapshot import copy_file, copy_tree, remove_file
from .version_store import VersionStore


@dataclass
class TrackResult:
    """Result of a track, untrack or record operation."""
    changed: bool
    file_name: str
    version: int | None = None
    detail: str = ""


class FileTracker:
    """Implements the per-file lifecycle on top of a VersionStore."""

    def __init__(self, store: VersionStore, messages: MessageTemplates | None = None):
        self.store = store
        self.messages = messages or MessageTemplates()

    def track(self, file_name: str, message: str | None = None) -> TrackResult:
        """Start tracking a file.

        Args:
            file_name: Path relative to the working directory
            message: Version message; a default naming the file otherwise

        Returns:
            TrackResult; ``changed`` is False when the file was already tracked

        Raises:
            FileMissing: If the file is not in the working directory
            StorageFailure: If the new version cannot be written
        """
        rel, source = self._require_source(file_name)

        if self.store.is_tracked(rel):
            return TrackResult(
                changed=False,
                file_name=file_name,
                detail=f"File already added. File: {file_name}",
            )

        version = self._copy_forward(
            self._message("add", file_name, message),
            lambda version_dir: copy_file(source, version_dir, rel),
        )
        return TrackResult(
            changed=True,
            file_name=file_name,
            version=version,
            detail=f"File added successfully. File: {file_name}",
        )

    def untrack(self, file_name: str, message: str | None = None) -> TrackResult:
        """Stop tracking a file.

        The working directory copy is left alone; only the new version drops it.
        """
        rel = self._relative(file_name)

        if rel is None or not self.store.is_tracked(rel):
            return self._not_tracked(file_name)

        version = self._copy_forward(
            self._message("detach", file_name, message),
            lambda version_dir: remove_file(version_dir, rel),
        )
        return TrackResult(
            changed=True,
            file_name=file_name,
            version=version,
            detail=f"File detached successfully. File: {file_name}",
        )

    def record(self, file_name: str, message: str | None = None) -> TrackResult:
        """Capture the current bytes of an already tracked file in a new version.

        Raises:
            FileMissing: If the file is not in the working directory
            StorageFailure: If the new version cannot be written
        """
        rel, source = self._require_source(file_name)

        if not self.store.is_tracked(rel):
            return self._not_tracked(file_name)

        version = self._copy_forward(
            self._message("commit", file_name, message),
            lambda version_dir: copy_file(source, version_dir, rel),
        )
        return TrackResult(
            changed=True,
            file_name=file_name,
            version=version,
            detail=f"File committed successfully. File: {file_name}",
        )

    def _copy_forward(self, message: str, change: Callable[[Path], object]) -> int:
        parent = self.store.latest()
        parent_dir = self.store.version_dir(parent)

        def populate(version_dir: Path) -> None:
            copied = copy_tree(parent_dir, version_dir, exclude=self.store.message_name)
            log_debug(f"Copied {copied} files forward from version {parent}")
            change(version_dir)

        return self.store.create_version(message, populate)

    def _message(self, operation: str, file_name: str, message: str | None) -> str:
        if message is not None:
            return message
        return self.messages.render(operation, file_name)

    def _require_source(self, file_name: str) -> tuple[str, Path]:
        rel = self._relative(file_name)
        if rel is None:
            raise FileMissing(file_name)

        source = self.store.root / rel
        if not source.is_file():
            raise FileMissing(file_name)
        return rel, source

    def _relative(self, file_name: str) -> str | None:
        """Normalize a user path to a POSIX path relative to the working directory.

        Returns None for paths that cannot be tracked: absolute paths, paths
        leaving the working directory, anything inside the control directory,
        and any path with a component named like the version message file.
        """
        if not file_name or PurePath(file_name).is_absolute():
            return None

        root = self.store.root.resolve()
        try:
            rel = (root / file_name).resolve().relative_to(root)
        except ValueError:
            return None

        if not rel.parts or rel.parts[0] == self.store.control_dir.name:
            return None
        if self.store.message_name in rel.parts:
            return None
        return rel.as_posix()

    @staticmethod
    def _not_tracked(file_name: str) -> TrackResult:
        return TrackResult(
            changed=False,
            file_name=file_name,
            detail=f"File is not added to gvt. File: {file_name}",
        )
