"""History and inspection for gvt."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidVersion, StorageFailure
from ..utils.log import log_debug
from .snapshot import copy_tree
from .version_store import VersionInfo, VersionStore


@dataclass(frozen=True)
class HistoryEntry:
    """One history line: a version id and the first line of its message."""
    id: int
    summary: str

    def render(self) -> str:
        return f"{self.id}: {self.summary}"


def render_history(entries: list[HistoryEntry]) -> str:
    """Render entries one per line, each line newline-terminated."""
    return "".join(f"{entry.render()}\n" for entry in entries)


class HistoryInspector:
    """Read-side operations over a VersionStore, plus checkout."""

    def __init__(self, store: VersionStore):
        self.store = store

    def resolve(self, version_id: int | str | None) -> int:
        """Turn user input into an existing version id.

        Raises:
            InvalidVersion: If the input is not an integer or names no version
        """
        if isinstance(version_id, bool):
            raise InvalidVersion(version_id)
        try:
            resolved = int(version_id)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise InvalidVersion(version_id) from None

        if not self.store.exists(resolved):
            raise InvalidVersion(version_id)
        return resolved

    def checkout(self, version_id: int | str) -> int:
        """Overwrite the working directory with a version's files.

        Files missing from the version are left in place. Version 0 holds no
        files, so checking it out changes nothing.

        Returns:
            The checked out version id
        """
        resolved = self.resolve(version_id)
        source = self.store.version_dir(resolved)

        try:
            copied = copy_tree(source, self.store.root, exclude=self.store.message_name)
        except OSError as e:
            raise StorageFailure(f"Cannot check out version {resolved}: {e}") from e

        log_debug(f"Checked out {copied} files from version {resolved}")
        return resolved

    def show_version(self, version_id: int | str | None = None) -> VersionInfo:
        """Return id and full message of a version (latest when omitted)."""
        if version_id is None:
            return self.store.info(self.store.latest())
        return self.store.info(self.resolve(version_id))

    def history(self, limit: int | None = None) -> list[HistoryEntry]:
        """List versions newest first.

        Args:
            limit: Maximum number of entries; ignored when not smaller than
                the number of versions

        Raises:
            ValueError: If ``limit`` is negative
        """
        latest = self.store.latest()
        count = latest + 1
        if limit is not None:
            if limit < 0:
                raise ValueError(f"limit must be >= 0, got {limit}")
            if limit < count:
                count = limit

        entries = []
        for version_id in range(latest, latest - count, -1):
            message = self.store.message_of(version_id)
            entries.append(HistoryEntry(id=version_id, summary=_first_line(message)))
        return entries


def _first_line(message: str) -> str:
    lines = message.splitlines()
    return lines[0] if lines else ""
