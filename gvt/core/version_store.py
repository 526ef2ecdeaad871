"""Version storage for gvt.

On-disk layout under the working directory::

    .gvt/
        .latest_version    # newest committed version id
        0/.message
        1/.message
        1/<snapshot files>

Each version directory is a full copy of the tracked files at that point.
The latest pointer is always the last thing written when a version is
created, so an interrupted creation never becomes reachable.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from ..config.types import DEFAULT_CONTROL_DIR
from ..errors import AlreadyInitialized, StorageFailure, UninitializedRepository, VersionNotFound
from ..utils.fs import atomic_write
from ..utils.log import log_debug
from .snapshot import MESSAGE_NAME

POINTER_NAME = ".latest_version"
INITIAL_MESSAGE = "repository initialized"


@dataclass(frozen=True)
class VersionInfo:
    """A version id together with its full message."""
    id: int
    message: str

    def render(self) -> str:
        return f"Version: {self.id}\n{self.message}"


class VersionStore:
    """Owns the latest pointer and the per-version directories.

    One instance is the repository handle for a single invocation; all
    paths hang off ``root``.
    """

    def __init__(self, root: Path | str, control_dir: str = DEFAULT_CONTROL_DIR):
        """Initialize version store.

        Args:
            root: Working directory holding the tracked files
            control_dir: Name of the hidden control directory inside ``root``
        """
        self.root = Path(root)
        self.control_dir = self.root / control_dir
        self.pointer_path = self.control_dir / POINTER_NAME
        self.message_name = MESSAGE_NAME

    def is_initialized(self) -> bool:
        return self.control_dir.is_dir()

    def initialize(self) -> None:
        """Create the control directory and version 0.

        Raises:
            AlreadyInitialized: If the control directory already exists
            StorageFailure: If the directory or first version cannot be written
        """
        if self.control_dir.exists():
            raise AlreadyInitialized(f"Already initialized: {self.control_dir}")

        try:
            self.control_dir.mkdir(parents=True)
        except OSError as e:
            raise StorageFailure(f"Cannot create {self.control_dir}: {e}") from e

        try:
            self._create(0, INITIAL_MESSAGE, None)
        except StorageFailure:
            # A control dir without a pointer would look initialized but unreadable
            shutil.rmtree(self.control_dir, ignore_errors=True)
            raise

    def latest(self) -> int:
        """Return the newest committed version id.

        Raises:
            UninitializedRepository: If no repository exists at ``root``
            StorageFailure: If the pointer is unreadable or corrupt
        """
        if not self.is_initialized():
            raise UninitializedRepository(str(self.control_dir))

        try:
            raw = self.pointer_path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageFailure(f"Cannot read {self.pointer_path}: {e}") from e

        try:
            return int(raw.strip())
        except ValueError as e:
            raise StorageFailure(f"Corrupt latest pointer: {raw!r}") from e

    def version_dir(self, version_id: int) -> Path:
        return self.control_dir / str(version_id)

    def exists(self, version_id: int) -> bool:
        """True iff ``version_id`` is in [0, latest] and its directory is present.

        Orphan directories above the pointer are not reported.
        """
        if version_id < 0 or version_id > self.latest():
            return False
        return self.version_dir(version_id).is_dir()

    def message_of(self, version_id: int) -> str:
        """Return the full message of a version.

        Raises:
            VersionNotFound: If ``version_id`` is outside [0, latest]
            StorageFailure: If the message file cannot be read
        """
        if not self.exists(version_id):
            raise VersionNotFound(version_id)

        message_path = self.version_dir(version_id) / self.message_name
        try:
            return message_path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageFailure(f"Cannot read {message_path}: {e}") from e

    def info(self, version_id: int) -> VersionInfo:
        return VersionInfo(id=version_id, message=self.message_of(version_id))

    def contents(self, version_id: int) -> list[str]:
        """List the snapshot files of a version.

        Returns:
            Sorted POSIX-style paths relative to the version directory
        """
        if not self.exists(version_id):
            raise VersionNotFound(version_id)

        base = self.version_dir(version_id)
        return sorted(
            path.relative_to(base).as_posix()
            for path in base.rglob("*")
            if path.is_file() and path.name != self.message_name
        )

    def is_tracked(self, file_name: str) -> bool:
        """A file is tracked iff it is present in the latest version."""
        return (self.version_dir(self.latest()) / file_name).is_file()

    def create_version(
        self,
        message: str,
        populate: Callable[[Path], None] | None = None,
    ) -> int:
        """Allocate and commit the next version.

        The new directory and message are written first, then ``populate``
        fills in the snapshot, and only then is the latest pointer advanced.

        Args:
            message: Version message, stored verbatim
            populate: Called with the new version directory before commit

        Returns:
            The new version id

        Raises:
            StorageFailure: If any step fails; the pointer is left unchanged
        """
        return self._create(self.latest() + 1, message, populate)

    def _create(
        self,
        version_id: int,
        message: str,
        populate: Callable[[Path], None] | None,
    ) -> int:
        version_dir = self.version_dir(version_id)

        try:
            if version_dir.exists():
                # Left behind by an interrupted creation; never reachable
                log_debug(f"Removing orphan version directory: {version_dir}")
                shutil.rmtree(version_dir)

            version_dir.mkdir()
            (version_dir / self.message_name).write_text(message, encoding="utf-8")

            if populate is not None:
                populate(version_dir)

            atomic_write(self.pointer_path, str(version_id))
        except OSError as e:
            if version_dir.exists():
                shutil.rmtree(version_dir, ignore_errors=True)
            raise StorageFailure(f"Cannot create version {version_id}: {e}") from e

        log_debug(f"Created version {version_id}")
        return version_id
