"""Snapshot copying primitives.

Plain functions with no state of their own: the version store and the
engines pass every path in explicitly.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

MESSAGE_NAME = ".message"


def copy_tree(source: Path | str, target: Path | str, exclude: str = MESSAGE_NAME) -> int:
    """Copy every file under ``source`` into ``target``.

    Relative paths are preserved and existing files at the destination are
    overwritten. Entries named ``exclude`` are skipped at every directory
    level. Nothing under ``target`` is ever deleted.

    Args:
        source: Directory to copy from; missing or empty means nothing to do
        target: Directory to copy into (created as needed)
        exclude: Reserved entry name never copied

    Returns:
        Number of files copied
    """
    source_path = Path(source)
    target_path = Path(target)

    if not source_path.is_dir():
        return 0

    file_count = 0
    for root, dirs, files in os.walk(source_path):
        # Filter directories in-place to skip the reserved name
        dirs[:] = [d for d in dirs if d != exclude]

        rel_root = Path(root).relative_to(source_path)
        dst_root = target_path / rel_root
        dst_root.mkdir(parents=True, exist_ok=True)

        for file in files:
            if file == exclude:
                continue
            shutil.copy2(Path(root) / file, dst_root / file)
            file_count += 1

    return file_count


def copy_file(source_path: Path | str, target_dir: Path | str, name: str) -> Path:
    """Copy one file to ``target_dir / name``, overwriting if present.

    Returns:
        Destination path
    """
    dst = Path(target_dir) / name
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source_path, dst)
    return dst


def remove_file(target_dir: Path | str, name: str) -> None:
    """Delete ``target_dir / name`` and prune directories it leaves empty.

    Pruning stops at ``target_dir`` itself.
    """
    base = Path(target_dir)
    path = base / name
    path.unlink()

    parent = path.parent
    while parent != base and base in parent.parents:
        try:
            parent.rmdir()
        except OSError:
            # Not empty
            break
        parent = parent.parent
