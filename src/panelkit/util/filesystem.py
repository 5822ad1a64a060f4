"""
Filesystem helpers shared across panel modules.
"""

from __future__ import annotations

import logging
import mimetypes
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock

logger = logging.getLogger(__name__)


def _ensure_parent(target: Path) -> None:
    """Ensure the parent directory for target exists."""
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)


def is_relative_to(path: Path, base: Path) -> bool:
    """Return True if path is under base."""
    try:
        path.relative_to(base)
    except ValueError:
        return False
    return True


def is_readable_file(path: Path | str) -> bool:
    """Return True if path names a regular file the current process can read."""
    target = Path(path)
    return target.is_file() and os.access(target, os.R_OK)


def read_text(path: Path | str, encoding: str = "utf-8") -> str:
    """
    Read a text file, returning an empty string when it is missing.
    """
    target = Path(path)
    try:
        return target.read_text(encoding=encoding)
    except FileNotFoundError:
        logger.debug("File %s does not exist", target)
        return ""


def modified(path: Path | str) -> int:
    """Last modification time of path as integer unix timestamp."""
    return int(Path(path).stat().st_mtime)


def mime_type(path: Path | str) -> Optional[str]:
    """
    Guess the MIME type from the file name.

    SVG is mapped explicitly since some platforms ship without it in their
    mime database.
    """
    name = str(path)
    if name.lower().endswith(".svg"):
        return "image/svg+xml"
    guessed, _ = mimetypes.guess_type(name)
    return guessed


def remove_directory(path: Path | str) -> bool:
    """Recursively delete a directory. Returns False if it did not exist."""
    target = Path(path)
    if not target.exists():
        return False
    shutil.rmtree(target)
    return True


@contextmanager
def file_lock(path: Path | str):
    """Context manager for a filesystem lock file alongside the target."""
    target = Path(path).expanduser().resolve()
    lock_path = target.with_suffix(f"{target.suffix}.lock")
    _ensure_parent(lock_path)
    with FileLock(str(lock_path)):
        yield


def atomic_copy_directory(source: Path | str, target: Path | str) -> Path:
    """
    Copy a directory tree by staging it next to target and renaming it into place.

    The staging directory is removed if the copy fails; target only ever
    appears fully populated.
    """
    source_dir = Path(source)
    target_dir = Path(target)
    _ensure_parent(target_dir)
    staging = Path(tempfile.mkdtemp(prefix=f".{target_dir.name}.", suffix=".tmp", dir=target_dir.parent))
    try:
        shutil.copytree(source_dir, staging, dirs_exist_ok=True)
        os.replace(staging, target_dir)
    finally:
        if staging.exists():
            shutil.rmtree(staging, ignore_errors=True)
    return target_dir
