"""Merging the static tree into the build output.

Runs after every page and the feed are written. With ``ConflictPolicy.OVERWRITE`` a static file
replaces a generated file at the same path; with ``ConflictPolicy.ERROR`` the build stops.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from gempress.core.exceptions import (
    StaticConflictError,
    StaticMergeError,
    UnsupportedFileTypeError,
    UnsupportedSymlinkError,
)
from gempress.core.types import ConflictPolicy

logger = logging.getLogger(__name__)


def symlinks_supported() -> bool:
    return os.name == "posix"


def _copy_file(src: Path, dest: Path, policy: ConflictPolicy) -> None:
    if dest.is_symlink() or dest.exists():
        if policy is ConflictPolicy.ERROR or dest.is_dir():
            raise StaticConflictError(src, dest)
        logger.debug("Overwriting %s with static file", dest)
        if dest.is_symlink():
            dest.unlink()
    shutil.copyfile(src, dest)


def _copy_dir(src: Path, dest: Path, policy: ConflictPolicy) -> None:
    if dest.is_symlink() or (dest.exists() and not dest.is_dir()):
        raise StaticConflictError(src, dest)
    dest.mkdir(exist_ok=True)
    _merge_dir(src, dest, policy)


def _copy_symlink(src: Path, dest: Path, policy: ConflictPolicy) -> None:
    if not symlinks_supported():
        raise UnsupportedSymlinkError(src)

    link_target = os.readlink(src)
    if dest.is_symlink():
        dest.unlink()
    elif dest.exists():
        if policy is ConflictPolicy.ERROR or dest.is_dir():
            raise StaticConflictError(src, dest)
        dest.unlink()
    os.symlink(link_target, dest)


def _merge_dir(src: Path, dest: Path, policy: ConflictPolicy) -> None:
    for src_path in sorted(src.iterdir()):
        dest_path = dest / src_path.name
        try:
            mode = src_path.lstat().st_mode
            if stat.S_ISLNK(mode):
                _copy_symlink(src_path, dest_path, policy)
            elif stat.S_ISDIR(mode):
                _copy_dir(src_path, dest_path, policy)
            elif stat.S_ISREG(mode):
                _copy_file(src_path, dest_path, policy)
            else:
                raise UnsupportedFileTypeError(src_path)
        except OSError as e:
            raise StaticMergeError(src_path, e.strerror or str(e)) from e


def merge_static_tree(src: Path, dest: Path, policy: ConflictPolicy = ConflictPolicy.OVERWRITE) -> None:
    """Recursively copy the static tree ``src`` into ``dest``.

    Regular files are copied byte for byte, directories are created as needed and symlinks are
    recreated with the same target. Any other kind of file is refused.
    """
    if not src.is_dir():
        logger.info("No static directory at %s, skipping", src)
        return

    try:
        dest.mkdir(parents=True, exist_ok=True)
        _merge_dir(src, dest, policy)
    except OSError as e:
        raise StaticMergeError(src, e.strerror or str(e)) from e
    logger.debug("Merged static files from %s into %s", src, dest)
