"""Filesystem helpers."""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

__all__ = ["copy_into", "staging_dir"]


@contextmanager
def staging_dir(*, prefix: str = "relpack-", parent: Path | None = None) -> Iterator[Path]:
    """Create a fresh empty directory and remove it when the block exits.

    Removal runs on every exit path, including exceptions raised inside the
    block. Each call gets a unique directory, so concurrent runs never share
    one.
    """
    if parent is not None:
        parent.mkdir(parents=True, exist_ok=True)
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=str(parent) if parent else None))
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


def copy_into(src: Path, dest_dir: Path, *, name: str | None = None) -> Path:
    """Copy a file or a directory tree into ``dest_dir``.

    Permission bits and timestamps are preserved; symlinks inside a tree are
    copied as links.

    Raises:
        FileNotFoundError: If ``src`` does not exist.
        FileExistsError: If ``dest_dir`` already holds an entry of that name.
        OSError: On any copy failure.
    """
    dest = dest_dir / (name or src.name)
    if dest.exists() or dest.is_symlink():
        raise FileExistsError(f"Already staged: {dest.name}")
    if src.is_dir():
        shutil.copytree(src, dest, symlinks=True, copy_function=shutil.copy2)
    elif src.exists():
        shutil.copy2(src, dest)
    else:
        raise FileNotFoundError(f"No such file or directory: {src}")
    return dest

