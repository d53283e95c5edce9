"""Archive writer for staged release contents.

Every top-level entry of the staging directory becomes a top-level entry of
the archive, with no path prefix. Members are written in sorted order so two
runs over the same tree produce the same member list.
"""

from __future__ import annotations

import hashlib
import os
import tarfile
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from relpack.core.config import ArchiveFormat
from relpack.core.result import Err, Ok, Result
from relpack.services.package_errors import ArchiveFailed

__all__ = ["sha256_file", "write_archive"]


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _write_tar_gz(stage: Path, dest: Path) -> None:
    with tarfile.open(dest, "w:gz") as tar:
        for child in sorted(stage.iterdir()):
            tar.add(child, arcname=child.name)


def _write_zip(stage: Path, dest: Path) -> None:
    # Build outputs restored from CI caches can carry mtime=0, which ZIP
    # cannot represent (no timestamps before 1980).
    with ZipFile(dest, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
        for p in sorted(stage.rglob("*")):
            zf.write(p, arcname=p.relative_to(stage).as_posix())


def write_archive(
    stage: Path,
    out_dir: Path,
    name: str,
    archive_format: ArchiveFormat = ArchiveFormat.TAR_GZ,
) -> Result[Path, ArchiveFailed]:
    """Compress the contents of ``stage`` into ``out_dir / name``.

    ``name`` must be a plain file name; the archive never lands outside
    ``out_dir``. It is written under a ``.partial`` name and moved into place
    only once complete; a failed run leaves no file behind.
    """
    dest = out_dir / name
    if name in ("", ".", "..") or Path(name).name != name or "\\" in name:
        return Err(ArchiveFailed(path=dest, reason="archive name must be a plain file name"))

    partial = dest.with_name(dest.name + ".partial")
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        if archive_format == ArchiveFormat.ZIP:
            _write_zip(stage, partial)
        else:
            _write_tar_gz(stage, partial)
        os.replace(partial, dest)
    except (OSError, tarfile.TarError) as e:
        return Err(ArchiveFailed(path=dest, reason=str(e)))
    finally:
        if partial.exists():
            partial.unlink(missing_ok=True)

    return Ok(dest)
