"""Release packaging service.

Builds one binary for a target triple and packages it, together with the
configured resource paths, into ``<crate>-<tag>-<target>.tar.gz``:

1. validate the configuration (no side effects before this passes)
2. acquire a staging directory, released on every exit path
3. generate ``Cargo.lock`` if absent
4. cross-compile the binary in release mode
5. stage the binary (``.exe`` for Windows targets) and the resources
6. compress the stage into the output directory

Every failure aborts the run; there is no retry.
"""

from __future__ import annotations

from pathlib import Path

from relpack.core.config import PackageConfig
from relpack.core.result import Err, Ok, Result
from relpack.output.console import ConsoleProtocol, Style
from relpack.platform.files import copy_into, staging_dir
from relpack.services.archive import sha256_file, write_archive
from relpack.services.package_errors import (
    ConfigInvalid,
    PackageError,
    ResourceMissing,
    StagingFailed,
)
from relpack.services.toolchain import RustToolchain

__all__ = ["ReleasePackager"]


class ReleasePackager:
    def __init__(
        self,
        *,
        config: PackageConfig,
        project_root: Path,
        out_dir: Path,
        console: ConsoleProtocol,
        staging_parent: Path | None = None,
    ) -> None:
        self._config = config
        self._root = project_root
        self._out_dir = out_dir
        self._console = console
        self._staging_parent = staging_parent

    @property
    def archive_path(self) -> Path:
        return self._out_dir / self._config.archive_name

    def package(self, *, dry_run: bool = False) -> Result[Path, PackageError]:
        """Build, stage and archive the release.

        Returns:
            Ok(path) of the written archive (or the would-be path on a dry run),
            Err(PackageError) on the first failing step.
        """
        validated = self._config.validate()
        if isinstance(validated, Err):
            return Err(ConfigInvalid(error=validated.error))
        config = validated.value

        toolchain = RustToolchain(
            project_root=self._root,
            console=self._console,
            program=config.toolchain,
        )

        if dry_run:
            return self._plan(config, toolchain)

        self._console.header(f"Packaging {config.archive_name}")
        match toolchain.version():
            case Ok(version):
                self._console.info(f"toolchain: {version}")
            case Err(error):
                self._console.warning(f"could not query {toolchain.program} version ({error})")

        with staging_dir(parent=self._staging_parent) as stage:
            lock = toolchain.ensure_lockfile()
            if isinstance(lock, Err):
                return lock
            if not lock.value:
                self._console.print(f"using existing {toolchain.lockfile_path.name}", Style.DIM)

            built = toolchain.build(config)
            if isinstance(built, Err):
                return built

            staged = self._stage(config, built.value, stage)
            if isinstance(staged, Err):
                return staged

            archived = write_archive(
                stage, self._out_dir, config.archive_name, config.archive_format
            )
            if isinstance(archived, Err):
                return archived

        archive = archived.value
        self._console.print(f"sha256: {sha256_file(archive)}", Style.DIM)
        return Ok(archive)

    def _stage(
        self,
        config: PackageConfig,
        binary: Path,
        stage: Path,
    ) -> Result[None, PackageError]:
        try:
            copy_into(binary, stage, name=config.binary_name)
        except OSError as e:
            return Err(StagingFailed(path=binary, reason=str(e)))
        self._console.info(f"staged {config.binary_name}")

        for rel in config.resources:
            src = self._root / rel
            if not src.exists():
                return Err(ResourceMissing(path=src))
            try:
                copy_into(src, stage)
            except OSError as e:
                return Err(StagingFailed(path=src, reason=str(e)))
            self._console.info(f"staged {src.name}")

        return Ok(None)

    def _plan(self, config: PackageConfig, toolchain: RustToolchain) -> Result[Path, PackageError]:
        """Print what a real run would do, touching nothing."""
        self._console.header(f"Packaging {config.archive_name} (dry run)")

        if toolchain.lockfile_path.is_file():
            self._console.print(f"using existing {toolchain.lockfile_path.name}", Style.DIM)
        else:
            self._console.command(toolchain.lockfile_command())
        self._console.command(toolchain.build_command(config))

        self._console.info(f"binary: {toolchain.binary_path(config)} -> {config.binary_name}")
        for rel in config.resources:
            src = self._root / rel
            if not src.exists():
                self._console.warning(f"resource not found: {src}")
            else:
                self._console.info(f"resource: {src}")
        self._console.info(f"archive: {self.archive_path}")
        return Ok(self.archive_path)
