"""Rust build toolchain driver.

Wraps the two toolchain operations a release needs: generating ``Cargo.lock``
when it is absent, and cross-compiling one binary target in release mode.
``cross`` and ``cargo`` share the ``rustc`` sub-command syntax, so either can
drive the build; lock file generation always goes through ``cargo``.
"""

from __future__ import annotations

from pathlib import Path

from relpack.core.config import PackageConfig
from relpack.core.result import Err, Ok, Result
from relpack.output.console import ConsoleProtocol
from relpack.platform.process import ProcessError, find_program, run, run_silent
from relpack.services.package_errors import (
    BinaryMissing,
    CompileFailed,
    LockfileFailed,
    PackageError,
    ToolMissing,
)

__all__ = ["LOCKFILE_NAME", "RustToolchain"]

LOCKFILE_NAME = "Cargo.lock"

_VERSION_TIMEOUT_SECONDS = 30.0

_HINTS = {
    "cargo": "Install Rust via https://rustup.rs/",
    "cross": "Install cross with: cargo install cross",
}


class RustToolchain:
    def __init__(
        self,
        *,
        project_root: Path,
        console: ConsoleProtocol,
        program: str = "cross",
    ) -> None:
        self._root = project_root
        self._console = console
        self._program = program

    @property
    def program(self) -> str:
        return self._program

    @property
    def lockfile_path(self) -> Path:
        return self._root / LOCKFILE_NAME

    def version(self) -> Result[str, ProcessError]:
        """First line of ``<program> --version``."""
        result = run([self._program, "--version"], cwd=self._root, timeout=_VERSION_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return result
        lines = result.value.strip().splitlines()
        return Ok(lines[0] if lines else "")

    def lockfile_command(self) -> list[str]:
        return ["cargo", "generate-lockfile"]

    def build_command(self, config: PackageConfig) -> list[str]:
        cmd = [
            self._program,
            "rustc",
            "--bin",
            config.bin_name,
            "--target",
            config.target,
            "--package",
            config.package,
            "--release",
        ]
        if config.lto:
            cmd += ["--", "-C", "lto"]
        return cmd

    def binary_path(self, config: PackageConfig) -> Path:
        """Where the release build leaves the binary.

        ``<project>/<target_dir>/<triple>/release/<bin>[.exe]``
        """
        return self._root / config.target_dir / config.target / "release" / config.binary_name

    def ensure_lockfile(self) -> Result[bool, PackageError]:
        """Generate ``Cargo.lock`` unless it already exists.

        Returns:
            Ok(True) if a lock file was generated, Ok(False) if one was present.
        """
        if self.lockfile_path.is_file():
            return Ok(False)

        if find_program("cargo") is None:
            return Err(ToolMissing(tool_id="cargo", hint=_HINTS["cargo"]))

        cmd = self.lockfile_command()
        self._console.command(cmd)
        result = run_silent(cmd, cwd=self._root)
        if isinstance(result, Err):
            return Err(LockfileFailed(returncode=result.error.returncode))
        return Ok(True)

    def build(self, config: PackageConfig) -> Result[Path, PackageError]:
        """Compile the configured binary and return its path."""
        if find_program(self._program) is None:
            hint = _HINTS.get(self._program, f"Install {self._program} and add it to PATH")
            return Err(ToolMissing(tool_id=self._program, hint=hint))

        cmd = self.build_command(config)
        self._console.command(cmd)
        result = run_silent(cmd, cwd=self._root)
        if isinstance(result, Err):
            return Err(CompileFailed(returncode=result.error.returncode, command=tuple(cmd)))

        binary = self.binary_path(config)
        if not binary.is_file():
            return Err(BinaryMissing(path=binary))
        return Ok(binary)
