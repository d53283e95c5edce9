"""Error presentation utilities.

Centralized error formatting and exit code mapping for packaging failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relpack.core.errors import ErrorCode
from relpack.output.console import Style
from relpack.services.package_errors import (
    ArchiveFailed,
    BinaryMissing,
    CompileFailed,
    ConfigInvalid,
    LockfileFailed,
    PackageError,
    ResourceMissing,
    StagingFailed,
    ToolMissing,
)

if TYPE_CHECKING:
    from relpack.output.console import ConsoleProtocol

__all__ = ["print_package_error", "package_error_exit_code"]


def print_package_error(error: PackageError, console: ConsoleProtocol) -> None:
    """Print a packaging error with its hint, if any."""
    match error:
        case ConfigInvalid(error=cfg):
            where = f" ({cfg.path})" if cfg.path is not None else ""
            console.error(f"{cfg.message}{where}")
            if cfg.hint:
                console.print(f"hint: {cfg.hint}", Style.DIM)
        case ToolMissing(tool_id=tool_id, hint=hint):
            console.error(f"{tool_id}: missing")
            console.print(f"hint: {hint}", Style.DIM)
        case LockfileFailed(returncode=rc):
            console.error(f"lock file generation failed (exit {rc})")
        case CompileFailed(returncode=rc):
            console.error(f"build failed (exit {rc})")
        case BinaryMissing(path=path):
            console.error(f"binary not found: {path}")
            console.print("hint: check --bin and --target against the build output", Style.DIM)
        case ResourceMissing(path=path):
            console.error(f"resource not found: {path}")
        case StagingFailed(path=path, reason=reason):
            console.error(f"staging failed for {path}: {reason}")
        case ArchiveFailed(path=path, reason=reason):
            console.error(f"archive failed: {path} ({reason})")


def package_error_exit_code(error: PackageError) -> int:
    """Get the process exit code for a packaging error."""
    match error:
        case ConfigInvalid() | ToolMissing():
            return int(ErrorCode.ENV_ERROR)
        case LockfileFailed() | CompileFailed() | BinaryMissing():
            return int(ErrorCode.BUILD_ERROR)
        case ResourceMissing() | StagingFailed() | ArchiveFailed():
            return int(ErrorCode.PACKAGE_ERROR)
