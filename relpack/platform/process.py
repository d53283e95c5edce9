"""Subprocess execution with Result-based error handling.

Thin wrappers around ``subprocess.run`` that turn non-zero exits, timeouts
and launch failures into ``ProcessError`` values instead of exceptions.

Usage:
    match run_silent(["cargo", "generate-lockfile"], cwd=project_root):
        case Ok(_):
            ...
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from relpack.core.result import Err, Ok, Result

__all__ = ["ProcessError", "find_program", "run", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code of the process, -1 if it never ran or timed out.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the launch/timeout reason.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def find_program(name: str) -> Path | None:
    """Locate an executable on PATH."""
    found = shutil.which(name)
    return Path(found) if found else None


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with output streaming to the terminal.

    Build tools are run this way so their diagnostics land in the CI log
    unchanged. Nothing is captured, so ``stdout``/``stderr`` of the error
    only carry launch or timeout reasons.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), env=env, timeout=timeout, check=False)
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr=""))

    return Ok(None)
