"""Failure variants of a packaging run, one frozen dataclass per cause."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relpack.core.config import ConfigError


@dataclass(frozen=True, slots=True)
class ConfigInvalid:
    error: ConfigError


@dataclass(frozen=True, slots=True)
class ToolMissing:
    tool_id: str
    hint: str = "Install Rust via https://rustup.rs/ and cross via `cargo install cross`"


@dataclass(frozen=True, slots=True)
class LockfileFailed:
    returncode: int


@dataclass(frozen=True, slots=True)
class CompileFailed:
    returncode: int
    command: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BinaryMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class ResourceMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class StagingFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ArchiveFailed:
    path: Path
    reason: str


PackageError = (
    ConfigInvalid
    | ToolMissing
    | LockfileFailed
    | CompileFailed
    | BinaryMissing
    | ResourceMissing
    | StagingFailed
    | ArchiveFailed
)
