"""Shared helpers for CLI commands."""

from __future__ import annotations

import typer

from relpack.core.config import ArchiveFormat
from relpack.core.errors import ErrorCode


def clean(value: str | None) -> str | None:
    """Strip a CLI string; blank means "not given"."""
    if value is None:
        return None
    s = value.strip()
    return s or None


def parse_format(value: str | None) -> ArchiveFormat | None:
    """Parse ``--format``, exiting with a usage error on unknown values."""
    if value is None:
        return None
    fmt = ArchiveFormat.parse(value)
    if fmt is None:
        choices = ", ".join(f.value for f in ArchiveFormat)
        typer.echo(f"error: unknown archive format '{value}' (choose: {choices})", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return fmt
