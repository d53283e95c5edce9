from __future__ import annotations

from pathlib import Path

import typer

from relpack.cli.commands._helpers import clean, parse_format
from relpack.cli.context import build_context
from relpack.core.errors import ErrorCode
from relpack.core.result import Err, Ok
from relpack.output.errors import package_error_exit_code, print_package_error
from relpack.services.package_errors import ConfigInvalid
from relpack.services.packager import ReleasePackager

_MISSING_NAME_INPUTS = ("crate_name", "tag", "target")


def package(
    crate: str | None = typer.Option(None, "--crate", help="Crate name (env: CRATE_NAME)"),
    tag: str | None = typer.Option(
        None, "--tag", help="Version tag, e.g. v1.2.3 (env: RELEASE_TAG, TRAVIS_TAG)"
    ),
    target: str | None = typer.Option(
        None, "--target", help="Target triple, e.g. x86_64-unknown-linux-gnu (env: TARGET)"
    ),
    build_package: str | None = typer.Option(
        None, "--package", help="Package to build (env: BUILD_PACKAGE)"
    ),
    bin_name: str | None = typer.Option(None, "--bin", help="Binary target (default: client)"),
    resources: list[str] | None = typer.Option(
        None,
        "--resource",
        help="Auxiliary path to ship, relative to the project (repeatable; default: resources)",
    ),
    no_lto: bool = typer.Option(False, "--no-lto", help="Build without -C lto"),
    toolchain: str | None = typer.Option(None, "--toolchain", help="Build front-end: cross|cargo"),
    archive_format: str | None = typer.Option(None, "--format", help="Archive format: tar.gz|zip"),
    config_path: Path | None = typer.Option(
        None, "--config", help="Config file (default: <project>/release.toml if present)"
    ),
    project: Path | None = typer.Option(None, "--project", help="Project root (default: cwd)"),
    out: Path | None = typer.Option(None, "--out", help="Output directory (default: cwd)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without running them."),
) -> None:
    """Build the release binary and package it as <crate>-<tag>-<target>.tar.gz."""
    overrides: dict[str, object | None] = {
        "crate_name": clean(crate),
        "tag": clean(tag),
        "target": clean(target),
        "package": clean(build_package),
        "bin_name": clean(bin_name),
        "resources": tuple(resources) if resources else None,
        "lto": False if no_lto else None,
        "toolchain": clean(toolchain),
        "archive_format": parse_format(archive_format),
    }
    ctx = build_context(project=project, config_path=config_path, overrides=overrides)

    out_dir = (out or Path.cwd()).expanduser().resolve()
    packager = ReleasePackager(
        config=ctx.config,
        project_root=ctx.project_root,
        out_dir=out_dir,
        console=ctx.console,
    )

    match packager.package(dry_run=dry_run):
        case Ok(archive):
            ctx.console.success(str(archive))
        case Err(error):
            print_package_error(error, ctx.console)
            raise typer.Exit(code=package_error_exit_code(error))


def name(
    crate: str | None = typer.Option(None, "--crate", help="Crate name (env: CRATE_NAME)"),
    tag: str | None = typer.Option(
        None, "--tag", help="Version tag (env: RELEASE_TAG, TRAVIS_TAG)"
    ),
    target: str | None = typer.Option(None, "--target", help="Target triple (env: TARGET)"),
    archive_format: str | None = typer.Option(None, "--format", help="Archive format: tar.gz|zip"),
    config_path: Path | None = typer.Option(None, "--config", help="Config file"),
    project: Path | None = typer.Option(None, "--project", help="Project root (default: cwd)"),
) -> None:
    """Print the archive file name a package run would produce."""
    overrides: dict[str, object | None] = {
        "crate_name": clean(crate),
        "tag": clean(tag),
        "target": clean(target),
        "archive_format": parse_format(archive_format),
    }
    ctx = build_context(
        project=project,
        config_path=config_path,
        overrides=overrides,
        validate=False,
    )

    missing = [f for f in ctx.config.missing_fields() if f in _MISSING_NAME_INPUTS]
    if missing:
        ctx.console.error(f"Missing required input: {', '.join(missing)}")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    name_error = ctx.config.name_error()
    if name_error is not None:
        print_package_error(ConfigInvalid(error=name_error), ctx.console)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    typer.echo(ctx.config.archive_name)
