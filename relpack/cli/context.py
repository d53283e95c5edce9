from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from relpack.core.config import PackageConfig, load_package_config
from relpack.core.errors import ErrorCode
from relpack.core.result import Err
from relpack.output.console import ConsoleProtocol, RichConsole
from relpack.output.errors import print_package_error
from relpack.services.package_errors import ConfigInvalid


@dataclass(frozen=True, slots=True)
class CLIContext:
    project_root: Path
    config: PackageConfig
    console: ConsoleProtocol


def build_context(
    *,
    project: Path | None,
    config_path: Path | None,
    overrides: Mapping[str, object | None],
    validate: bool = True,
) -> CLIContext:
    console = RichConsole()

    try:
        project_root = (project or Path.cwd()).expanduser().resolve()
    except OSError as e:
        console.error(f"invalid --project: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not project_root.is_dir():
        console.error(f"project directory not found: {project_root}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    result = load_package_config(
        project_root=project_root,
        config_path=config_path,
        env=os.environ,
        overrides=overrides,
        validate=validate,
    )
    if isinstance(result, Err):
        print_package_error(ConfigInvalid(error=result.error), console)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(project_root=project_root, config=result.value, console=console)
