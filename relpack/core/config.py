"""Typed packaging configuration.

A packaging run is fully described by one frozen ``PackageConfig``. Values are
layered, later sources winning:

1. dataclass defaults
2. ``release.toml`` (table ``[release]``) in the project root, or an explicit
   config file
3. environment variables set by the CI job (``CRATE_NAME``, ``TARGET``...)
4. command line options

Nothing downstream reads the process environment; the CLI resolves it once
into the config.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table
from .target import TargetTriple

__all__ = [
    "ArchiveFormat",
    "ConfigError",
    "PackageConfig",
    "archive_name",
    "env_overrides",
    "load_config_file",
    "load_package_config",
    "CONFIG_FILENAME",
    "ENV_KEYS",
    "NAME_FIELDS",
    "REQUIRED_FIELDS",
    "SUPPORTED_TOOLCHAINS",
]

CONFIG_FILENAME = "release.toml"

DEFAULT_BIN = "client"
DEFAULT_RESOURCES: tuple[str, ...] = ("resources",)
DEFAULT_TOOLCHAIN = "cross"
DEFAULT_TARGET_DIR = "target"

SUPPORTED_TOOLCHAINS = ("cross", "cargo")

# Inputs that name the artifact; a run refuses to start without them.
REQUIRED_FIELDS = ("crate_name", "tag", "target", "package")

# Inputs joined into the archive file name.
NAME_FIELDS = ("crate_name", "tag", "target")
PATH_SEPARATORS = ("/", "\\")

# First non-empty variable wins.
ENV_KEYS: dict[str, tuple[str, ...]] = {
    "crate_name": ("CRATE_NAME",),
    "tag": ("RELEASE_TAG", "TRAVIS_TAG"),
    "target": ("TARGET",),
    "package": ("BUILD_PACKAGE",),
}


class ArchiveFormat(Enum):
    """Archive container written for a release."""

    TAR_GZ = "tar.gz"
    ZIP = "zip"

    def __str__(self) -> str:
        return self.value

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @classmethod
    def parse(cls, value: str) -> ArchiveFormat | None:
        normalized = value.strip().lower().lstrip(".")
        if normalized == "tgz":
            normalized = "tar.gz"
        for fmt in cls:
            if fmt.value == normalized:
                return fmt
        return None


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when configuration cannot be loaded or is incomplete."""

    message: str
    path: Path | None = None
    missing: tuple[str, ...] = ()
    hint: str | None = None


def archive_name(
    crate_name: str,
    tag: str,
    target: str,
    archive_format: ArchiveFormat = ArchiveFormat.TAR_GZ,
) -> str:
    """Deterministic archive file name: ``<crate>-<tag>-<target>.<ext>``."""
    return f"{crate_name}-{tag}-{target}{archive_format.extension}"


@dataclass(frozen=True, slots=True)
class PackageConfig:
    """Everything needed to build and package one release artifact."""

    crate_name: str = ""
    tag: str = ""
    target: str = ""
    package: str = ""
    bin_name: str = DEFAULT_BIN
    resources: tuple[str, ...] = DEFAULT_RESOURCES
    lto: bool = True
    toolchain: str = DEFAULT_TOOLCHAIN
    archive_format: ArchiveFormat = ArchiveFormat.TAR_GZ
    target_dir: str = DEFAULT_TARGET_DIR

    @property
    def triple(self) -> TargetTriple:
        return TargetTriple(self.target)

    @property
    def archive_name(self) -> str:
        return archive_name(self.crate_name, self.tag, self.target, self.archive_format)

    @property
    def binary_name(self) -> str:
        """Binary file name inside the build output and the archive."""
        return self.triple.exe_name(self.bin_name)

    def missing_fields(self) -> tuple[str, ...]:
        return tuple(name for name in REQUIRED_FIELDS if not getattr(self, name).strip())

    def name_error(self) -> ConfigError | None:
        """Reject archive name parts that would escape the output directory."""
        for name in NAME_FIELDS:
            value = getattr(self, name)
            if any(sep in value for sep in PATH_SEPARATORS):
                return ConfigError(
                    f"{name} must not contain a path separator: {value}",
                    hint="The archive name is a single file name in the output directory",
                )
        return None

    def validate(self) -> Result[PackageConfig, ConfigError]:
        """Check required inputs and enumerated values.

        Returns:
            Ok(self) when the config can drive a packaging run.
        """
        missing = self.missing_fields()
        if missing:
            return Err(
                ConfigError(
                    f"Missing required input: {', '.join(missing)}",
                    missing=missing,
                    hint=_missing_hint(missing),
                )
            )
        name_error = self.name_error()
        if name_error is not None:
            return Err(name_error)
        if not self.bin_name.strip():
            return Err(ConfigError("Binary name must not be empty"))
        if self.toolchain not in SUPPORTED_TOOLCHAINS:
            return Err(
                ConfigError(
                    f"Unsupported toolchain: {self.toolchain}",
                    hint=f"Use one of: {', '.join(SUPPORTED_TOOLCHAINS)}",
                )
            )
        return Ok(self)

    def merged(self, overrides: Mapping[str, object | None]) -> PackageConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PackageConfig:
        """Create a config from parsed TOML.

        Raises:
            TypeError: If a key holds a value of the wrong type.
            ValueError: If ``format`` names an unknown archive format.
        """
        table: StrDict = get_table(data, "release") or {}
        overrides: dict[str, object | None] = {
            "crate_name": get_str(table, "crate_name"),
            "tag": get_str(table, "tag"),
            "target": get_str(table, "target"),
            "package": get_str(table, "package"),
            "bin_name": get_str(table, "bin"),
            "lto": get_bool(table, "lto"),
            "toolchain": get_str(table, "toolchain"),
            "target_dir": get_str(table, "target_dir"),
        }

        resources = get_str_list(table, "resources")
        if resources is not None:
            overrides["resources"] = tuple(resources)

        fmt = get_str(table, "format")
        if fmt is not None:
            parsed = ArchiveFormat.parse(fmt)
            if parsed is None:
                raise ValueError(f"unknown archive format '{fmt}'")
            overrides["archive_format"] = parsed

        return cls().merged(overrides)


def _missing_hint(missing: tuple[str, ...]) -> str:
    parts: list[str] = []
    for name in missing:
        option = "--" + ("crate" if name == "crate_name" else name)
        env = " or ".join(ENV_KEYS[name])
        parts.append(f"{option} / {env}")
    return "Set " + ", ".join(parts)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config_file(path: Path) -> Result[PackageConfig, ConfigError]:
    """Load a ``PackageConfig`` from a TOML file.

    The result is not validated; required inputs usually arrive later from
    the environment or the command line.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(PackageConfig.from_dict(result.value))
    except (TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def env_overrides(env: Mapping[str, str]) -> dict[str, object | None]:
    """Pick the configuration inputs a CI job exports as variables."""
    out: dict[str, object | None] = {}
    for field_name, keys in ENV_KEYS.items():
        for key in keys:
            value = env.get(key, "").strip()
            if value:
                out[field_name] = value
                break
    return out


def load_package_config(
    *,
    project_root: Path,
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, object | None] | None = None,
    validate: bool = True,
) -> Result[PackageConfig, ConfigError]:
    """Resolve and validate the full configuration for a run.

    Args:
        project_root: Directory holding ``Cargo.toml`` and ``release.toml``.
        config_path: Explicit config file; must exist when given.
        env: Environment mapping (usually ``os.environ``).
        overrides: Command line values; None entries are ignored.
        validate: Check required inputs; off for callers that only need
            part of the config.

    Returns:
        Ok(PackageConfig) ready for packaging, Err(ConfigError) otherwise.
    """
    config = PackageConfig()

    path = config_path if config_path is not None else project_root / CONFIG_FILENAME
    if config_path is not None or path.is_file():
        file_result = load_config_file(path)
        if isinstance(file_result, Err):
            return file_result
        config = file_result.value

    if env is not None:
        config = config.merged(env_overrides(env))
    if overrides is not None:
        config = config.merged(overrides)

    if not validate:
        return Ok(config)
    return config.validate()
