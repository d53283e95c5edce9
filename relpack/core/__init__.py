"""Core domain types and logic."""

from .config import ArchiveFormat, ConfigError, PackageConfig, load_package_config
from .errors import ErrorCode
from .result import Err, Ok, Result
from .target import TargetTriple

__all__ = [
    # config
    "ArchiveFormat",
    "ConfigError",
    "PackageConfig",
    "load_package_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    # target
    "TargetTriple",
]
