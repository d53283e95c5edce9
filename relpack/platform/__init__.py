"""Platform abstraction layer."""

from .files import copy_into, staging_dir
from .process import ProcessError, find_program, run, run_silent

__all__ = [
    # files
    "copy_into",
    "staging_dir",
    # process
    "ProcessError",
    "find_program",
    "run",
    "run_silent",
]
