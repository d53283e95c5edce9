"""Error codes for CLI exit status.

Each failure category of a packaging run maps to one stable process exit
code, so CI pipelines can tell a misconfigured job from a broken build.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad command line usage)
    - 2: Environment error (missing configuration input, missing tool)
    - 3: Build error (lock file generation or compilation failed, no binary)
    - 4: Packaging error (resource missing, copy or archive step failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    PACKAGE_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

