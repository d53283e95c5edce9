"""Target triple handling.

A target triple (``x86_64-unknown-linux-gnu``, ``x86_64-pc-windows-msvc``...)
selects both the cross-compilation target and the executable suffix of the
produced binary.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["TargetTriple", "WINDOWS_MARKER"]

WINDOWS_MARKER = "windows"


@dataclass(frozen=True, slots=True)
class TargetTriple:
    """A build target identifier as understood by the Rust toolchain."""

    value: str

    def __str__(self) -> str:
        return self.value

    @property
    def is_windows(self) -> bool:
        """Windows-family targets are matched by substring, not by position.

        Covers ``-pc-windows-msvc``, ``-pc-windows-gnu`` and ``-uwp-windows-*``.
        """
        return WINDOWS_MARKER in self.value.lower()

    @property
    def exe_suffix(self) -> str:
        return ".exe" if self.is_windows else ""

    def exe_name(self, name: str) -> str:
        """Get executable name with target-appropriate suffix.

        Example: exe_name("client") -> "client.exe" for a Windows target.
        """
        return f"{name}{self.exe_suffix}"
