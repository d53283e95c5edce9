"""Application services for relpack.

Services implement the packaging workflow, coordinating between the domain
layer (core/) and the platform layer (processes, files).
"""

from relpack.services.packager import ReleasePackager
from relpack.services.toolchain import RustToolchain

__all__ = ["ReleasePackager", "RustToolchain"]
