"""CLI decorators"""

from .resolution import PASSTHROUGH_SETTINGS, resolution_options, with_resolution, with_toolchain

__all__ = [
    "PASSTHROUGH_SETTINGS",
    "resolution_options",
    "with_resolution",
    "with_toolchain",
]
