"""Library version and build information."""

from __future__ import annotations

import platform
import sys

__all__ = ["get_library_version", "library_string", "print_library_info"]

VERSION = "1.1.3"


def get_library_version() -> str:
    """The library's version string."""
    return VERSION


def library_string() -> str:
    """A one-line description of the library and the platform it runs on."""
    build_type = "Debug" if sys.flags.dev_mode else "Release"
    return (
        f"lcekit v{VERSION} ({platform.python_implementation()} / {build_type} | "
        f"{platform.system()} {platform.machine()})"
    )


def print_library_info() -> None:
    """Write the library description line to standard output."""
    line = library_string()
    sys.stdout.write(line + "\n")
    sys.stdout.flush()