"""
Packaging of built libraries into the Go module layout.
"""

from cronetkit.package.linkage import (
    SYSTEM_LINK_FLAGS,
    LinkageDescriptor,
    build_descriptor,
)
from cronetkit.package.packager import HEADERS, Packager

__all__ = [
    "SYSTEM_LINK_FLAGS",
    "LinkageDescriptor",
    "build_descriptor",
    "HEADERS",
    "Packager",
]
