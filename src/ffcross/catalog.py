"""Fixed table of dependencies that can be built from source."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ffcross.errors import UnsupportedDependencyError
from ffcross.models import BuildStrategy, DependencyDescriptor

_VAPOURSYNTH = "https://github.com/vapoursynth/vapoursynth.git"


def _entries() -> list[DependencyDescriptor]:
    cython = [
        DependencyDescriptor(name, "cython", "cython", BuildStrategy.PIP)
        for name in ("cython", "cython3", "python3-cython")
    ]
    return [
        *cython,
        DependencyDescriptor(
            "libaribcaption-dev",
            "libaribcaption",
            "https://github.com/xqq/libaribcaption.git",
            BuildStrategy.CMAKE,
        ),
        DependencyDescriptor(
            "libfdk-aac-dev",
            "fdk-aac",
            "https://github.com/mstorsjo/fdk-aac.git",
            BuildStrategy.AUTOTOOLS,
        ),
        DependencyDescriptor(
            "libkvazaar-dev",
            "kvazaar",
            "https://github.com/ultravideo/kvazaar.git",
            BuildStrategy.AUTOTOOLS,
        ),
        DependencyDescriptor(
            "libopenh264-dev",
            "openh264",
            "https://github.com/cisco/openh264.git",
            BuildStrategy.MAKE,
        ),
        DependencyDescriptor(
            "librist-dev",
            "librist",
            "https://code.videolan.org/rist/librist.git",
            BuildStrategy.MESON,
        ),
        DependencyDescriptor(
            "libvpl-dev",
            "oneVPL",
            "https://github.com/oneapi-src/oneVPL.git",
            BuildStrategy.CMAKE,
        ),
        DependencyDescriptor(
            "libchromaprint-dev",
            "chromaprint",
            "https://github.com/acoustid/chromaprint.git",
            BuildStrategy.CMAKE,
            ("-DBUILD_TOOLS=OFF", "-DBUILD_TESTS=OFF"),
        ),
        DependencyDescriptor("libvapoursynth-dev", "vapoursynth", _VAPOURSYNTH, BuildStrategy.MESON),
        DependencyDescriptor("vapoursynth", "vapoursynth", _VAPOURSYNTH, BuildStrategy.MESON),
    ]


DESCRIPTORS: Mapping[str, DependencyDescriptor] = MappingProxyType(
    {descriptor.name: descriptor for descriptor in _entries()}
)


def lookup(name: str) -> DependencyDescriptor:
    """Return the descriptor for ``name`` (exact match) or raise."""
    try:
        return DESCRIPTORS[name]
    except KeyError:
        raise UnsupportedDependencyError(name) from None


def supported_names() -> list[str]:
    return sorted(DESCRIPTORS)
