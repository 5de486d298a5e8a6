"""FFmpeg ``./configure`` invocation for an aarch64 Linux cross build.

Every enabled external library needs an ARM64 build, either from the
sysroot or from :mod:`ffcross.fallback`; the fallback prefix is on
``PKG_CONFIG_PATH`` through :class:`BuildEnvironment`.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ffcross.environment import BuildEnvironment
from ffcross.errors import ValidationError
from ffcross.runner import CommandResult, Runner

DEFAULT_PREFIX = "/opt/ffmpeg"
DEFAULT_EXTRA_VERSION = "tessus"
DEFAULT_CROSS_PREFIX = "aarch64-linux-gnu-"

LICENSE_FLAGS: tuple[str, ...] = ("--enable-gpl", "--enable-version3", "--enable-nonfree")

ENABLED_FEATURES: tuple[str, ...] = (
    "libx264",
    "libx265",
    "libvpx",
    "libopus",
    "libmp3lame",
    "libvorbis",
    "libtheora",
    "libopenjpeg",
    "libvidstab",
    "libaom",
    "libsvtav1",
    "librav1e",
    "libdav1d",
    "libfdk-aac",
    "libzimg",
    "librubberband",
    "libsrt",
    "libssh",
    "libxml2",
    "libfreetype",
    "libfontconfig",
    "libfribidi",
    "libass",
    "libharfbuzz",
    "libwebp",
    "libopencore-amrnb",
    "libopencore-amrwb",
    "libvo-amrwbenc",
    "libspeex",
    "libsoxr",
    "vulkan",
    "opencl",
    "libshaderc",
    "libplacebo",
    "libzmq",
    "libbluray",
    "libcdio",
    "chromaprint",
    "openal",
    "libpulse",
    "alsa",
    "libgme",
    "libsnappy",
    "libaribcaption",
    "libkvazaar",
    "libopenh264",
    "libmysofa",
    "libbs2b",
    "vapoursynth",
    "libxvid",
    "lv2",
    "librist",
    "libtesseract",
    "openssl",
    "sdl2",
)

TRAILING_FEATURES: tuple[str, ...] = ("libnghttp2",)


def configure_arguments(
    *,
    prefix: str = DEFAULT_PREFIX,
    extra_version: str = DEFAULT_EXTRA_VERSION,
    cross_prefix: str = DEFAULT_CROSS_PREFIX,
) -> list[str]:
    return [
        "--arch=aarch64",
        "--target-os=linux",
        "--enable-cross-compile",
        f"--cross-prefix={cross_prefix}",
        f"--cc={cross_prefix}gcc",
        f"--cxx={cross_prefix}g++",
        f"--prefix={prefix}",
        f"--extra-version={extra_version}",
        *LICENSE_FLAGS,
        *(f"--enable-{feature}" for feature in ENABLED_FEATURES),
        "--enable-static",
        *(f"--enable-{feature}" for feature in TRAILING_FEATURES),
    ]


def configure_command(extra_args: Sequence[str] = (), **kwargs: str) -> list[str]:
    return ["./configure", *configure_arguments(**kwargs), *extra_args]


def run_configure(
    source_dir: Path,
    *,
    environment: BuildEnvironment,
    runner: Runner,
    extra_args: Sequence[str] = (),
) -> CommandResult:
    script = source_dir / "configure"
    if not script.is_file():
        raise ValidationError(
            "FFmpeg configure script not found.",
            hint="Run from, or pass --source pointing at, an FFmpeg source tree.",
            context={"operation": "configure", "source_dir": str(source_dir)},
        )
    result = runner(configure_command(extra_args), cwd=source_dir, env=environment.env)
    return result.check(operation="configure", hint="See ffbuild/config.log for details.")
