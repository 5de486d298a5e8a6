"""Two-stage ARM64 cross-build driven through docker.

Stage 1 builds an ARM64 sysroot image under QEMU user emulation and exports
it as a tarball. Stage 2 cross-compiles FFmpeg natively on the host inside a
second image, with the extracted sysroot mounted read-only. The tarball is
kept between runs so ``skip_sysroot`` can reuse it.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from ffcross.errors import CrossBuildError, ValidationError
from ffcross.observability import StructuredLogger
from ffcross.runner import Runner, SubprocessRunner

SYSROOT_IMAGE = "ffmpeg-arm64-sysroot"
CROSS_IMAGE = "ffmpeg-cross-compile"
ARM64_PLATFORM = "linux/arm64"
BINFMT_IMAGE = "tonistiigi/binfmt"
PROBE_IMAGE = "alpine"

CONTAINER_SCRIPT = (
    "cp -r /ffmpeg /build-ffmpeg\n"
    "cd /build-ffmpeg\n"
    "/cross-compile.sh\n"
)


@dataclass(frozen=True, slots=True)
class CrossBuildLayout:
    root: Path

    @property
    def cross_build_dir(self) -> Path:
        return self.root / "cross-build"

    @property
    def sysroot_dockerfile(self) -> Path:
        return self.cross_build_dir / "Dockerfile.arm64-sysroot"

    @property
    def cross_dockerfile(self) -> Path:
        return self.cross_build_dir / "Dockerfile.cross-compile"

    @property
    def sysroot_tar(self) -> Path:
        return self.cross_build_dir / "sysroot-arm64.tar.gz"

    @property
    def sysroot_extract_dir(self) -> Path:
        return self.cross_build_dir / "sysroot-extracted"

    @property
    def output_dir(self) -> Path:
        return self.root / "build-arm64"

    @property
    def bin_dir(self) -> Path:
        return self.output_dir / "opt" / "ffmpeg" / "bin"

    @property
    def ffmpeg_binary(self) -> Path:
        return self.bin_dir / "ffmpeg"


@dataclass(frozen=True, slots=True)
class CrossBuildOptions:
    skip_sysroot: bool = False
    clean: bool = False


@dataclass(slots=True)
class CrossPipeline:
    layout: CrossBuildLayout
    options: CrossBuildOptions = field(default_factory=CrossBuildOptions)
    runner: Runner = field(default_factory=SubprocessRunner)
    logger: StructuredLogger = field(default_factory=StructuredLogger)

    def run(self) -> Path:
        """Run both stages and return the path of the produced ffmpeg binary."""
        if self.options.clean:
            self.clean()
        self.check_inputs()
        self.ensure_binfmt()
        if self.options.skip_sysroot and self.layout.sysroot_tar.exists():
            self._info(f"Skipping sysroot build (using cached: {self.layout.sysroot_tar})")
        else:
            self.build_sysroot()
        self.cross_compile()
        binary = self.verify_output()
        self.cleanup()
        self._success("Done! Use --skip-sysroot on subsequent builds to reuse the cached sysroot.")
        return binary

    def clean(self) -> None:
        self._info("Cleaning cached images and sysroot...")
        for image in (SYSROOT_IMAGE, CROSS_IMAGE):
            # A missing image is the state we want.
            self.runner(["docker", "rmi", image], capture=True)
        self.layout.sysroot_tar.unlink(missing_ok=True)
        shutil.rmtree(self.layout.output_dir, ignore_errors=True)
        self._success("Clean complete")

    def check_inputs(self) -> None:
        for dockerfile in (self.layout.sysroot_dockerfile, self.layout.cross_dockerfile):
            if not dockerfile.is_file():
                self.logger.error("cross_build", f"Missing {dockerfile}")
                raise ValidationError(
                    f"Missing {dockerfile}",
                    hint="Both Dockerfiles must exist under cross-build/.",
                    context={"operation": "cross_build", "path": str(dockerfile)},
                )

    def ensure_binfmt(self) -> None:
        self._info("Checking QEMU binfmt support for ARM64...")
        probe = self.runner(
            ["docker", "run", "--rm", "--platform", ARM64_PLATFORM, PROBE_IMAGE, "uname", "-m"],
            capture=True,
        )
        if probe.ok and "aarch64" in probe.stdout:
            self._success("QEMU binfmt support already available")
            return
        self.logger.warning("cross_build", "Setting up QEMU binfmt support...")
        self.runner(
            ["docker", "run", "--privileged", "--rm", BINFMT_IMAGE, "--install", "arm64"],
        ).check(operation="binfmt install", hint="Docker must allow --privileged containers.")
        self._success("QEMU binfmt support installed")

    def build_sysroot(self) -> Path:
        layout = self.layout
        self._info("Stage 1: Building ARM64 sysroot (QEMU emulation, may take 5-10 minutes)")
        self.runner(
            [
                "docker",
                "build",
                "--platform",
                ARM64_PLATFORM,
                "-t",
                SYSROOT_IMAGE,
                "-f",
                str(layout.sysroot_dockerfile),
                str(layout.cross_build_dir),
            ],
        ).check(operation="sysroot image build")

        self._info("Extracting sysroot tarball...")
        layout.cross_build_dir.mkdir(parents=True, exist_ok=True)
        self.runner(
            [
                "docker",
                "run",
                "--rm",
                "--platform",
                ARM64_PLATFORM,
                "-v",
                f"{layout.cross_build_dir}:/output",
                SYSROOT_IMAGE,
            ],
        ).check(operation="sysroot export")

        if not layout.sysroot_tar.is_file():
            self.logger.error("cross_build", "Failed to create sysroot tarball")
            raise CrossBuildError(
                "Failed to create sysroot tarball.",
                hint="The sysroot image must write sysroot-arm64.tar.gz into /output.",
                context={"operation": "build_sysroot", "expected": str(layout.sysroot_tar)},
            )
        self._success(f"Sysroot created: {layout.sysroot_tar}")
        return layout.sysroot_tar

    def cross_compile(self) -> None:
        layout = self.layout
        self._info("Stage 2: Cross-compiling FFmpeg (native x86_64)")
        self.runner(
            [
                "docker",
                "build",
                "-t",
                CROSS_IMAGE,
                "-f",
                str(layout.cross_dockerfile),
                str(layout.cross_build_dir),
            ],
        ).check(operation="cross-compile image build")

        layout.output_dir.mkdir(parents=True, exist_ok=True)
        shutil.rmtree(layout.sysroot_extract_dir, ignore_errors=True)
        layout.sysroot_extract_dir.mkdir(parents=True)

        self._info("Extracting sysroot for cross-compilation...")
        self.runner(
            ["tar", "-xzf", str(layout.sysroot_tar), "-C", str(layout.sysroot_extract_dir)],
        ).check(operation="sysroot extraction")

        self._info("Starting cross-compilation...")
        self.runner(
            [
                "docker",
                "run",
                "--rm",
                "-v",
                f"{layout.root}:/ffmpeg:ro",
                "-v",
                f"{layout.sysroot_extract_dir}:/sysroot-arm64:ro",
                "-v",
                f"{layout.output_dir}:/output",
                "-w",
                "/ffmpeg",
                CROSS_IMAGE,
                "bash",
                "-c",
                CONTAINER_SCRIPT,
            ],
        ).check(operation="cross-compilation")

    def verify_output(self) -> Path:
        binary = self.layout.ffmpeg_binary
        if not binary.is_file():
            self.logger.error("cross_build", "Build failed - ffmpeg binary not found")
            raise CrossBuildError(
                "Build failed - ffmpeg binary not found.",
                hint="Inspect the cross-compile container output above.",
                context={"operation": "verify_output", "expected": str(binary)},
            )
        produced = sorted(path.name for path in self.layout.bin_dir.iterdir())
        self._success(
            f"Build completed successfully! ARM64 binaries are in {self.layout.bin_dir}",
            extra={"binaries": produced},
        )
        return binary

    def cleanup(self) -> None:
        self._info("Cleaning up temporary files...")
        shutil.rmtree(self.layout.sysroot_extract_dir, ignore_errors=True)

    def _info(self, message: str) -> None:
        self.logger.info("cross_build", message)

    def _success(self, message: str, **kwargs: object) -> None:
        self.logger.success("cross_build", message, **kwargs)
