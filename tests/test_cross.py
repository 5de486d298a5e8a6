from pathlib import Path

import pytest
from fakes import Call, RecordingRunner

from ffcross.cross import (
    CROSS_IMAGE,
    SYSROOT_IMAGE,
    CrossBuildLayout,
    CrossBuildOptions,
    CrossPipeline,
)
from ffcross.errors import CommandError, CrossBuildError, ValidationError
from ffcross.observability import StructuredLogger


@pytest.fixture
def layout(tmp_path: Path) -> CrossBuildLayout:
    layout = CrossBuildLayout(root=tmp_path / "ffmpeg")
    layout.cross_build_dir.mkdir(parents=True)
    layout.sysroot_dockerfile.write_text("FROM arm64v8/debian\n", encoding="utf-8")
    layout.cross_dockerfile.write_text("FROM debian\n", encoding="utf-8")
    return layout


@pytest.fixture
def docker(runner: RecordingRunner, layout: CrossBuildLayout) -> RecordingRunner:
    def export_sysroot(call: Call) -> None:
        layout.sysroot_tar.write_bytes(b"tarball")

    def compile_ffmpeg(call: Call) -> None:
        layout.bin_dir.mkdir(parents=True, exist_ok=True)
        for name in ("ffmpeg", "ffprobe"):
            (layout.bin_dir / name).write_bytes(b"\x7fELF")

    runner.stdout = {"uname -m": "aarch64\n"}
    runner.effects = {
        f":/output {SYSROOT_IMAGE}": export_sysroot,
        f"{CROSS_IMAGE} bash": compile_ffmpeg,
    }
    return runner


def _pipeline(
    layout: CrossBuildLayout,
    runner: RecordingRunner,
    logger: StructuredLogger,
    **options: bool,
) -> CrossPipeline:
    return CrossPipeline(
        layout=layout,
        options=CrossBuildOptions(**options),
        runner=runner,
        logger=logger,
    )


def test_full_run_builds_sysroot_then_cross_compiles(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    binary = _pipeline(layout, docker, logger).run()

    assert binary == layout.ffmpeg_binary
    commands = docker.commands()
    sysroot_build = commands.index(
        f"docker build --platform linux/arm64 -t {SYSROOT_IMAGE} "
        f"-f {layout.sysroot_dockerfile} {layout.cross_build_dir}"
    )
    cross_build = commands.index(
        f"docker build -t {CROSS_IMAGE} -f {layout.cross_dockerfile} {layout.cross_build_dir}"
    )
    extract = commands.index(
        f"tar -xzf {layout.sysroot_tar} -C {layout.sysroot_extract_dir}"
    )
    assert sysroot_build < cross_build < extract
    assert not any("tonistiigi/binfmt" in command for command in commands)
    assert not layout.sysroot_extract_dir.exists()
    assert layout.sysroot_tar.exists()


def test_cross_compile_mounts_source_readonly_and_sysroot(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    _pipeline(layout, docker, logger).run()

    run = next(call for call in docker.calls if CROSS_IMAGE in call.argv and "run" in call.argv)
    assert f"{layout.root}:/ffmpeg:ro" in run.argv
    assert f"{layout.sysroot_extract_dir}:/sysroot-arm64:ro" in run.argv
    assert f"{layout.output_dir}:/output" in run.argv
    assert "/cross-compile.sh" in run.argv[-1]


def test_skip_sysroot_reuses_cached_tarball(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    layout.sysroot_tar.write_bytes(b"cached")

    _pipeline(layout, docker, logger, skip_sysroot=True).run()

    assert not any(SYSROOT_IMAGE in command for command in docker.commands())
    assert layout.sysroot_tar.read_bytes() == b"cached"


def test_skip_sysroot_without_cache_still_builds_it(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    _pipeline(layout, docker, logger, skip_sysroot=True).run()

    assert any(f"-t {SYSROOT_IMAGE}" in command for command in docker.commands())


def test_clean_removes_images_tarball_and_output(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    layout.sysroot_tar.write_bytes(b"old")
    (layout.output_dir / "stale").mkdir(parents=True)
    docker.fail = {"docker rmi": 1}
    pipeline = _pipeline(layout, docker, logger, clean=True)

    pipeline.clean()

    assert docker.commands() == [f"docker rmi {SYSROOT_IMAGE}", f"docker rmi {CROSS_IMAGE}"]
    assert not layout.sysroot_tar.exists()
    assert not layout.output_dir.exists()


def test_missing_dockerfile_is_a_validation_error(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    layout.cross_dockerfile.unlink()

    with pytest.raises(ValidationError) as excinfo:
        _pipeline(layout, docker, logger).run()

    assert excinfo.value.exit_code == 1
    assert "Dockerfile.cross-compile" in str(excinfo.value)
    assert docker.calls == []


def test_binfmt_is_installed_when_probe_fails(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    docker.stdout = {"uname -m": "x86_64\n"}

    _pipeline(layout, docker, logger).ensure_binfmt()

    assert docker.commands()[-1] == "docker run --privileged --rm tonistiigi/binfmt --install arm64"
    assert docker.calls[0].capture is True


def test_missing_sysroot_tarball_fails_stage_one(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    del docker.effects[f":/output {SYSROOT_IMAGE}"]

    with pytest.raises(CrossBuildError):
        _pipeline(layout, docker, logger).run()

    assert not any(CROSS_IMAGE in command for command in docker.commands())


def test_missing_binary_fails_verification(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    del docker.effects[f"{CROSS_IMAGE} bash"]

    with pytest.raises(CrossBuildError) as excinfo:
        _pipeline(layout, docker, logger).run()

    assert "ffmpeg binary not found" in str(excinfo.value)


def test_docker_failure_propagates_exit_status(
    layout: CrossBuildLayout,
    docker: RecordingRunner,
    logger: StructuredLogger,
) -> None:
    docker.fail = {f"-t {CROSS_IMAGE}": 17}

    with pytest.raises(CommandError) as excinfo:
        _pipeline(layout, docker, logger).run()

    assert excinfo.value.exit_code == 17
