import dataclasses
import os
from pathlib import Path

import pytest

from ffcross.environment import BuildEnvironment


def test_defaults_are_relative_to_cwd(tmp_path: Path) -> None:
    env = BuildEnvironment.from_environ({}, cwd=tmp_path, jobs=2)

    assert env.prefix == tmp_path / "ffmpeg-static-deps"
    assert env.workdir == tmp_path / ".deps-build"
    assert env.jobs == 2
    assert env.checkout_dir("fdk-aac") == tmp_path / ".deps-build" / "fdk-aac"


def test_prefix_and_workdir_come_from_environment(tmp_path: Path) -> None:
    env = BuildEnvironment.from_environ(
        {"PREFIX": str(tmp_path / "p"), "WORKDIR": str(tmp_path / "w")},
        cwd=tmp_path / "elsewhere",
    )

    assert env.prefix == tmp_path / "p"
    assert env.workdir == tmp_path / "w"
    assert env.env["PREFIX"] == str(tmp_path / "p")


def test_pkg_config_path_prepends_prefix_dirs(tmp_path: Path) -> None:
    env = BuildEnvironment.from_environ(
        {"PKG_CONFIG_PATH": "/opt/custom/pkgconfig"},
        cwd=tmp_path,
    )

    assert env.env["PKG_CONFIG_PATH"].split(os.pathsep) == [
        str(env.prefix / "lib" / "pkgconfig"),
        str(env.prefix / "lib" / "aarch64-linux-gnu" / "pkgconfig"),
        "/opt/custom/pkgconfig",
    ]
    assert env.pkgconfig_dirs == (
        env.prefix / "lib" / "pkgconfig",
        env.prefix / "lib" / "aarch64-linux-gnu" / "pkgconfig",
    )


def test_pkg_config_path_has_no_empty_entry_when_unset(tmp_path: Path) -> None:
    env = BuildEnvironment.from_environ({}, cwd=tmp_path)

    assert "" not in env.env["PKG_CONFIG_PATH"].split(os.pathsep)


def test_pic_flags_are_appended_to_caller_flags(tmp_path: Path) -> None:
    env = BuildEnvironment.from_environ({"CFLAGS": "-O2 -g"}, cwd=tmp_path)

    assert env.env["CFLAGS"] == "-O2 -g -fPIC"
    assert env.env["CXXFLAGS"] == "-fPIC"


def test_user_local_bin_leads_path(tmp_path: Path) -> None:
    env = BuildEnvironment.from_environ(
        {"HOME": str(tmp_path / "home"), "PATH": "/usr/bin:/bin"},
        cwd=tmp_path,
    )

    assert env.env["PATH"] == os.pathsep.join([str(tmp_path / "home" / ".local" / "bin"), "/usr/bin:/bin"])


def test_caller_environment_is_not_mutated(tmp_path: Path) -> None:
    source = {"CFLAGS": "-O2", "PATH": "/usr/bin"}

    BuildEnvironment.from_environ(source, cwd=tmp_path)

    assert source == {"CFLAGS": "-O2", "PATH": "/usr/bin"}


def test_environment_is_immutable(tmp_path: Path) -> None:
    env = BuildEnvironment.from_environ({}, cwd=tmp_path)

    with pytest.raises(dataclasses.FrozenInstanceError):
        env.prefix = tmp_path  # type: ignore[misc]


def test_construction_does_not_touch_filesystem_until_ensured(tmp_path: Path) -> None:
    env = BuildEnvironment.from_environ({}, cwd=tmp_path)
    assert not env.prefix.exists()

    env.ensure_directories()
    env.ensure_directories()

    assert env.prefix.is_dir()
    assert env.workdir.is_dir()
