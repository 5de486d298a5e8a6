"""Immutable build environment shared by every build strategy."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PREFIX_NAME = "ffmpeg-static-deps"
DEFAULT_WORKDIR_NAME = ".deps-build"
DEFAULT_MULTIARCH = "aarch64-linux-gnu"
PIC_FLAG = "-fPIC"


@dataclass(frozen=True, slots=True)
class BuildEnvironment:
    prefix: Path
    workdir: Path
    jobs: int = 1
    multiarch: str = DEFAULT_MULTIARCH
    env: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        cwd: Path | None = None,
        jobs: int | None = None,
        multiarch: str = DEFAULT_MULTIARCH,
    ) -> BuildEnvironment:
        """Resolve paths and search-path overrides from ``environ`` once.

        ``PREFIX`` and ``WORKDIR`` default to directories under ``cwd``.
        Caller-supplied ``PKG_CONFIG_PATH`` and ``PATH`` are kept behind the
        prefix and user-local entries; ``CFLAGS``/``CXXFLAGS`` always end in
        ``-fPIC``.
        """
        source = dict(os.environ if environ is None else environ)
        base = Path.cwd() if cwd is None else cwd
        prefix = Path(source.get("PREFIX") or base / DEFAULT_PREFIX_NAME).absolute()
        workdir = Path(source.get("WORKDIR") or base / DEFAULT_WORKDIR_NAME).absolute()
        home = Path(source.get("HOME") or Path.home())

        env = dict(source)
        env["PREFIX"] = str(prefix)
        env["WORKDIR"] = str(workdir)
        env["PKG_CONFIG_PATH"] = _join_paths(
            str(prefix / "lib" / "pkgconfig"),
            str(prefix / "lib" / multiarch / "pkgconfig"),
            source.get("PKG_CONFIG_PATH", ""),
        )
        for var in ("CFLAGS", "CXXFLAGS"):
            env[var] = f"{source.get(var, '')} {PIC_FLAG}".strip()
        env["PATH"] = _join_paths(str(home / ".local" / "bin"), source.get("PATH", ""))

        return cls(
            prefix=prefix,
            workdir=workdir,
            jobs=jobs or os.cpu_count() or 1,
            multiarch=multiarch,
            env=env,
        )

    @property
    def pkgconfig_dirs(self) -> tuple[Path, ...]:
        return (
            self.prefix / "lib" / "pkgconfig",
            self.prefix / "lib" / self.multiarch / "pkgconfig",
        )

    def checkout_dir(self, project: str) -> Path:
        return self.workdir / project

    def ensure_directories(self) -> None:
        self.prefix.mkdir(parents=True, exist_ok=True)
        self.workdir.mkdir(parents=True, exist_ok=True)


def _join_paths(*entries: str) -> str:
    return os.pathsep.join(entry for entry in entries if entry)
