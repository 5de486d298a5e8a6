"""Shallow git checkouts into a freshly emptied scratch directory."""

from __future__ import annotations

import shutil
from collections.abc import Mapping
from pathlib import Path

from ffcross.errors import FetchError
from ffcross.runner import Runner

CLONE_DEPTH = 1


def shallow_clone(
    repo: str,
    dest: Path,
    *,
    runner: Runner,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Remove ``dest`` entirely, then clone the default branch of ``repo`` into it."""
    if dest.exists() or dest.is_symlink():
        if dest.is_dir() and not dest.is_symlink():
            shutil.rmtree(dest)
        else:
            dest.unlink()
    dest.parent.mkdir(parents=True, exist_ok=True)

    result = runner(
        ["git", "clone", "--depth", str(CLONE_DEPTH), repo, str(dest)],
        env=env,
    )
    if not result.ok:
        raise FetchError(
            "Git clone failed.",
            returncode=result.returncode,
            hint="Check network access and that the repository URL is reachable.",
            context={
                "operation": "shallow_clone",
                "repo": repo,
                "dest": str(dest),
                "stderr": result.stderr.strip(),
            },
        )
    return dest
