"""Source fetch helpers."""

from .git import CLONE_DEPTH, shallow_clone

__all__ = ["CLONE_DEPTH", "shallow_clone"]
