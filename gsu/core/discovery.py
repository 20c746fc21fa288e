"""Repository discovery under a root directory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterator

from .constants import GIT_DIR_ENTRY
from .git_client import GitClient


@dataclass(frozen=True)
class Candidate:
    name: str  # path relative to the scanned root
    path: str
    is_repo: bool


def list_subdirs(root: str) -> list[str]:
    """Names of the subdirectories of root: visible ones first, then hidden, each sorted."""
    names = [n for n in os.listdir(root) if os.path.isdir(os.path.join(root, n))]
    visible = sorted(n for n in names if not n.startswith("."))
    hidden = sorted(n for n in names if n.startswith(".") and n not in (".", ".."))
    return visible + hidden


def is_git_repo(path: str, git: GitClient) -> bool:
    if os.path.isdir(os.path.join(path, GIT_DIR_ENTRY)):
        return True
    return git.git_dir(path).ok


def iter_candidates(root: str, git: GitClient, depth: int = 1, _prefix: str = "") -> Iterator[Candidate]:
    """Yield every subdirectory up to ``depth`` levels below root, classified.

    Repositories are never descended into; plain directories are searched
    again while depth allows.
    """
    if depth < 1:
        return
    try:
        names = list_subdirs(root)
    except OSError:
        # unreadable nested directories are left out; the root itself must be listable
        if not _prefix:
            raise
        return
    for name in names:
        path = os.path.join(root, name)
        rel = os.path.join(_prefix, name) if _prefix else name
        repo = is_git_repo(path, git)
        yield Candidate(rel, path, repo)
        if not repo and depth > 1:
            yield from iter_candidates(path, git, depth - 1, rel)
