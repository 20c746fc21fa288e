"""Shared fixtures: a scripted git client and helpers for real repositories."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from gsu.core.git_client import GitClient
from gsu.core.types import GitResult

GSU_ENV = ("GSU_GIT_BIN", "GSU_REMOTE", "GSU_JOBS", "GSU_DEPTH", "GSU_GIT_TIMEOUT")

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git binary not available")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's GSU_* settings out of the tests."""
    for name in GSU_ENV:
        monkeypatch.delenv(name, raising=False)


def ok(output: str = "") -> GitResult:
    return GitResult(True, output=output)


def fail(returncode: int = 1, stderr: str = "") -> GitResult:
    return GitResult(False, returncode=returncode, stderr=stderr)


NOT_A_REPO = fail(128, "fatal: not a git repository (or any of the parent directories): .git")


class FakeGit(GitClient):
    """GitClient whose subprocess layer answers from a script.

    ``script`` maps (repo basename, git args) to a GitResult, or to a list of
    GitResults handed out one per call (the last one repeats). Anything not
    scripted fails like git outside a repository.
    """

    def __init__(self, script=None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.script = dict(script or {})
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def _run(self, args: list[str], cwd: str) -> GitResult:
        key = (os.path.basename(cwd.rstrip(os.sep)), tuple(args))
        self.calls.append(key)
        answer = self.script.get(key, NOT_A_REPO)
        if isinstance(answer, list):
            return answer.pop(0) if len(answer) > 1 else answer[0]
        return answer

    def commands(self, repo: str) -> list[tuple[str, ...]]:
        return [args for name, args in self.calls if name == repo]


def scripted_repo(
    name: str,
    *,
    branch: str | None = "main",
    before: str = "a" * 40,
    after: str | None = None,
    local: str | None = None,
    remote: str | None = None,
    fetch: GitResult | None = None,
    pull: GitResult | None = None,
) -> dict:
    """Script git's answers for one repository's update sequence."""
    local = local or before
    remote = remote or local
    script = {
        (name, ("branch", "--show-current")): ok(branch or ""),
        (name, ("rev-parse", "--abbrev-ref", "HEAD")): ok(branch or "HEAD"),
        (name, ("fetch", "--all")): fetch or ok(),
        # HEAD before the fetch, then after the pull
        (name, ("rev-parse", "HEAD")): [ok(before), ok(after or before)],
    }
    if branch:
        script[(name, ("rev-parse", f"origin/{branch}"))] = ok(remote)
        script[(name, ("rev-parse", branch))] = ok(local)
        script[(name, ("pull", "--recurse-submodules", "origin", branch))] = pull or ok()
    return script


def make_dirs(root: Path, *names: str, git: bool = True) -> None:
    for name in names:
        (root / name).mkdir(parents=True)
        if git:
            (root / name / ".git").mkdir()


# ---------- real repositories ----------
def git(*args: str, cwd: Path) -> str:
    out = subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)
    return out.stdout.strip()


def commit(repo: Path, filename: str, content: str) -> str:
    (repo / filename).write_text(content, encoding="utf-8")
    git("add", filename, cwd=repo)
    git("commit", "-q", "-m", f"update {filename}", cwd=repo)
    return git("rev-parse", "HEAD", cwd=repo)


@pytest.fixture
def git_env(monkeypatch, tmp_path):
    """Isolate git from the user's config and give it an identity."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(var, "gsu tests")
    for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(var, "gsu@example.invalid")
    return home


@pytest.fixture
def workspace(git_env, tmp_path):
    """A root directory holding one clone ``alpha`` of a bare origin.

    Returns (root, origin, upstream) where ``upstream`` is a second clone
    outside root used to push new commits to origin.
    """
    origin = tmp_path / "remotes" / "alpha.git"
    origin.mkdir(parents=True)
    git("init", "-q", "--bare", cwd=origin)
    git("symbolic-ref", "HEAD", "refs/heads/main", cwd=origin)

    upstream = tmp_path / "upstream"
    upstream.mkdir()
    git("init", "-q", cwd=upstream)
    git("symbolic-ref", "HEAD", "refs/heads/main", cwd=upstream)
    commit(upstream, "README.md", "first\n")
    git("remote", "add", "origin", str(origin), cwd=upstream)
    git("push", "-q", "origin", "main", cwd=upstream)

    root = tmp_path / "root"
    root.mkdir()
    git("clone", "-q", str(origin), str(root / "alpha"), cwd=tmp_path)
    return root, origin, upstream
