"""Small helpers for running Git commands against one repository path."""

from __future__ import annotations

import subprocess

from .constants import DEFAULT_GIT_BIN, DEFAULT_REMOTE, DETACHED_HEAD
from .types import GitResult


class GitClient:
    """Every call takes the repository path explicitly; the process cwd is never touched."""

    def __init__(
        self,
        git_bin: str = DEFAULT_GIT_BIN,
        remote: str = DEFAULT_REMOTE,
        timeout: float | None = None,
    ) -> None:
        self.git_bin = git_bin
        self.remote = remote
        self.timeout = timeout

    # ---------- process helpers ----------
    def _run(self, args: list[str], cwd: str) -> GitResult:
        cmd = [self.git_bin, *args]
        try:
            proc = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return GitResult(False, returncode=124, stderr=f"timed out after {self.timeout}s: {' '.join(cmd)}")
        except OSError as e:
            return GitResult(False, returncode=127, stderr=f"{e}")
        return GitResult(
            proc.returncode == 0,
            output=proc.stdout.strip(),
            returncode=proc.returncode,
            stderr=proc.stderr.strip(),
        )

    # ---------- classification ----------
    def git_dir(self, path: str) -> GitResult:
        return self._run(["rev-parse", "--git-dir"], cwd=path)

    # ---------- refs ----------
    def current_branch(self, repo_dir: str) -> str | None:
        """Checked-out branch name, or None when there is none (detached HEAD, unborn, error)."""
        branch = self._run(["branch", "--show-current"], cwd=repo_dir).value
        if not branch:
            branch = self._run(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_dir).value
        if not branch or branch == DETACHED_HEAD:
            return None
        return branch

    def rev_parse(self, repo_dir: str, ref: str) -> str | None:
        return self._run(["rev-parse", ref], cwd=repo_dir).value

    def head(self, repo_dir: str) -> str | None:
        return self.rev_parse(repo_dir, "HEAD")

    def remote_ref(self, branch: str) -> str:
        return f"{self.remote}/{branch}"

    # ---------- sync ----------
    def fetch_all(self, repo_dir: str) -> GitResult:
        return self._run(["fetch", "--all"], cwd=repo_dir)

    def pull(self, repo_dir: str, branch: str) -> GitResult:
        return self._run(["pull", "--recurse-submodules", self.remote, branch], cwd=repo_dir)
