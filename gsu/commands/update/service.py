"""Service: fetch and pull every git repository under a root directory."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed

from ...core import output
from ...core.discovery import Candidate, iter_candidates
from ...core.git_client import GitClient
from ...core.output import Reporter
from ...core.types import GitResult, Outcome, RepoResult, RunSummary


def _report_git_error(reporter: Reporter, result: GitResult, verbose: bool) -> None:
    if verbose and result.stderr:
        reporter.error(f"git exited with {result.returncode}: {result.stderr}")


def update_repo(repo_dir: str, git: GitClient, reporter: Reporter, *, name: str | None = None, verbose: bool = False) -> Outcome:
    """Fetch one repository and pull its current branch when it lags the remote."""
    name = name or os.path.basename(repo_dir.rstrip(os.sep))
    reporter.info(f"Processing repository: {name}")

    if not (os.path.isdir(repo_dir) and os.access(repo_dir, os.X_OK)):
        reporter.error(f"Cannot enter directory: {repo_dir}")
        return Outcome.failed

    branch = git.current_branch(repo_dir)
    if branch is None:
        reporter.warning(f"Repository {name} has no current branch, skipping update")
        return Outcome.skipped
    reporter.info(f"Current branch: {branch}")

    before = git.head(repo_dir)

    reporter.info("Fetching remote updates...")
    fetched = git.fetch_all(repo_dir)
    if not fetched.ok:
        reporter.error(f"Failed to fetch remote updates: {name}")
        _report_git_error(reporter, fetched, verbose)
        return Outcome.failed

    remote_commit = git.rev_parse(repo_dir, git.remote_ref(branch))
    local_commit = git.rev_parse(repo_dir, branch)
    if remote_commit == local_commit:
        reporter.info(f"Repository {name} is already up to date")
        return Outcome.up_to_date

    reporter.info("Updates detected, pulling latest changes...")
    pulled = git.pull(repo_dir, branch)
    if not pulled.ok:
        reporter.error(f"Failed to update repository {name}")
        _report_git_error(reporter, pulled, verbose)
        return Outcome.failed

    if git.head(repo_dir) != before:
        reporter.success(f"Repository {name} updated successfully")
        return Outcome.updated
    reporter.info(f"Repository {name} is already up to date")
    return Outcome.pulled_no_change


def _update_one(candidate: Candidate, git: GitClient, verbose: bool, buffered: bool) -> RepoResult:
    reporter = Reporter(buffered=buffered)
    outcome = update_repo(candidate.path, git, reporter, name=os.path.basename(candidate.name), verbose=verbose)
    return RepoResult(candidate.name, candidate.path, outcome, reporter.lines)


def _print_summary(summary: RunSummary, dry_run: bool) -> None:
    output.info("Done!")
    output.info(f"Total repositories: {summary.total}")
    if dry_run:
        return
    output.success(f"Updated successfully: {summary.updated}")
    if summary.skipped > 0:
        output.warning(f"Skipped: {summary.skipped}")
    if summary.failed > 0:
        output.error(f"Failed: {summary.failed}")


def update_all(
    *,
    root: str,
    git: GitClient,
    dry_run: bool = False,
    verbose: bool = False,
    jobs: int = 1,
    depth: int = 1,
) -> RunSummary:
    """Classify the subdirectories of root and update every repository found."""
    output.info(f"Updating all git repositories under {root}...")
    summary = RunSummary()
    pending: list[Candidate] = []

    for candidate in iter_candidates(root, git, depth=depth):
        if not candidate.is_repo:
            if verbose:
                output.info(f"Skipping non-git directory: {candidate.name}/")
            continue
        if dry_run:
            output.info(f"[DRY-RUN] Would update repository: {os.path.basename(candidate.name)}")
            summary.record(Outcome.dry_run)
            continue
        if jobs <= 1:
            summary.record(_update_one(candidate, git, verbose, buffered=False).outcome)
        else:
            pending.append(candidate)

    if pending:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            futures = {pool.submit(_update_one, c, git, verbose, True): c for c in pending}
            for fut in as_completed(futures):
                candidate = futures[fut]
                try:
                    result = fut.result()
                except Exception as e:
                    output.error(f"Failed to update repository {candidate.name}: {e!r}")
                    summary.record(Outcome.failed)
                    continue
                for level, message in result.lines:
                    output.echo_line(level, message)
                summary.record(result.outcome)

    _print_summary(summary, dry_run)
    return summary
