"""Origin lookup and request branch checkout."""

import logging
from pathlib import Path

from gitreq.services.git._run import _run_git


def get_origin_url(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Return the URL of the ``origin`` remote."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["remote", "get-url", "origin"], cwd=cwd, log=log)


def get_current_branch(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Return the name of the checked out branch (empty when detached)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["branch", "--show-current"], cwd=cwd, log=log)


def fetch_and_checkout_request(
    remote_ref: str,
    local_branch: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Fetch ``remote_ref`` from origin into ``local_branch`` and check it
    out.

    Git refuses to fetch into the checked out branch, so when
    ``local_branch`` is current the ref is pulled instead.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    if get_current_branch(repo_dir=cwd, log=log) == local_branch:
        _run_git(["pull", "origin", remote_ref], cwd=cwd, log=log)
        if log:
            log.info("Updated branch %s from origin %s", local_branch, remote_ref)
        return
    _run_git(["fetch", "origin", f"+{remote_ref}:{local_branch}"], cwd=cwd, log=log)
    _run_git(["checkout", local_branch], cwd=cwd, log=log)
    if log:
        log.info("Checked out branch %s", local_branch)
