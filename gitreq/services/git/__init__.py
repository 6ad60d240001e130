"""Git operations: repo-local config, origin lookup, request checkout."""

from gitreq.services.git._run import GitRunnerError
from gitreq.services.git.branches import fetch_and_checkout_request, get_current_branch, get_origin_url
from gitreq.services.git.config import GitConfig

__all__ = [
    "GitConfig",
    "GitRunnerError",
    "fetch_and_checkout_request",
    "get_current_branch",
    "get_origin_url",
]
