"""GitHub remote."""

import logging

import requests

from gitreq.models import MergeRequest
from gitreq.remotes.base import Remote
from gitreq.remotes.schemas import GitHubPullRequest, github_to_mr

GITHUB_API_ROOT = "https://api.github.com/repos"

logger = logging.getLogger(__name__)


class GitHubRemote(Remote):
    """GitHub REST API implementation of Remote.

    The project is addressed by ``owner/name``, so no lookup is needed.
    Pull request heads are fetched from ``pull/<id>/head`` into ``pr/<id>``.
    """

    has_useful_branch_names = False

    def __init__(
        self,
        name: str,
        origin: str,
        api_key: str,
        api_root: str = GITHUB_API_ROOT,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            domain="github.com",
            name=name,
            origin=origin,
            api_root=api_root,
            api_key=api_key,
            project_id=name,
            timeout=timeout,
            session=session,
        )
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"token {api_key}",
            }
        )

    def get_project_id(self) -> str:
        return self.name

    def get_request_branch(self, request_id: int) -> str:
        return f"pr/{request_id}"

    def get_remote_request_ref(self, request_id: int) -> str:
        return f"pull/{request_id}/head"

    def list_requests(self) -> list[MergeRequest]:
        """List open pull requests (first page)."""
        logger.debug("Querying for GitHub PRs for %r", self)
        url = f"{self.api_root}/{self.get_project_id()}/pulls"
        pulls = self._get_json(url, list[GitHubPullRequest], params={"state": "open"})
        return [github_to_mr(pr) for pr in pulls]
