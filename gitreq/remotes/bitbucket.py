"""Bitbucket remote."""

import logging

import requests

from gitreq.models import MergeRequest
from gitreq.remotes.base import Remote
from gitreq.remotes.schemas import BitbucketPage, BitbucketPullRequest, bitbucket_to_mr

logger = logging.getLogger(__name__)


class BitbucketRemote(Remote):
    """Bitbucket REST API implementation of Remote.

    Repositories are addressed by ``workspace/slug``; the token is sent as
    a Bearer header. Pull request branches are not name-addressable, so
    local branches follow the ``pullrequests/<id>`` convention.
    """

    has_useful_branch_names = False

    def __init__(
        self,
        domain: str,
        name: str,
        origin: str,
        api_key: str,
        api_root: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            domain=domain,
            name=name,
            origin=origin,
            api_root=api_root,
            api_key=api_key,
            project_id=name,
            timeout=timeout,
            session=session,
        )
        self._session.headers["Authorization"] = f"Bearer {api_key}"

    def get_project_id(self) -> str:
        return self.name

    def get_request_branch(self, request_id: int) -> str:
        # Same name list_requests() shows, rather than the pr/<id> used for GitHub
        return f"pullrequests/{request_id}"

    def get_remote_request_ref(self, request_id: int) -> str:
        return f"pull/{request_id}/head"

    def list_requests(self) -> list[MergeRequest]:
        """List open pull requests (first page only)."""
        logger.debug("Querying for Bitbucket PRs for %r", self)
        url = f"{self.api_root}/{self.get_project_id()}/pullrequests"
        data = self._get_json(
            url,
            BitbucketPage | list[BitbucketPullRequest],
            params={"state": "OPEN"},
        )
        pulls = data.values if isinstance(data, BitbucketPage) else data
        return [bitbucket_to_mr(pr) for pr in pulls]
