"""GitLab remote (gitlab.com and self-hosted instances)."""

import logging
from urllib.parse import quote

import requests

from gitreq.models import MergeRequest
from gitreq.remotes.base import (
    MalformedOrigin,
    ProjectNotFound,
    Remote,
    RequestFailed,
    UnexpectedResponseShape,
    UnresolvableNamespace,
    _parse,
)
from gitreq.remotes.schemas import GitLabMergeRequest, GitLabNamespace, GitLabProject, gitlab_to_mr

logger = logging.getLogger(__name__)


class GitLabRemote(Remote):
    """GitLab REST API (v4) implementation of Remote.

    Projects are addressed by numeric ID. The ID is resolved lazily from
    ``namespace/name`` on first use and cached on the instance; callers
    persist it (see ``gitreq.resolver``) so the lookup runs once per
    repository.
    """

    has_useful_branch_names = True

    def __init__(
        self,
        domain: str,
        name: str,
        namespace: str | None,
        origin: str,
        api_key: str,
        project_id: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            domain=domain,
            name=name,
            origin=origin,
            api_root=f"https://{domain}/api/v4",
            api_key=api_key,
            project_id=project_id or None,
            timeout=timeout,
            session=session,
        )
        self.namespace = namespace
        self._source_branches: dict[int, str] = {}
        self._session.headers["PRIVATE-TOKEN"] = api_key

    def get_project_id(self) -> str:
        """Return the numeric project ID, resolving it on first call.

        Raises:
            MalformedOrigin: If the origin has no namespace
            UnresolvableNamespace: If the fallback namespace lookup fails
            ProjectNotFound: If no project in the namespace has this name
        """
        if self.project_id is None:
            self.project_id = str(self._query_project_id())
            logger.info("Resolved GitLab project ID %s for %s/%s", self.project_id, self.namespace, self.name)
        return self.project_id

    def get_request_branch(self, request_id: int) -> str:
        """Return the source branch of the merge request (fetched once per ID)."""
        if request_id not in self._source_branches:
            url = f"{self.api_root}/projects/{self.get_project_id()}/merge_requests/{request_id}"
            mr = self._get_json(url, GitLabMergeRequest)
            self._source_branches[request_id] = mr.source_branch
        return self._source_branches[request_id]

    def get_remote_request_ref(self, request_id: int) -> str:
        # Source branches live on the server under their own name
        return self.get_request_branch(request_id)

    def list_requests(self) -> list[MergeRequest]:
        """List opened merge requests (first page)."""
        logger.debug("Querying GitLab MRs for %r", self)
        url = f"{self.api_root}/projects/{self.get_project_id()}/merge_requests"
        mrs = self._get_json(url, list[GitLabMergeRequest], params={"state": "opened"})
        return [gitlab_to_mr(mr) for mr in mrs]

    def _query_project_id(self) -> int:
        """Look the project up by path, falling back to a namespace search."""
        if not self.namespace:
            raise MalformedOrigin("Could not parse the GitLab project namespace from the origin.")
        logger.debug("Querying GitLab Project API for %r", self)
        path = quote(f"{self.namespace}/{self.name}", safe="")
        resp = self._request("GET", f"{self.api_root}/projects/{path}")
        if resp.status_code >= 400:
            # The path lookup misses projects whose name differs from their path
            logger.info("Project lookup returned %s, searching namespace %s", resp.status_code, self.namespace)
            return self._search_project_id()
        project = _parse(resp, GitLabProject)
        return project.id

    def _search_project_id(self) -> int:
        """Find the project by exact name among the namespace's projects."""
        try:
            namespace = self._get_json(f"{self.api_root}/namespaces/{quote(self.namespace, safe='')}", GitLabNamespace)
        except (RequestFailed, UnexpectedResponseShape) as e:
            raise UnresolvableNamespace(f"Couldn't find namespace {self.namespace!r}") from e
        logger.debug("Querying namespace %r", namespace)

        if namespace.kind == "user":
            url = f"{self.api_root}/users/{namespace.id}/projects"
            params = None
        elif namespace.kind == "group":
            url = f"{self.api_root}/groups/{namespace.id}/projects"
            params = {"search": self.name}
        else:
            logger.error("Unknown namespace kind %r", namespace.kind)
            raise UnresolvableNamespace(f"Unknown namespace kind {namespace.kind!r}")

        try:
            projects = self._get_json(url, list[GitLabProject], params=params)
        except (RequestFailed, UnexpectedResponseShape) as e:
            raise ProjectNotFound(f"Couldn't list projects of namespace {self.namespace!r}") from e
        for project in projects:
            if project.name == self.name:
                return project.id
        raise ProjectNotFound(f"Couldn't find project {self.name!r} in namespace {self.namespace!r}")
