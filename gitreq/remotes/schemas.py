"""Provider API payloads and their mapping onto MergeRequest."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from gitreq.models import MergeRequest


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GitHubPullRequest(_Payload):
    """Entry of GET /repos/{owner}/{repo}/pulls."""

    number: int
    title: str
    body: str | None = None
    html_url: str | None = None


class GitLabMergeRequest(_Payload):
    """Entry of GET /projects/{id}/merge_requests."""

    id: int
    iid: int
    title: str
    description: str | None = None
    source_branch: str
    target_branch: str | None = None
    web_url: str | None = None


class GitLabProject(_Payload):
    """Entry of the GitLab projects endpoints."""

    id: int
    name: str
    path: str | None = None
    path_with_namespace: str | None = None


class GitLabNamespace(_Payload):
    """Response of GET /namespaces/{namespace}."""

    id: int
    kind: str
    name: str | None = None
    path: str | None = None
    full_path: str | None = None


class BitbucketPullRequest(_Payload):
    """Entry of GET /repositories/{workspace}/{slug}/pullrequests.

    ``summary`` is a plain string or Bitbucket's rendered-content object
    (``{"raw": ..., "markup": ..., "html": ...}``).
    """

    id: int
    title: str
    summary: str | dict[str, Any] | None = None


class BitbucketPage(_Payload):
    """Paginated Bitbucket response; only the first page is read."""

    values: list[BitbucketPullRequest]


def github_to_mr(req: GitHubPullRequest) -> MergeRequest:
    return MergeRequest(
        id=req.number,
        title=req.title,
        description=req.body,
        source_branch=f"pr/{req.number}",
    )


def gitlab_to_mr(req: GitLabMergeRequest) -> MergeRequest:
    # iid is the project-scoped number shown in the UI, id is global
    return MergeRequest(
        id=req.iid,
        title=req.title,
        description=req.description,
        source_branch=req.source_branch,
    )


def bitbucket_to_mr(req: BitbucketPullRequest) -> MergeRequest:
    summary = req.summary
    if isinstance(summary, dict):
        summary = summary.get("raw")
    return MergeRequest(
        id=req.id,
        title=req.title,
        description=summary,
        source_branch=f"pullrequests/{req.id}",
    )
