"""Data models shared by all providers (Pydantic)."""

from pydantic import BaseModel, ConfigDict


class MergeRequest(BaseModel):
    """An open merge request (GitLab) or pull request (GitHub, Bitbucket)."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: str | None = None
    source_branch: str


class Origin(BaseModel):
    """Parts of an ``origin`` remote URL."""

    model_config = ConfigDict(frozen=True)

    url: str
    domain: str
    path: str
    name: str
    namespace: str | None = None
