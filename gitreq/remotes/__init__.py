"""Git hosting remotes (base and implementations)."""

from gitreq.remotes.base import (
    CredentialMissing,
    MalformedOrigin,
    ProjectNotFound,
    ProjectResolutionError,
    Remote,
    RemoteError,
    RequestFailed,
    TransportFailure,
    UnexpectedResponseShape,
    UnresolvableNamespace,
)
from gitreq.remotes.bitbucket import BitbucketRemote
from gitreq.remotes.github import GitHubRemote
from gitreq.remotes.gitlab import GitLabRemote

__all__ = [
    "BitbucketRemote",
    "CredentialMissing",
    "GitHubRemote",
    "GitLabRemote",
    "MalformedOrigin",
    "ProjectNotFound",
    "ProjectResolutionError",
    "Remote",
    "RemoteError",
    "RequestFailed",
    "TransportFailure",
    "UnexpectedResponseShape",
    "UnresolvableNamespace",
]
