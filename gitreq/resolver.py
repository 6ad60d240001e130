"""Turn an origin URL into a ready-to-use Remote."""

import logging
from collections.abc import Callable

import requests

from gitreq.config import AppConfig
from gitreq.credentials import CredentialStore, GitConfigCredentialStore, prompt_for_token, resolve_api_key
from gitreq.origin import classify, get_bitbucket_project_name, get_domain, get_github_project_name
from gitreq.remotes.base import MalformedOrigin, Remote
from gitreq.remotes.bitbucket import BitbucketRemote
from gitreq.remotes.github import GitHubRemote
from gitreq.remotes.gitlab import GitLabRemote
from gitreq.services.git.config import GitConfig

GITHUB_DOMAIN = "github.com"
PROJECT_ID_KEY = "projectid"

logger = logging.getLogger(__name__)


def resolve_remote(
    origin: str,
    config: AppConfig | None = None,
    git_config: GitConfig | None = None,
    credentials: CredentialStore | None = None,
    prompt: Callable[[str], str] = prompt_for_token,
    session: requests.Session | None = None,
) -> Remote:
    """Pick the provider for ``origin`` and return its Remote.

    The API token is resolved before the client is built. For GitLab the
    project ID is read from ``req.<domain>.projectid`` or resolved through
    the API and then stored there.

    Raises:
        MalformedOrigin: If the origin has no domain, path, or GitLab namespace
        RemoteError: If the GitLab project ID cannot be resolved
    """
    config = config or AppConfig()
    git_config = git_config or GitConfig()
    credentials = credentials or GitConfigCredentialStore(git_config)
    timeout = config.http.timeout

    domain = get_domain(origin)
    logger.debug("Origin %s has domain %s", origin, domain)

    if domain == GITHUB_DOMAIN:
        name = get_github_project_name(origin)
        api_key = resolve_api_key(domain, credentials, prompt, preset=config.github_token_resolved)
        return GitHubRemote(name=name, origin=origin, api_key=api_key, timeout=timeout, session=session)

    if domain in config.bitbucket.domains:
        name = get_bitbucket_project_name(origin)
        api_key = resolve_api_key(domain, credentials, prompt, preset=config.bitbucket_token_resolved)
        return BitbucketRemote(
            domain=domain,
            name=name,
            origin=origin,
            api_key=api_key,
            api_root=config.bitbucket.api_url,
            timeout=timeout,
            session=session,
        )

    # Any other host is treated as a GitLab instance
    parts = classify(origin)
    if parts.namespace is None:
        raise MalformedOrigin("Could not parse the GitLab project namespace from the origin.")
    api_key = resolve_api_key(domain, credentials, prompt, preset=config.gitlab_token_resolved)
    remote = GitLabRemote(
        domain=domain,
        name=parts.name,
        namespace=parts.namespace,
        origin=origin,
        api_key=api_key,
        project_id=git_config.get_scoped(domain, PROJECT_ID_KEY),
        timeout=timeout,
        session=session,
    )
    if remote.project_id is None:
        project_id = remote.get_project_id()
        git_config.set_scoped(domain, PROJECT_ID_KEY, project_id)
    logger.info("Got project ID: %s", remote.project_id)
    return remote
