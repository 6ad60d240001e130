"""Parse ``origin`` remote URLs: domain, project path, name, and namespace.

Both scp-like (``git@host:ns/name.git``) and URL (``https://host/ns/name.git``,
``ssh://git@host:2222/ns/name.git``) forms are supported.
"""

import logging
import re

from gitreq.models import Origin
from gitreq.remotes.base import MalformedOrigin

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][\w+.-]*://")
_HOST_RE = re.compile(r"^(?:[^@/\s]+@)?(?P<domain>[^@:/\s]+)")
_PORT_RE = re.compile(r"^:\d+(?=/)")
_GIT_SUFFIX_RE = re.compile(r"\.git\w*$")


def _split_host(origin: str) -> tuple[str, str]:
    """Return (domain, rest of the URL after the domain and port)."""
    text = origin.strip()
    scheme = _SCHEME_RE.match(text)
    if scheme:
        text = text[scheme.end():]
    match = _HOST_RE.match(text)
    if not match:
        raise MalformedOrigin(f"Invalid remote set: cannot find a domain in {origin!r}")
    rest = text[match.end():]
    if scheme:
        rest = _PORT_RE.sub("", rest)
    return match.group("domain"), rest


def get_domain(origin: str) -> str:
    """Return the host of an origin URL.

    Raises:
        MalformedOrigin: If no domain can be extracted.
    """
    return _split_host(origin)[0]


def get_project_path(origin: str) -> str:
    """Return the project path after the host, without ``.git``.

    ``git@github.com:owner/repo.git`` gives ``owner/repo``.

    Raises:
        MalformedOrigin: If the origin has no path after the host.
    """
    _, rest = _split_host(origin)
    if not rest or rest[0] not in ":/":
        raise MalformedOrigin(f"Invalid remote set: no project path in {origin!r}")
    path = _GIT_SUFFIX_RE.sub("", rest[1:].strip("/"))
    path = path.strip("/")
    if not path:
        raise MalformedOrigin(f"Invalid remote set: no project path in {origin!r}")
    return path


def get_github_project_name(origin: str) -> str:
    """Extract ``owner/name`` from a GitHub origin URL."""
    logger.debug("Getting project name for: %s", origin)
    path = get_project_path(origin)
    if "/" not in path:
        raise MalformedOrigin(f"Could not parse owner/name from the origin {origin!r}")
    return path


# Bitbucket addresses repositories by workspace/slug like GitHub
get_bitbucket_project_name = get_github_project_name


def get_gitlab_project_name(origin: str) -> str:
    """Extract the project name (last path segment) from a GitLab origin URL."""
    logger.debug("Getting project name for: %s", origin)
    return get_project_path(origin).rsplit("/", 1)[-1]


def get_gitlab_project_namespace(origin: str) -> str | None:
    """Extract the segment preceding the project name, or None if absent."""
    logger.debug("Getting project namespace for: %s", origin)
    segments = get_project_path(origin).split("/")
    if len(segments) < 2 or not segments[-2]:
        return None
    return segments[-2]


def classify(origin: str) -> Origin:
    """Split an origin URL into domain, path, name and namespace.

    Raises:
        MalformedOrigin: If the URL has no domain or no project path.
    """
    return Origin(
        url=origin,
        domain=get_domain(origin),
        path=get_project_path(origin),
        name=get_gitlab_project_name(origin),
        namespace=get_gitlab_project_namespace(origin),
    )
