"""Abstract base class for Git hosting remotes and the errors they raise."""

import logging
from abc import ABC, abstractmethod
from typing import Any, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from gitreq.models import MergeRequest

PROJECT_ID_HELP_URL = "https://github.com/arusahni/git-req/wiki/Finding-Project-IDs"
API_KEY_HELP_URL = "https://github.com/arusahni/git-req/wiki/API-Keys"

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RemoteError(Exception):
    """Base class for errors raised while talking to a remote."""

    pass


class MalformedOrigin(RemoteError):
    """Raised when the origin URL has no domain, path, or required namespace."""

    pass


class TransportFailure(RemoteError):
    """Raised when the HTTP request could not be sent or completed."""

    pass


class UnexpectedResponseShape(RemoteError):
    """Raised when a response body is not the JSON document we expect."""

    def __init__(self, message: str = "failed to read response") -> None:
        super().__init__(message)


class RequestFailed(RemoteError):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"API error {status_code}: {message}")
        self.status_code = status_code


class ProjectResolutionError(RemoteError):
    """Raised when a GitLab project ID cannot be found."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"{reason}. Unable to get the project ID from the GitLab API.\n"
            f"Find and configure your project ID using the instructions at: {PROJECT_ID_HELP_URL}"
        )
        self.reason = reason


class UnresolvableNamespace(ProjectResolutionError):
    """The namespace lookup failed or returned an unknown kind."""

    pass


class ProjectNotFound(ProjectResolutionError):
    """No project in the namespace matched the project name."""

    pass


class CredentialMissing(RemoteError):
    """Raised when no API token is configured and none could be asked for."""

    pass


class Remote(ABC):
    """A Git hosting remote (GitHub, GitLab, or Bitbucket) for one origin.

    Subclasses set the auth header in ``__init__`` and implement the
    provider's endpoints. Project-scoped calls must go through
    ``get_project_id()`` so identity is resolved before the request.
    """

    #: Whether listed source branches are real server branch names.
    has_useful_branch_names: bool = False

    def __init__(
        self,
        *,
        domain: str,
        name: str,
        origin: str,
        api_root: str,
        api_key: str,
        project_id: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.domain = domain
        self.name = name
        self.origin = origin
        self.api_root = api_root.rstrip("/")
        self.api_key = api_key
        self.project_id = project_id
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(domain={self.domain!r}, name={self.name!r}, "
            f"project_id={self.project_id!r}, api_root={self.api_root!r})"
        )

    @abstractmethod
    def get_project_id(self) -> str:
        """Return the identifier the provider API addresses the project by.

        Raises:
            RemoteError: If the identity cannot be resolved
        """
        pass

    @abstractmethod
    def get_request_branch(self, request_id: int) -> str:
        """Return the local branch name for the request with the given ID."""
        pass

    @abstractmethod
    def get_remote_request_ref(self, request_id: int) -> str:
        """Return the ref to fetch from origin for the given request."""
        pass

    @abstractmethod
    def list_requests(self) -> list[MergeRequest]:
        """List the open merge/pull requests of the project.

        Raises:
            RemoteError: If the API call fails or the response is malformed
        """
        pass

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportFailure(f"Failed to send request to {self.domain}: {e}") from e
        logger.debug("Response: %s %s", resp.status_code, url)
        return resp

    def _get_json(self, url: str, schema: type[T] | Any, params: dict | None = None) -> T:
        """GET ``url`` and validate the JSON body against ``schema``."""
        resp = self._request("GET", url, params=params)
        if resp.status_code >= 400:
            raise RequestFailed(resp.status_code, _error_message(resp))
        return _parse(resp, schema)


def _parse(resp: requests.Response, schema: type[T] | Any) -> T:
    try:
        return TypeAdapter(schema).validate_python(resp.json())
    except (ValueError, ValidationError) as e:
        logger.debug("Unexpected response body: %s", e)
        raise UnexpectedResponseShape() from e


def _error_message(resp: requests.Response) -> str:
    msg = resp.text
    try:
        data = resp.json()
        if isinstance(data, dict):
            error = data.get("error")
            # Bitbucket nests the message: {"error": {"message": ...}}
            if isinstance(error, dict):
                error = error.get("message")
            msg = data.get("message") or error or msg
    except ValueError:
        pass
    return str(msg)
