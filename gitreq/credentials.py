"""API token lookup: configured token, then stored token, then prompt.

A token entered at the prompt is persisted so the user is asked at most
once per domain.
"""

import getpass
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from gitreq.remotes.base import API_KEY_HELP_URL, CredentialMissing
from gitreq.services.git.config import GitConfig

TOKEN_KEY = "apikey"

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """Per-domain API token storage."""

    @abstractmethod
    def get_token(self, domain: str) -> str | None:
        """Return the stored token for ``domain``, or None if not configured."""
        pass

    @abstractmethod
    def set_token(self, domain: str, token: str) -> None:
        """Persist the token for ``domain``."""
        pass


class GitConfigCredentialStore(CredentialStore):
    """Tokens kept in the repository-local git config as ``req.<domain>.apikey``."""

    def __init__(self, git_config: GitConfig | None = None) -> None:
        self.git_config = git_config or GitConfig()

    def get_token(self, domain: str) -> str | None:
        token = self.git_config.get_scoped(domain, TOKEN_KEY)
        if token is None or not token.strip():
            return None
        return token.strip()

    def set_token(self, domain: str, token: str) -> None:
        self.git_config.set_scoped(domain, TOKEN_KEY, token)


def prompt_for_token(domain: str) -> str:
    """Ask for the API token of ``domain`` on the terminal.

    Raises:
        CredentialMissing: If there is no terminal input or the answer is blank
    """
    print(f"No API token for {domain} found. See {API_KEY_HELP_URL} for instructions.")
    try:
        token = getpass.getpass(f"{domain} API token: ")
    except EOFError as e:
        raise CredentialMissing(f"No API token for {domain} and no terminal to ask for one") from e
    if not token.strip():
        raise CredentialMissing(f"No API token entered for {domain}")
    return token


def _mask(token: str) -> str:
    return f"{token[:4]}..." if len(token) > 8 else "***"


def resolve_api_key(
    domain: str,
    store: CredentialStore,
    prompt: Callable[[str], str] = prompt_for_token,
    preset: str | None = None,
) -> str:
    """Return the API token for ``domain``.

    Order: ``preset`` (config/env, not persisted), the store, then one
    prompt whose stripped answer is saved to the store.

    Raises:
        CredentialMissing: If the prompt yields nothing usable
    """
    if preset and preset.strip():
        logger.debug("Using configured API token for %s", domain)
        return preset.strip()

    token = store.get_token(domain)
    if token:
        logger.debug("Using stored API token for %s: %s", domain, _mask(token))
        return token

    token = prompt(domain).strip()
    if not token:
        raise CredentialMissing(f"No API token entered for {domain}")
    store.set_token(domain, token)
    logger.info("Saved API token for %s", domain)
    return token
