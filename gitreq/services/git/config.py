"""Repository-local git config under the ``req`` section.

Keys are stored as ``req.<key>``; per-remote values are scoped by the
remote's domain as ``req.<domain>.<key>`` (e.g. ``req.gitlab.com.apikey``).
"""

import logging
from pathlib import Path

from gitreq.services.git._run import GitRunnerError, _run_git

SECTION = "req"

logger = logging.getLogger(__name__)


class GitConfig:
    """Read and write ``req.*`` keys in the repository-local git config."""

    def __init__(self, repo_dir: Path | None = None) -> None:
        self.repo_dir = Path(repo_dir) if repo_dir is not None else Path.cwd()

    def get(self, key: str) -> str | None:
        """Return ``req.<key>`` or None when unset."""
        return self._get(f"{SECTION}.{key}")

    def set(self, key: str, value: str) -> None:
        """Store ``req.<key>`` in the local config."""
        self._set(f"{SECTION}.{key}", value)

    def get_scoped(self, domain: str, key: str) -> str | None:
        """Return ``req.<domain>.<key>`` or None when unset."""
        return self._get(f"{SECTION}.{domain}.{key}")

    def set_scoped(self, domain: str, key: str, value: str) -> None:
        """Store ``req.<domain>.<key>`` in the local config."""
        self._set(f"{SECTION}.{domain}.{key}", value)

    def unset_scoped(self, domain: str, key: str) -> bool:
        """Remove ``req.<domain>.<key>``; return False if it was not set."""
        name = f"{SECTION}.{domain}.{key}"
        try:
            _run_git(["config", "--local", "--unset", name], cwd=self.repo_dir, log=logger)
        except GitRunnerError as e:
            # git config exits with 5 when the key does not exist
            if e.returncode == 5:
                return False
            raise
        return True

    def _get(self, name: str) -> str | None:
        try:
            value = _run_git(["config", "--local", "--get", name], cwd=self.repo_dir, log=logger)
        except GitRunnerError as e:
            # git config exits with 1 when the key is missing
            if e.returncode == 1:
                logger.debug("No git config value for %s", name)
                return None
            raise
        return value or None

    def _set(self, name: str, value: str) -> None:
        _run_git(["config", "--local", name, value], cwd=self.repo_dir, log=logger)
