"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(``<PROVIDER>_TOKEN`` / ``<PROVIDER>_TOKEN_FILE``). Tokens entered at the
interactive prompt are stored in the repository-local git config instead,
see ``gitreq.credentials``.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_ENV = "GITREQ_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/gitreq/config.yaml")


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so token properties can read env/file
_current_env: dict[str, str] = {}


def _token_or_secret(token: str | None, env_key: str) -> str | None:
    if token and not token.startswith("${") and token.strip():
        return token.strip()
    return _read_secret(env_key, f"{env_key}_FILE")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="%(levelname)s: %(message)s",
        description="Log format",
    )


class HttpConfig(BaseSettings):
    """HTTP transport settings."""

    model_config = SettingsConfigDict(env_prefix="HTTP_", extra="ignore")

    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="Personal access token; use env or secret file")


class GitLabConfig(BaseSettings):
    """GitLab API settings (any domain that is neither GitHub nor
    Bitbucket)."""

    model_config = SettingsConfigDict(env_prefix="GITLAB_", extra="ignore")

    token: str | None = Field(default=None, description="Personal access token")


class BitbucketConfig(BaseSettings):
    """Bitbucket API settings."""

    model_config = SettingsConfigDict(env_prefix="BITBUCKET_", extra="ignore")

    token: str | None = Field(default=None, description="Access token (sent as Bearer)")
    api_url: str = Field(
        default="https://api.bitbucket.org/2.0/repositories",
        description="API root that owner/name is appended to",
    )
    domains: list[str] = Field(default_factory=lambda: ["bitbucket.org"], description="Bitbucket hosts")


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    gitlab: GitLabConfig = Field(default_factory=GitLabConfig)
    bitbucket: BitbucketConfig = Field(default_factory=BitbucketConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or secret file."""
        return _token_or_secret(self.github.token, "GITHUB_TOKEN")

    @property
    def gitlab_token_resolved(self) -> str | None:
        """Resolve GitLab token from config, env or secret file."""
        return _token_or_secret(self.gitlab.token, "GITLAB_TOKEN")

    @property
    def bitbucket_token_resolved(self) -> str | None:
        """Resolve Bitbucket token from config, env or secret file."""
        return _token_or_secret(self.bitbucket.token, "BITBUCKET_TOKEN")


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def default_config_path() -> Path:
    """Config path from GITREQ_CONFIG, else ~/.config/gitreq/config.yaml."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file is not an error: defaults and environment apply.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or default_config_path()
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        gitlab=GitLabConfig(**(raw.get("gitlab") or {})),
        bitbucket=BitbucketConfig(**(raw.get("bitbucket") or {})),
        http=HttpConfig(**(raw.get("http") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
