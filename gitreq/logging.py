"""Logging from config and env.

Levels (inclusive):
- ERROR: critical errors only
- WARNING: non-critical issues and ERROR
- INFO: resolution steps, WARNING, and ERROR
- DEBUG: HTTP and git calls and all levels above

Configure via config.yaml (logging.level, logging.format), env (LOGGING_LEVEL,
LOGGING_FORMAT) or ``git-req --verbose``.
"""

import logging

from gitreq.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class GitReqLogging:
    """Configures root logger from LoggingConfig (YAML + env LOGGING_*)."""

    def __init__(self, config: LoggingConfig, verbose: bool = False) -> None:
        """Store logging config; ``verbose`` forces DEBUG with timestamps."""
        if verbose:
            self._level = logging.DEBUG
            self._format = VERBOSE_FORMAT
        else:
            self._level = _resolve_level(config.level)
            self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        """Apply level and format to the root logger."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )
        # urllib3 connection chatter is noise outside of --verbose
        logging.getLogger("urllib3").setLevel(max(self._level, logging.INFO))
