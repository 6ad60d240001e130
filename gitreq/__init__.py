"""Check out and list merge/pull requests of the repository's origin."""

__version__ = "0.1.0"
