"""Local services (git plumbing)."""
