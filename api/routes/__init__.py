"""API route handlers."""

from api.routes import health, whitelist, ballots

__all__ = ["health", "whitelist", "ballots"]
