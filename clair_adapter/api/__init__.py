"""HTTP boundary for Harbor."""

from clair_adapter.api.app import build_metadata, create_app

__all__ = ["build_metadata", "create_app"]
