"""Clair vulnerability engine access."""

from clair_adapter.clair.client import ClairClient

__all__ = ["ClairClient"]
