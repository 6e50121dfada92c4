"""Container registry access."""

from clair_adapter.registry.auth import BearerTokenAuthorizer
from clair_adapter.registry.client import RegistryClient

__all__ = [
    "BearerTokenAuthorizer",
    "RegistryClient",
]
