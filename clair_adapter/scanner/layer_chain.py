"""Derives Clair layer descriptors from an image manifest."""

import hashlib
import logging
from collections.abc import Callable, Iterable

import httpx

from clair_adapter.consts import (
    CLAIR_LAYER_FORMAT,
    DEFAULT_REGISTRY_TIMEOUT,
    IMAGE_CONFIG_MEDIA_TYPES,
    LAYER_CHAIN_SEPARATOR,
)
from clair_adapter.models.model_clair import ClairLayer
from clair_adapter.models.model_registry import Descriptor
from clair_adapter.registry.auth import BearerTokenAuthorizer
from clair_adapter.registry.client import RegistryClient

logger = logging.getLogger(__name__)

RegistryClientFactory = Callable[[str, httpx.Auth], RegistryClient]


def build_blob_url(registry_url: str, repository: str, digest: str) -> str:
    """Compose the URL Clair uses to pull a layer blob."""
    return f"{registry_url.rstrip('/')}/v2/{repository}/blobs/{digest}"


def chain_layers(
    references: Iterable[Descriptor],
    registry_url: str,
    repository: str,
    auth_token: str,
) -> list[ClairLayer]:
    """Turn manifest references into parent-linked Clair layers.

    Each layer name is the hex SHA-256 of every content digest up to and
    including that layer, each followed by the separator. Config blobs are
    skipped. Images built on the same base therefore produce the same names
    for the shared layers, and Clair only analyses them once.

    Args:
        references: Manifest references in declared order
        registry_url: Registry base URL
        repository: Repository name
        auth_token: Registry bearer token Clair sends when pulling blobs

    Returns:
        Layers bottom-up; empty if the manifest has only a config blob
    """
    headers = {
        "Connection": "close",
        "Authorization": BearerTokenAuthorizer(auth_token).header_value,
    }
    layers: list[ClairLayer] = []
    sha_chain = ""

    for ref in references:
        if ref.media_type in IMAGE_CONFIG_MEDIA_TYPES:
            continue

        sha_chain += ref.digest + LAYER_CHAIN_SEPARATOR
        layers.append(
            ClairLayer(
                name=hashlib.sha256(sha_chain.encode("utf-8")).hexdigest(),
                parent_name=layers[-1].name if layers else "",
                headers=headers,
                format=CLAIR_LAYER_FORMAT,
                path=build_blob_url(registry_url, repository, ref.digest),
            )
        )

    return layers


class LayerChainBuilder:
    """Resolves an image manifest and builds its Clair layer chain."""

    def __init__(
        self,
        registry_client_factory: RegistryClientFactory | None = None,
        registry_timeout: float = DEFAULT_REGISTRY_TIMEOUT,
        registry_tls_verify: bool = True,
    ):
        """Initialize LayerChainBuilder.

        Args:
            registry_client_factory: Builds a RegistryClient from (url, auth);
                defaults to RegistryClient with the timeout/TLS settings below
            registry_timeout: Registry request timeout in seconds
            registry_tls_verify: Whether to verify registry TLS certificates
        """
        self.registry_timeout = registry_timeout
        self.registry_tls_verify = registry_tls_verify
        self._registry_client_factory = registry_client_factory or self._default_factory

    def _default_factory(self, url: str, auth: httpx.Auth) -> RegistryClient:
        return RegistryClient(
            url,
            auth=auth,
            timeout=self.registry_timeout,
            verify=self.registry_tls_verify,
        )

    async def build_chain(
        self,
        registry_url: str,
        repository: str,
        digest: str,
        auth_token: str,
    ) -> list[ClairLayer]:
        """Fetch the manifest of `repository@digest` and build its layer chain.

        Raises:
            RegistryError: If the manifest cannot be resolved
        """
        registry = self._registry_client_factory(registry_url, BearerTokenAuthorizer(auth_token))
        async with registry:
            manifest, content_type = await registry.manifest(repository, digest)

        layers = chain_layers(manifest.references(), registry_url, repository, auth_token)
        logger.debug(
            f"Built chain of {len(layers)} layers for {repository}@{digest} ({content_type})"
        )
        return layers
