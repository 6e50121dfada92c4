"""Docker Registry HTTP API v2 client for manifest retrieval."""

import logging

import httpx
from pydantic import ValidationError

from clair_adapter.consts import (
    DEFAULT_REGISTRY_TIMEOUT,
    MEDIA_TYPE_DOCKER_MANIFEST_V2,
    SUPPORTED_MANIFEST_MEDIA_TYPES,
)
from clair_adapter.exceptions import RegistryError
from clair_adapter.models.model_registry import Manifest

logger = logging.getLogger(__name__)


class RegistryClient:
    """Fetches image manifests from a registry.

    Supports Docker schema2 and OCI image manifests. Manifest lists / image
    indexes are rejected: the caller always sends a platform-specific digest.
    """

    def __init__(
        self,
        url: str,
        auth: httpx.Auth | None = None,
        timeout: float = DEFAULT_REGISTRY_TIMEOUT,
        verify: bool = True,
    ):
        """Initialize RegistryClient.

        Args:
            url: Registry base URL (e.g. "https://core.harbor.domain")
            auth: httpx authorizer applied to every request
            timeout: Request timeout in seconds
            verify: Whether to verify TLS certificates
        """
        if not url:
            raise RegistryError("registry URL is empty", operation="connect")
        self.url = url.rstrip("/")
        self.auth = auth
        self.timeout = timeout
        self.verify = verify
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.url,
                auth=self.auth,
                timeout=httpx.Timeout(self.timeout),
                verify=self.verify,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def __aenter__(self) -> "RegistryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def manifest(self, repository: str, reference: str) -> tuple[Manifest, str]:
        """Fetch and parse the manifest for `repository@reference`.

        Args:
            repository: Repository name (e.g. "library/mongo")
            reference: Manifest digest or tag

        Returns:
            Tuple of (parsed manifest, response content type)

        Raises:
            RegistryError: On transport errors, non-2xx responses, unsupported
                media types or unparsable bodies
        """
        identifier = f"{repository}@{reference}"
        client = await self._get_client()

        try:
            response = await client.get(
                f"/v2/{repository}/manifests/{reference}",
                headers={"Accept": ", ".join(SUPPORTED_MANIFEST_MEDIA_TYPES)},
            )
        except httpx.RequestError as e:
            raise RegistryError(
                f"request failed: {e}", operation="get manifest", identifier=identifier
            ) from e

        if response.is_error:
            raise RegistryError(
                f"registry returned HTTP {response.status_code}",
                operation="get manifest",
                identifier=identifier,
                status_code=response.status_code,
            )

        content_type = response.headers.get("Content-Type", "").split(";")[0].strip()
        if content_type and content_type not in SUPPORTED_MANIFEST_MEDIA_TYPES:
            raise RegistryError(
                f"unsupported manifest media type '{content_type}'",
                operation="get manifest",
                identifier=identifier,
            )

        try:
            manifest = Manifest.model_validate_json(response.content)
        except ValidationError as e:
            raise RegistryError(
                f"malformed manifest: {e.error_count()} validation error(s)",
                operation="get manifest",
                identifier=identifier,
            ) from e

        logger.debug(
            f"Fetched manifest {identifier} ({content_type or 'no content type'}, "
            f"{len(manifest.layers)} layers)"
        )
        return manifest, content_type or manifest.media_type or MEDIA_TYPE_DOCKER_MANIFEST_V2
