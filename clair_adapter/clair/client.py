"""Clair v2 API client."""

import logging

import httpx
from pydantic import ValidationError

from clair_adapter.consts import DEFAULT_CLAIR_TIMEOUT
from clair_adapter.exceptions import ClairError, LayerSubmissionError, ReportNotFoundError
from clair_adapter.models.model_clair import ClairLayer, ClairLayerEnvelope

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Extract Clair's error message from a response, falling back to the status."""
    try:
        envelope = ClairLayerEnvelope.model_validate_json(response.content)
    except ValidationError:
        envelope = None
    if envelope is not None and envelope.error is not None and envelope.error.message:
        return f"HTTP {response.status_code}: {envelope.error.message}"
    return f"HTTP {response.status_code}"


class ClairClient:
    """Talks to Clair's layer API.

    The underlying httpx.AsyncClient is shared by all requests made through
    this instance and owns the connection pool.
    """

    def __init__(self, url: str, timeout: float = DEFAULT_CLAIR_TIMEOUT):
        """Initialize ClairClient.

        Args:
            url: Clair API base URL (e.g. "http://clair:6060")
            timeout: Request timeout in seconds
        """
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.url,
                timeout=httpx.Timeout(self.timeout),
                headers={"Accept": "application/json"},
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def scan_layer(self, layer: ClairLayer) -> None:
        """Submit one layer for analysis.

        Clair links the layer to `layer.parent_name`, so the parent must have
        been submitted first.

        Raises:
            LayerSubmissionError: If Clair cannot be reached or rejects the layer
        """
        client = await self._get_client()
        payload = {"Layer": layer.model_dump(by_alias=True)}

        try:
            response = await client.post("/v1/layers", json=payload)
        except httpx.RequestError as e:
            raise LayerSubmissionError(
                f"request failed: {e}", operation="scan layer", identifier=layer.name
            ) from e

        if response.is_error:
            raise LayerSubmissionError(
                _error_message(response),
                operation="scan layer",
                identifier=layer.name,
                status_code=response.status_code,
            )

    async def get_result(self, layer_name: str) -> ClairLayerEnvelope:
        """Fetch a layer with its features and their vulnerabilities.

        Raises:
            ReportNotFoundError: If Clair does not know the layer
            ClairError: On any other failure
        """
        client = await self._get_client()

        try:
            response = await client.get(
                f"/v1/layers/{layer_name}",
                params={"features": "", "vulnerabilities": ""},
            )
        except httpx.RequestError as e:
            raise ClairError(
                f"request failed: {e}", operation="get layer", identifier=layer_name
            ) from e

        if response.status_code == 404:
            raise ReportNotFoundError(
                "layer not found", operation="get layer", identifier=layer_name, status_code=404
            )
        if response.is_error:
            raise ClairError(
                _error_message(response),
                operation="get layer",
                identifier=layer_name,
                status_code=response.status_code,
            )

        try:
            return ClairLayerEnvelope.model_validate_json(response.content)
        except ValidationError as e:
            raise ClairError(
                f"malformed response: {e.error_count()} validation error(s)",
                operation="get layer",
                identifier=layer_name,
            ) from e

    async def ping(self) -> bool:
        """Return True if Clair answers its namespace listing."""
        client = await self._get_client()
        try:
            response = await client.get("/v1/namespaces")
        except httpx.RequestError as e:
            logger.warning(f"Clair unreachable at {self.url}: {e}")
            return False
        return not response.is_error
