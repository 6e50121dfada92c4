"""Submits a layer chain to Clair."""

import logging

from clair_adapter.clair.client import ClairClient
from clair_adapter.exceptions import AdapterError, NoScannableLayersError
from clair_adapter.models.model_clair import ClairLayer

logger = logging.getLogger(__name__)


class ScanDriver:
    """Submits layers one at a time, bottom-up.

    Clair links each layer to its parent by name, so a layer is only sent
    after its parent was accepted. The first failure stops the chain; layers
    already accepted stay in Clair and are reused by later scans.
    """

    def __init__(self, clair: ClairClient):
        self.clair = clair

    async def submit(self, chain: list[ClairLayer]) -> str:
        """Submit every layer in order and return the topmost layer's name.

        Raises:
            NoScannableLayersError: If the chain is empty
            LayerSubmissionError: On the first layer Clair does not accept
        """
        if not chain:
            raise NoScannableLayersError("no scannable layers", operation="submit chain")

        for layer in chain:
            logger.debug(f"Scanning layer: {layer.name}, path: {layer.path}")
            try:
                await self.clair.scan_layer(layer)
            except AdapterError as e:
                logger.debug(f"Failed to scan layer: {layer.name}, error: {e}")
                raise

        return chain[-1].name
