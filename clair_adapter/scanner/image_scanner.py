"""Scanner facade: the two operations Harbor integrates against."""

import logging

from clair_adapter.clair.client import ClairClient
from clair_adapter.exceptions import AdapterError, NoScannableLayersError
from clair_adapter.models.model_clair import ClairLayerEnvelope
from clair_adapter.models.model_harbor import ScanRequest, ScanResponse, VulnerabilityReport
from clair_adapter.scanner.layer_chain import LayerChainBuilder
from clair_adapter.scanner.report_translator import translate
from clair_adapter.scanner.scan_driver import ScanDriver

logger = logging.getLogger(__name__)


class ImageScanner:
    """Scans images with Clair and reports results in Harbor's format.

    Holds no per-request state; concurrent calls only share the Clair
    client's connection pool.
    """

    def __init__(
        self,
        clair: ClairClient,
        chain_builder: LayerChainBuilder | None = None,
        driver: ScanDriver | None = None,
    ):
        """Initialize ImageScanner.

        Args:
            clair: Clair API client
            chain_builder: Builds layer chains from manifests (default: LayerChainBuilder())
            driver: Submits chains to Clair (default: ScanDriver over `clair`)
        """
        self.clair = clair
        self.chain_builder = chain_builder or LayerChainBuilder()
        self.driver = driver or ScanDriver(clair)

    async def scan(self, req: ScanRequest) -> ScanResponse:
        """Submit every layer of the requested image to Clair.

        Returns:
            ScanResponse whose id is the topmost layer's name

        Raises:
            RegistryError: If the manifest cannot be resolved
            NoScannableLayersError: If the manifest has no content layers
            LayerSubmissionError: If Clair rejects a layer
        """
        artifact = f"{req.artifact.repository}@{req.artifact.digest}"
        logger.info(f"Scan requested for {artifact} from {req.registry.url}")

        layers = await self.chain_builder.build_chain(
            req.registry.url,
            req.artifact.repository,
            req.artifact.digest,
            req.registry.authorization,
        )
        if not layers:
            raise NoScannableLayersError(
                "no scannable layers", operation="scan", identifier=artifact
            )

        layer_name = await self.driver.submit(layers)
        logger.info(f"Submitted {len(layers)} layers for {artifact}, scan id {layer_name}")
        return ScanResponse(id=layer_name)

    async def get_raw_report(self, scan_request_id: str) -> ClairLayerEnvelope:
        """Clair's own result for a scan handle.

        Raises:
            ReportNotFoundError: If Clair does not know the handle
            ClairError: On any other Clair failure
        """
        try:
            return await self.clair.get_result(scan_request_id)
        except AdapterError as e:
            logger.error(f"Failed to get result from Clair, error: {e}")
            raise

    async def get_report(self, scan_request_id: str) -> VulnerabilityReport:
        """Harbor vulnerability report for a scan handle.

        Raises:
            ReportNotFoundError: If Clair does not know the handle
            ClairError: On any other Clair failure
        """
        result = await self.get_raw_report(scan_request_id)
        return translate(result)

    async def aclose(self) -> None:
        await self.clair.aclose()
