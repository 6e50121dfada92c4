"""Scanner adapter API v1 served to Harbor."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from clair_adapter import __version__
from clair_adapter.api.handlers import install_handlers
from clair_adapter.clair.client import ClairClient
from clair_adapter.config import AdapterSettings
from clair_adapter.consts import (
    API_PREFIX,
    DEFAULT_DB_UPDATED_AT,
    MIME_TYPE_CLAIR_RAW_REPORT,
    MIME_TYPE_HARBOR_VULN_REPORT,
    MIME_TYPE_METADATA,
    MIME_TYPE_SCAN_RESPONSE,
    PROPERTY_DB_UPDATED_AT,
    PROPERTY_SCANNER_TYPE,
    SCANNER_NAME,
    SCANNER_TYPE,
    SCANNER_VENDOR,
    SUPPORTED_MANIFEST_MEDIA_TYPES,
)
from clair_adapter.models.model_harbor import (
    Capability,
    ScanRequest,
    Scanner,
    ScannerAdapterMetadata,
)
from clair_adapter.scanner.image_scanner import ImageScanner
from clair_adapter.scanner.layer_chain import LayerChainBuilder

logger = logging.getLogger(__name__)

router = APIRouter(prefix=API_PREFIX)


def build_metadata(
    clair_version: str, db_updated_at: str = DEFAULT_DB_UPDATED_AT
) -> ScannerAdapterMetadata:
    """Describe the scanner for Harbor's scanner registration."""
    return ScannerAdapterMetadata(
        scanner=Scanner(name=SCANNER_NAME, vendor=SCANNER_VENDOR, version=clair_version),
        capabilities=[
            Capability(
                consumes_mime_types=list(SUPPORTED_MANIFEST_MEDIA_TYPES),
                produces_mime_types=[MIME_TYPE_HARBOR_VULN_REPORT, MIME_TYPE_CLAIR_RAW_REPORT],
            )
        ],
        properties={PROPERTY_SCANNER_TYPE: SCANNER_TYPE, PROPERTY_DB_UPDATED_AT: db_updated_at},
    )


def _scanner(request: Request) -> ImageScanner:
    return request.app.state.scanner


@router.get("/metadata")
async def get_metadata(request: Request) -> JSONResponse:
    settings: AdapterSettings = request.app.state.settings
    metadata = build_metadata(settings.clair_version, settings.db_updated_at)
    return JSONResponse(content=metadata.model_dump(mode="json"), media_type=MIME_TYPE_METADATA)


@router.post("/scan", status_code=202)
async def accept_scan_request(scan_request: ScanRequest, request: Request) -> JSONResponse:
    logger.debug(f"Scan request received: {scan_request!r}")
    scan_response = await _scanner(request).scan(scan_request)
    return JSONResponse(
        status_code=202,
        content=scan_response.model_dump(mode="json"),
        media_type=MIME_TYPE_SCAN_RESPONSE,
    )


@router.get("/scan/{scan_request_id}/report")
async def get_scan_report(
    scan_request_id: str,
    request: Request,
    accept: str | None = Header(default=None),
) -> JSONResponse:
    logger.debug(f"Handling get scan report request: {scan_request_id}")
    scanner = _scanner(request)

    if accept and MIME_TYPE_CLAIR_RAW_REPORT in accept:
        raw = await scanner.get_raw_report(scan_request_id)
        return JSONResponse(
            content=raw.model_dump(mode="json", by_alias=True, exclude_none=True),
            media_type=MIME_TYPE_CLAIR_RAW_REPORT,
        )

    report = await scanner.get_report(scan_request_id)
    return JSONResponse(
        content=report.model_dump(mode="json"), media_type=MIME_TYPE_HARBOR_VULN_REPORT
    )


def create_app(
    settings: AdapterSettings | None = None,
    scanner: ImageScanner | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Adapter settings (default: AdapterSettings.from_env())
        scanner: Scanner to serve (default: one talking to settings.clair_url)
    """
    settings = settings or AdapterSettings.from_env()
    if scanner is None:
        scanner = ImageScanner(
            ClairClient(settings.clair_url, timeout=settings.clair_timeout),
            chain_builder=LayerChainBuilder(
                registry_timeout=settings.registry_timeout,
                registry_tls_verify=settings.registry_tls_verify,
            ),
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Clair adapter {__version__} using Clair at {settings.clair_url}")
        yield
        await scanner.aclose()

    app = FastAPI(title="Harbor Scanner Adapter for Clair", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.scanner = scanner
    install_handlers(app)
    app.include_router(router)

    @app.get("/probe/healthy", response_class=PlainTextResponse)
    async def probe_healthy() -> str:
        return "ok"

    @app.get("/probe/ready", response_class=PlainTextResponse)
    async def probe_ready() -> PlainTextResponse:
        if await scanner.clair.ping():
            return PlainTextResponse("ok")
        return PlainTextResponse("clair unavailable", status_code=503)

    return app
