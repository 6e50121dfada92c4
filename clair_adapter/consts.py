from types import MappingProxyType

# Service defaults (overridable via environment, see config.py)
DEFAULT_CLAIR_URL = "http://localhost:6060"
DEFAULT_API_SERVER_ADDR = "0.0.0.0:8080"
DEFAULT_CLAIR_TIMEOUT = 30.0  # seconds
DEFAULT_REGISTRY_TIMEOUT = 30.0  # seconds
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CLAIR_VERSION = "2.0.8"
# RFC3339; Clair v2 has no API reporting when its database was last updated
DEFAULT_DB_UPDATED_AT = "2019-08-13T08:16:33.345Z"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Image manifest media types
MEDIA_TYPE_DOCKER_MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"
MEDIA_TYPE_OCI_MANIFEST_V1 = "application/vnd.oci.image.manifest.v1+json"
MEDIA_TYPE_DOCKER_IMAGE_CONFIG = "application/vnd.docker.container.image.v1+json"
MEDIA_TYPE_OCI_IMAGE_CONFIG = "application/vnd.oci.image.config.v1+json"

SUPPORTED_MANIFEST_MEDIA_TYPES = (
    MEDIA_TYPE_OCI_MANIFEST_V1,
    MEDIA_TYPE_DOCKER_MANIFEST_V2,
)

# Config blobs describe the image, they are never scanned as layers
IMAGE_CONFIG_MEDIA_TYPES = frozenset(
    {
        MEDIA_TYPE_DOCKER_IMAGE_CONFIG,
        MEDIA_TYPE_OCI_IMAGE_CONFIG,
    }
)

# Scanner adapter API v1 MIME types
MIME_TYPE_METADATA = "application/vnd.scanner.adapter.metadata+json; version=1.0"
MIME_TYPE_SCAN_REQUEST = "application/vnd.scanner.adapter.scan.request+json; version=1.0"
MIME_TYPE_SCAN_RESPONSE = "application/vnd.scanner.adapter.scan.response+json; version=1.0"
MIME_TYPE_HARBOR_VULN_REPORT = (
    "application/vnd.scanner.adapter.vuln.report.harbor+json; version=1.0"
)
MIME_TYPE_CLAIR_RAW_REPORT = "application/vnd.scanner.adapter.vuln.report.raw"
MIME_TYPE_ERROR = "application/vnd.scanner.adapter.error+json; version=1.0"

API_PREFIX = "/api/v1"

# Clair layer settings
CLAIR_LAYER_FORMAT = "Docker"
LAYER_CHAIN_SEPARATOR = "-"

# Clair severity label (lower-cased) -> Harbor severity name.
# "critical" folds into "High": Harbor's v1 scale has no higher tier, so the
# distinction is lost here. Labels missing from the table map to "Unknown".
CLAIR_SEVERITY_TABLE = MappingProxyType(
    {
        "none": "None",
        "low": "Low",
        "medium": "Medium",
        "high": "High",
        "critical": "High",
    }
)
LOSSY_SEVERITY_LABELS = frozenset({"critical"})

# Scanner metadata
SCANNER_NAME = "Clair"
SCANNER_VENDOR = "CoreOS"
SCANNER_TYPE = "os-package-vulnerability"
PROPERTY_SCANNER_TYPE = "harbor.scanner-adapter/scanner-type"
PROPERTY_DB_UPDATED_AT = "harbor.scanner-adapter/vulnerability-database-updated-at"
