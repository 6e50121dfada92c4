"""Models of the scanner adapter API consumed by Harbor."""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Harbor vulnerability severity, ordered None < Unknown < Low < Medium < High."""

    NONE = "None"
    UNKNOWN = "Unknown"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        """Position on the ordinal scale (higher is more severe)."""
        return _SEVERITY_ORDER.index(self)

    # Compare by rank, not by the alphabetical order of the string values
    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def highest(cls, severities: Iterable["Severity"]) -> "Severity":
        """Return the most severe value, or NONE for an empty iterable."""
        return max(severities, default=cls.NONE)


_SEVERITY_ORDER = (
    Severity.NONE,
    Severity.UNKNOWN,
    Severity.LOW,
    Severity.MEDIUM,
    Severity.HIGH,
)


class Registry(BaseModel):
    """Registry coordinates and the token the adapter uses to pull blobs."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        min_length=1, description="Base URL of the registry, e.g. https://core.harbor.domain"
    )
    authorization: str = Field(
        default="", repr=False, description="Bearer token for pulling manifests and blobs"
    )


class Artifact(BaseModel):
    """Image artifact to scan."""

    model_config = ConfigDict(frozen=True)

    repository: str = Field(min_length=1, description="Repository name, e.g. library/mongo")
    digest: str = Field(min_length=1, description="Manifest digest, e.g. sha256:6c3c62...")


class ScanRequest(BaseModel):
    """Request to scan one artifact."""

    model_config = ConfigDict(frozen=True)

    registry: Registry
    artifact: Artifact


class ScanResponse(BaseModel):
    """Opaque handle for retrieving the scan report later."""

    id: str


class VulnerabilityItem(BaseModel):
    """A single vulnerability found in an installed package."""

    id: str = Field(description="Vulnerability identifier, e.g. CVE-2019-1234")
    package: str = Field(description="Name of the affected package")
    version: str = Field(description="Installed version of the package")
    fix_version: str = Field(default="", description="Version that fixes the vulnerability")
    severity: Severity = Severity.UNKNOWN
    description: str = ""
    links: list[str] = Field(default_factory=list)


class VulnerabilityReport(BaseModel):
    """Report with an aggregate severity and the flat vulnerability list."""

    severity: Severity = Severity.NONE
    vulnerabilities: list[VulnerabilityItem] = Field(default_factory=list)


class Scanner(BaseModel):
    name: str
    vendor: str
    version: str


class Capability(BaseModel):
    consumes_mime_types: list[str]
    produces_mime_types: list[str]


class ScannerAdapterMetadata(BaseModel):
    """Describes the scanner and the MIME types it understands."""

    scanner: Scanner
    capabilities: list[Capability]
    properties: dict[str, str] = Field(default_factory=dict)


class ErrorBody(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody
