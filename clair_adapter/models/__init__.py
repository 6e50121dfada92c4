"""Pydantic models for the Clair scanner adapter."""

from clair_adapter.models.model_clair import (
    ClairErrorBody,
    ClairFeature,
    ClairLayer,
    ClairLayerEnvelope,
    ClairLayerResult,
    ClairVulnerability,
)
from clair_adapter.models.model_harbor import (
    Artifact,
    Capability,
    ErrorBody,
    ErrorResponse,
    Registry,
    ScanRequest,
    ScanResponse,
    Scanner,
    ScannerAdapterMetadata,
    Severity,
    VulnerabilityItem,
    VulnerabilityReport,
)
from clair_adapter.models.model_registry import Descriptor, Manifest

__all__ = [
    # Harbor models
    "Artifact",
    "Capability",
    "ErrorBody",
    "ErrorResponse",
    "Registry",
    "ScanRequest",
    "ScanResponse",
    "Scanner",
    "ScannerAdapterMetadata",
    "Severity",
    "VulnerabilityItem",
    "VulnerabilityReport",
    # Clair models
    "ClairErrorBody",
    "ClairFeature",
    "ClairLayer",
    "ClairLayerEnvelope",
    "ClairLayerResult",
    "ClairVulnerability",
    # Registry models
    "Descriptor",
    "Manifest",
]
