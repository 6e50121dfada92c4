"""Error types raised by the adapter."""

from enum import Enum


class ErrorKind(Enum):
    """Classification of adapter errors, used by the HTTP layer to pick a status."""

    # Upstream registry (manifest/blob retrieval)
    REGISTRY = "registry"

    # Clair rejected or failed a layer submission
    LAYER_SUBMISSION = "layer_submission"

    # Clair failed to return a result
    BACKEND = "backend"

    # Clair has never seen the requested layer
    NOT_FOUND = "not_found"

    # Malformed or unusable input
    INVALID_REQUEST = "invalid_request"


class AdapterError(Exception):
    """Base class for all adapter errors.

    Args:
        message: Human readable description (never contains credentials)
        operation: Name of the operation that failed
        identifier: Digest, layer name or scan handle involved, if any
    """

    kind: ErrorKind = ErrorKind.BACKEND

    def __init__(self, message: str, operation: str = "", identifier: str = ""):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.identifier = identifier

    def __str__(self) -> str:
        parts = []
        if self.operation:
            parts.append(self.operation)
        if self.identifier:
            parts.append(self.identifier)
        prefix = " ".join(parts)
        return f"{prefix}: {self.message}" if prefix else self.message


class RegistryError(AdapterError):
    """Manifest or blob retrieval from the container registry failed."""

    kind = ErrorKind.REGISTRY

    def __init__(
        self,
        message: str,
        operation: str = "",
        identifier: str = "",
        status_code: int | None = None,
    ):
        super().__init__(message, operation, identifier)
        self.status_code = status_code


class ClairError(AdapterError):
    """Clair returned an error or could not be reached."""

    kind = ErrorKind.BACKEND

    def __init__(
        self,
        message: str,
        operation: str = "",
        identifier: str = "",
        status_code: int | None = None,
    ):
        super().__init__(message, operation, identifier)
        self.status_code = status_code


class LayerSubmissionError(ClairError):
    """Submitting a layer to Clair failed; the remaining chain was not submitted."""

    kind = ErrorKind.LAYER_SUBMISSION


class ReportNotFoundError(ClairError):
    """Clair has no result for the requested scan handle."""

    kind = ErrorKind.NOT_FOUND


class InvalidRequestError(AdapterError):
    """The scan request cannot be processed as given."""

    kind = ErrorKind.INVALID_REQUEST


class NoScannableLayersError(InvalidRequestError):
    """The image manifest contains no content layers to scan."""
