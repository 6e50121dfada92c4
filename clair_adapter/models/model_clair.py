"""Models of the Clair v2 API (PascalCase on the wire)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ClairModel(BaseModel):
    """Base for Clair payloads: accepts both field names and wire aliases."""

    model_config = ConfigDict(populate_by_name=True)


class ClairLayer(ClairModel):
    """Layer descriptor submitted to Clair.

    `name` is derived from the digest chain up to and including this layer,
    so images sharing a base produce identical names for the shared layers.
    """

    name: str = Field(alias="Name")
    parent_name: str = Field(default="", alias="ParentName")
    headers: dict[str, str] = Field(default_factory=dict, alias="Headers", repr=False)
    format: str = Field(default="Docker", alias="Format")
    path: str = Field(default="", alias="Path")


class ClairVulnerability(ClairModel):
    name: str = Field(default="", alias="Name")
    namespace_name: str = Field(default="", alias="NamespaceName")
    description: str = Field(default="", alias="Description")
    link: str = Field(default="", alias="Link")
    severity: str = Field(default="", alias="Severity")
    fixed_by: str = Field(default="", alias="FixedBy")
    metadata: dict[str, Any] | None = Field(default=None, alias="Metadata")


class ClairFeature(ClairModel):
    """A package Clair detected in a layer."""

    name: str = Field(default="", alias="Name")
    namespace_name: str = Field(default="", alias="NamespaceName")
    version_format: str = Field(default="", alias="VersionFormat")
    version: str = Field(default="", alias="Version")
    added_by: str = Field(default="", alias="AddedBy")
    vulnerabilities: list[ClairVulnerability] | None = Field(
        default=None, alias="Vulnerabilities"
    )


class ClairLayerResult(ClairModel):
    """Layer as returned by GET /v1/layers/{name}?features&vulnerabilities."""

    name: str = Field(default="", alias="Name")
    parent_name: str = Field(default="", alias="ParentName")
    namespace_name: str = Field(default="", alias="NamespaceName")
    indexed_by_version: int = Field(default=0, alias="IndexedByVersion")
    features: list[ClairFeature] | None = Field(default=None, alias="Features")


class ClairErrorBody(ClairModel):
    message: str = Field(default="", alias="Message")


class ClairLayerEnvelope(ClairModel):
    """Envelope wrapping every Clair layer response."""

    layer: ClairLayerResult | None = Field(default=None, alias="Layer")
    error: ClairErrorBody | None = Field(default=None, alias="Error")
