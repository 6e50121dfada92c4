"""Image manifest models (Docker schema2 and OCI image manifest)."""

from pydantic import BaseModel, ConfigDict, Field


class Descriptor(BaseModel):
    """Content descriptor referencing a blob in the registry."""

    model_config = ConfigDict(populate_by_name=True)

    media_type: str = Field(default="", alias="mediaType")
    digest: str
    size: int = 0


class Manifest(BaseModel):
    """Image manifest with a config blob and ordered layers."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(default=2, alias="schemaVersion")
    media_type: str = Field(default="", alias="mediaType")
    config: Descriptor | None = None
    layers: list[Descriptor] = Field(default_factory=list)

    def references(self) -> list[Descriptor]:
        """All blobs the manifest references: config first, then layers bottom-up."""
        refs: list[Descriptor] = []
        if self.config is not None:
            refs.append(self.config)
        refs.extend(self.layers)
        return refs
