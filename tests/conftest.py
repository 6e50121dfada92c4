"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from clair_adapter.consts import MEDIA_TYPE_DOCKER_IMAGE_CONFIG, MEDIA_TYPE_DOCKER_MANIFEST_V2
from clair_adapter.models.model_clair import ClairLayerEnvelope
from clair_adapter.models.model_harbor import Artifact, Registry, ScanRequest

REGISTRY_URL = "https://core.harbor.domain"
REPOSITORY = "library/mongo"
IMAGE_DIGEST = "sha256:6c3c624b58dbbcd3c0dd82b4c53f04194d1247c6eebdaab7c610cf7d66709b3b"
TOKEN = "s3cr3t-t0k3n"


def make_manifest(layer_digests: list[str], with_config: bool = True) -> dict[str, Any]:
    """Docker schema2 manifest body for the given layer digests."""
    manifest: dict[str, Any] = {
        "schemaVersion": 2,
        "mediaType": MEDIA_TYPE_DOCKER_MANIFEST_V2,
        "layers": [
            {
                "mediaType": "application/vnd.docker.image.rootfs.diff.tar.gzip",
                "size": 1024,
                "digest": digest,
            }
            for digest in layer_digests
        ],
    }
    if with_config:
        manifest["config"] = {
            "mediaType": MEDIA_TYPE_DOCKER_IMAGE_CONFIG,
            "size": 512,
            "digest": "sha256:config",
        }
    return manifest


def make_clair_result(features: list[dict[str, Any]] | None, name: str = "layer") -> ClairLayerEnvelope:
    """Clair layer envelope with the given features (Clair wire format)."""
    return ClairLayerEnvelope.model_validate(
        {"Layer": {"Name": name, "IndexedByVersion": 3, "Features": features}}
    )


def feature(name: str, version: str, severities: list[str] | None) -> dict[str, Any]:
    """Clair feature dict with one vulnerability per severity label."""
    vulns = None
    if severities is not None:
        vulns = [
            {
                "Name": f"CVE-{name}-{i}",
                "NamespaceName": "debian:9",
                "Description": f"issue {i} in {name}",
                "Link": f"https://security-tracker.debian.org/tracker/CVE-{name}-{i}",
                "Severity": sev,
                "FixedBy": f"{version}-fix{i}",
            }
            for i, sev in enumerate(severities)
        ]
    return {
        "Name": name,
        "NamespaceName": "debian:9",
        "VersionFormat": "dpkg",
        "Version": version,
        "Vulnerabilities": vulns,
    }


@pytest.fixture
def scan_request() -> ScanRequest:
    """Scan request for a sample image."""
    return ScanRequest(
        registry=Registry(url=REGISTRY_URL, authorization=TOKEN),
        artifact=Artifact(repository=REPOSITORY, digest=IMAGE_DIGEST),
    )
