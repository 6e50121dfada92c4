"""Translates Clair layer results into Harbor vulnerability reports."""

import logging

from clair_adapter.consts import CLAIR_SEVERITY_TABLE, LOSSY_SEVERITY_LABELS
from clair_adapter.models.model_clair import ClairFeature, ClairLayerEnvelope
from clair_adapter.models.model_harbor import Severity, VulnerabilityItem, VulnerabilityReport

logger = logging.getLogger(__name__)


def map_severity(clair_severity: str) -> Severity:
    """Map a Clair severity label to Harbor's scale (case-insensitive).

    Unrecognised labels, including Clair's "Negligible" and "Defcon1", map
    to UNKNOWN. "Critical" maps to HIGH.
    """
    label = (clair_severity or "").lower()
    if label in LOSSY_SEVERITY_LABELS:
        logger.debug(f"Clair severity '{clair_severity}' folded into a lower Harbor tier")
    name = CLAIR_SEVERITY_TABLE.get(label)
    if name is None:
        return Severity.UNKNOWN
    return Severity(name)


def _features(result: ClairLayerEnvelope) -> list[ClairFeature]:
    if result.layer is None or result.layer.features is None:
        return []
    return result.layer.features


def _feature_severity(feature: ClairFeature) -> Severity:
    """Highest severity among a feature's vulnerabilities (NONE if it has none)."""
    return Severity.highest(map_severity(v.severity) for v in feature.vulnerabilities or [])


def overview(result: ClairLayerEnvelope) -> Severity:
    """Aggregate severity of a layer: the worst per-feature severity."""
    return Severity.highest(_feature_severity(f) for f in _features(result))


def items(result: ClairLayerEnvelope) -> list[VulnerabilityItem]:
    """Flatten features x vulnerabilities into report items, preserving Clair's order."""
    res: list[VulnerabilityItem] = []
    for feature in _features(result):
        for vuln in feature.vulnerabilities or []:
            res.append(
                VulnerabilityItem(
                    id=vuln.name,
                    package=feature.name,
                    version=feature.version,
                    fix_version=vuln.fixed_by,
                    severity=map_severity(vuln.severity),
                    description=vuln.description,
                    links=[vuln.link] if vuln.link else [],
                )
            )
    return res


def translate(result: ClairLayerEnvelope) -> VulnerabilityReport:
    """Build the Harbor report for a Clair layer result."""
    report = VulnerabilityReport(severity=overview(result), vulnerabilities=items(result))
    logger.debug(
        f"Translated layer {result.layer.name if result.layer else '<none>'}: "
        f"{len(report.vulnerabilities)} vulnerabilities, severity {report.severity.value}"
    )
    return report
