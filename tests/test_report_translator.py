"""Tests for translating Clair results into Harbor reports."""

import pytest

from clair_adapter.models.model_clair import ClairLayerEnvelope
from clair_adapter.models.model_harbor import Severity
from clair_adapter.scanner.report_translator import items, map_severity, overview, translate
from tests.conftest import feature, make_clair_result


class TestMapSeverity:
    """Tests for map_severity."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("None", Severity.NONE),
            ("Low", Severity.LOW),
            ("Medium", Severity.MEDIUM),
            ("High", Severity.HIGH),
            ("high", Severity.HIGH),
            ("CRITICAL", Severity.HIGH),
            ("Critical", Severity.HIGH),
            ("LOW", Severity.LOW),
        ],
    )
    def test_known_labels(self, label: str, expected: Severity) -> None:
        assert map_severity(label) == expected

    @pytest.mark.parametrize("label", ["Negligible", "Defcon1", "Unknown", "", "severe", " high"])
    def test_unrecognized_labels_map_to_unknown(self, label: str) -> None:
        """Test anything outside the table maps to Unknown."""
        assert map_severity(label) == Severity.UNKNOWN


class TestOverview:
    """Tests for overview."""

    def test_zero_features(self) -> None:
        assert overview(make_clair_result([])) == Severity.NONE

    def test_absent_layer_and_features(self) -> None:
        """Test missing collections count as zero vulnerabilities."""
        assert overview(ClairLayerEnvelope()) == Severity.NONE
        assert overview(make_clair_result(None)) == Severity.NONE

    def test_single_feature_takes_max(self) -> None:
        result = make_clair_result([feature("openssl", "1.0", ["Low", "High"])])
        assert overview(result) == Severity.HIGH

    def test_max_across_features(self) -> None:
        result = make_clair_result(
            [feature("openssl", "1.0", ["Medium"]), feature("zlib", "1.2", ["Low"])]
        )
        assert overview(result) == Severity.MEDIUM

    def test_feature_without_vulnerabilities_does_not_raise(self) -> None:
        """Test clean features contribute None."""
        result = make_clair_result(
            [feature("bash", "4.4", None), feature("tar", "1.29", []), feature("zlib", "1.2", ["Low"])]
        )
        assert overview(result) == Severity.LOW

    def test_unknown_ranks_above_none(self) -> None:
        result = make_clair_result([feature("libc", "2.24", ["Negligible"])])
        assert overview(result) == Severity.UNKNOWN


class TestItems:
    """Tests for items."""

    def test_one_item_per_vulnerability(self) -> None:
        """Test item count equals the sum over features, in Clair's order."""
        result = make_clair_result(
            [
                feature("openssl", "1.0", ["High", "Low"]),
                feature("bash", "4.4", []),
                feature("tar", "1.29", None),
                feature("zlib", "1.2", ["Critical"]),
            ]
        )

        res = items(result)

        assert len(res) == 3
        assert [(i.package, i.id) for i in res] == [
            ("openssl", "CVE-openssl-0"),
            ("openssl", "CVE-openssl-1"),
            ("zlib", "CVE-zlib-0"),
        ]

    def test_fields_copied_verbatim(self) -> None:
        result = make_clair_result([feature("openssl", "1.0", ["critical"])])

        (item,) = items(result)

        assert item.id == "CVE-openssl-0"
        assert item.package == "openssl"
        assert item.version == "1.0"
        assert item.severity == Severity.HIGH
        assert item.fix_version == "1.0-fix0"
        assert item.description == "issue 0 in openssl"
        assert item.links == ["https://security-tracker.debian.org/tracker/CVE-openssl-0"]

    def test_missing_link_gives_empty_links(self) -> None:
        result = ClairLayerEnvelope.model_validate(
            {
                "Layer": {
                    "Features": [
                        {"Name": "a", "Version": "1", "Vulnerabilities": [{"Name": "CVE-1"}]}
                    ]
                }
            }
        )

        (item,) = items(result)

        assert item.links == []
        assert item.fix_version == ""
        assert item.severity == Severity.UNKNOWN

    def test_empty_result(self) -> None:
        assert items(ClairLayerEnvelope()) == []


class TestTranslate:
    """Tests for translate."""

    def test_report_combines_overview_and_items(self) -> None:
        result = make_clair_result(
            [
                {
                    "Name": "openssl",
                    "Version": "1.0",
                    "Vulnerabilities": [{"Name": "CVE-X", "Severity": "High"}],
                }
            ]
        )

        report = translate(result)

        assert report.severity == Severity.HIGH
        assert len(report.vulnerabilities) == 1
        item = report.vulnerabilities[0]
        assert (item.id, item.package, item.version, item.severity) == (
            "CVE-X",
            "openssl",
            "1.0",
            Severity.HIGH,
        )

    def test_report_serializes_severity_names(self) -> None:
        result = make_clair_result([feature("openssl", "1.0", ["Medium"])])

        data = translate(result).model_dump(mode="json")

        assert data["severity"] == "Medium"
        assert data["vulnerabilities"][0]["severity"] == "Medium"
        assert set(data["vulnerabilities"][0]) == {
            "id",
            "package",
            "version",
            "fix_version",
            "severity",
            "description",
            "links",
        }
