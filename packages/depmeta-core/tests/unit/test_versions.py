"""Unit tests for version selection."""

from __future__ import annotations

import pytest

from depmeta_core.errors import InvalidVersionError
from depmeta_core.versions import (
    is_snapshot,
    parse_version,
    select_versions_to_backfill,
    select_versions_to_check,
    versions_equal,
)


class TestSelectVersionsToCheck:
    """Tests for the consumer-side selection."""

    @pytest.mark.requirement("001-FR-010")
    def test_selects_versions_at_or_above_dependency(self) -> None:
        published = ["1.0.0", "0.9.0", "1.2.0", "2.0.0", "1.1.0"]
        assert select_versions_to_check(published, "1.1.0") == ["1.1.0", "1.2.0", "2.0.0"]

    @pytest.mark.requirement("001-FR-010")
    def test_empty_published_list(self) -> None:
        assert select_versions_to_check([], "1.0.0") == []

    @pytest.mark.requirement("001-FR-010")
    def test_dependency_above_every_published_version(self) -> None:
        assert select_versions_to_check(["1.0.0", "1.1.0"], "2.0.0") == []

    @pytest.mark.requirement("001-FR-010")
    def test_orders_by_version_not_text(self) -> None:
        published = ["1.10.0", "1.9.0", "1.2.0"]
        assert select_versions_to_check(published, "1.2.0") == ["1.2.0", "1.9.0", "1.10.0"]

    @pytest.mark.requirement("001-FR-010")
    def test_duplicates_collapse(self) -> None:
        assert select_versions_to_check(["1.0.0", "1.0.0", "1.1.0"], "1.0.0") == [
            "1.0.0",
            "1.1.0",
        ]

    @pytest.mark.requirement("001-FR-010")
    def test_classifier_style_qualifiers(self) -> None:
        published = ["30.0-jre", "32.0-jre", "31.1-jre", "31.0-jre"]
        assert select_versions_to_check(published, "31.1-jre") == ["31.1-jre", "32.0-jre"]

    @pytest.mark.requirement("001-FR-010")
    def test_release_qualifier_versions_are_selected(self) -> None:
        published = ["5.3.19.RELEASE", "5.3.20.RELEASE", "5.3.21.RELEASE"]
        assert select_versions_to_check(published, "5.3.20") == [
            "5.3.20.RELEASE",
            "5.3.21.RELEASE",
        ]

    def test_pre_releases_and_snapshots_order_before_release(self) -> None:
        published = ["2.0.0", "2.0.0-rc1", "2.0.0-SNAPSHOT", "1.9.0", "2.0.0-alpha-1"]
        assert select_versions_to_check(published, "2.0.0-rc1") == [
            "2.0.0-rc1",
            "2.0.0-SNAPSHOT",
            "2.0.0",
        ]

    @pytest.mark.requirement("001-FR-011")
    def test_invalid_dependency_version_raises(self) -> None:
        with pytest.raises(InvalidVersionError) as exc_info:
            select_versions_to_check(["1.0.0"], "not a version", coordinate="com.acme:lib")
        assert exc_info.value.coordinate == "com.acme:lib"

    @pytest.mark.requirement("001-FR-011")
    def test_invalid_published_version_is_skipped(self) -> None:
        published = ["1.0.0", "", "1.0 beta", "1.1.0"]
        assert select_versions_to_check(published, "1.0.0") == ["1.0.0", "1.1.0"]


class TestSelectVersionsToBackfill:
    """Tests for the producer-side selection."""

    @pytest.mark.requirement("001-FR-012")
    def test_selects_versions_strictly_below_project(self) -> None:
        published = ["2.0.0", "1.0.0", "3.0.0", "1.5.0"]
        assert select_versions_to_backfill(published, "2.0.0") == ["1.0.0", "1.5.0"]

    @pytest.mark.requirement("001-FR-012")
    def test_empty_published_list(self) -> None:
        assert select_versions_to_backfill([], "1.0.0") == []

    @pytest.mark.requirement("001-FR-012")
    def test_first_release_has_nothing_to_backfill(self) -> None:
        assert select_versions_to_backfill(["1.0.0"], "1.0.0") == []

    @pytest.mark.requirement("001-FR-012")
    def test_snapshot_project_backfills_earlier_releases(self) -> None:
        published = ["1.0.0", "1.1.0", "2.0.0"]
        assert select_versions_to_backfill(published, "2.0.0-SNAPSHOT") == ["1.0.0", "1.1.0"]

    def test_invalid_project_version_raises(self) -> None:
        with pytest.raises(InvalidVersionError):
            select_versions_to_backfill(["1.0.0"], "1.0/2")


class TestVersionHelpers:
    """Tests for parsing and comparison helpers."""

    def test_versions_equal_normalizes(self) -> None:
        assert versions_equal("1.0", "1.0.0")
        assert not versions_equal("1.0.0", "1.0.1")

    def test_qualified_versions_parse(self) -> None:
        assert parse_version("31.1-jre") < parse_version("32.0-jre")

    @pytest.mark.parametrize("version", ["", "1.0 final", "1.0/2"])
    def test_parse_version_error_carries_version(self, version: str) -> None:
        with pytest.raises(InvalidVersionError) as exc_info:
            parse_version(version)
        assert exc_info.value.version == version

    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("1.1.0-SNAPSHOT", True),
            ("1.1.0-snapshot", True),
            ("1.1.0-20240101.120000-3", True),
            ("1.1.0", False),
            ("1.1.0-rc1", False),
            ("5.3.20.RELEASE", False),
        ],
    )
    def test_is_snapshot(self, version: str, expected: bool) -> None:
        assert is_snapshot(version) is expected
