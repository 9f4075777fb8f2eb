"""Tests for the catalog store and baseline loader."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from licensereport.catalog.models import CatalogBaseline, CatalogRow
from licensereport.catalog.store import CatalogStore, load_baseline, normalize_name


@pytest.fixture()
def small_config(tmp_path: Path) -> Path:
    config = {
        "unknown_service": "unknown",
        "other_fee": "Other",
        "services": [
            "Amateur Radio Station License",
            {"name": "Radiotelegraphy", "elements": ["1RTG", "2RTG"]},
            "amateur radio station license",
        ],
        "fees": ["License Fee", "Surcharge", "license fee"],
    }
    path = tmp_path / "catalog.yml"
    path.write_text(yaml.dump(config))
    return path


class TestLoadBaseline:
    def test_shipped_catalog_loads(self, baseline: CatalogBaseline) -> None:
        assert baseline.unknown_service == "unknown"
        assert baseline.other_fee == "Other"
        assert len(baseline.services) > 200
        assert baseline.fees[-1] == "Other"

    def test_shipped_catalog_has_no_duplicate_names(self, baseline: CatalogBaseline) -> None:
        keys = [normalize_name(row.name) for row in baseline.services]
        assert len(keys) == len(set(keys))

    def test_duplicates_collapsed_first_wins(self, small_config: Path) -> None:
        baseline = load_baseline(small_config)
        assert [row.name for row in baseline.services] == [
            "Amateur Radio Station License",
            "Radiotelegraphy",
        ]
        assert baseline.fees == ["License Fee", "Surcharge", "Other"]

    def test_elements_parsed(self, small_config: Path) -> None:
        baseline = load_baseline(small_config)
        elements = baseline.services[1].elements
        assert elements is not None
        assert [(e.name, e.value) for e in elements] == [("1RTG", 0), ("2RTG", 0)]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_baseline(tmp_path / "nope.yml")

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="mapping"):
            load_baseline(path)

    def test_malformed_entry_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text(yaml.dump({"services": [{"elements": ["x"]}]}))
        with pytest.raises(ValueError):
            load_baseline(path)


class TestEnsureRow:
    def test_existing_row_case_insensitive(self, catalog: CatalogStore) -> None:
        first = catalog.ensure_row("Radio Station License (NEW)")
        second = catalog.ensure_row("  radio station license (new) ")
        assert first == second
        assert catalog.row(first).name == "Radio Station License (NEW)"

    def test_new_row_appended_once(self, catalog: CatalogStore) -> None:
        before = len(catalog)
        index = catalog.ensure_row("Satellite Uplink Permit")
        again = catalog.ensure_row("SATELLITE UPLINK PERMIT")
        assert index == again == before
        assert len(catalog) == before + 1
        row = catalog.row(index)
        assert row.count == 0
        assert row.name == "Satellite Uplink Permit"

    def test_blank_label_resolves_to_unknown(self, catalog: CatalogStore) -> None:
        assert catalog.ensure_row("") == catalog.ensure_row(None) == catalog.ensure_row("   ")
        assert catalog.row(catalog.ensure_row(None)).name == "unknown"

    def test_unknown_row_shared_with_literal_label(self, catalog: CatalogStore) -> None:
        assert catalog.ensure_row(None) == catalog.ensure_row("Unknown")

    def test_baseline_order_preserved(self, catalog: CatalogStore, baseline: CatalogBaseline) -> None:
        catalog.ensure_row("Zeta Permit")
        names = [row.name for row in catalog.rows]
        assert names[: len(baseline.services)] == [row.name for row in baseline.services]
        assert names[-1] == "Zeta Permit"

    def test_store_does_not_mutate_baseline(self, baseline: CatalogBaseline) -> None:
        store = CatalogStore(baseline)
        store.row(0).count += 10
        assert baseline.services[0].count == 0
        assert CatalogStore(baseline).row(0).count == 0

    def test_find_row(self, catalog: CatalogStore) -> None:
        assert catalog.find_row("radiotelegraphy") is not None
        assert catalog.find_row("No Such Thing") is None

    def test_empty_store(self) -> None:
        store = CatalogStore()
        assert len(store) == 0
        assert store.row(store.ensure_row("x")).name == "x"


class TestFeeBuckets:
    def test_other_bucket_present(self, catalog: CatalogStore) -> None:
        assert catalog.other_bucket.name == "Other"
        assert catalog.fee_buckets[-1] is catalog.other_bucket

    def test_find_fee_bucket_case_insensitive(self, catalog: CatalogStore) -> None:
        bucket = catalog.find_fee_bucket("sur - license fee")
        assert bucket is not None
        assert bucket.name == "SUR - License Fee"

    def test_unknown_fee_bucket(self, catalog: CatalogStore) -> None:
        assert catalog.find_fee_bucket("Mystery Fee") is None
        assert catalog.find_fee_bucket("") is None


class TestCatalogRow:
    def test_bump_element_existing(self) -> None:
        row = CatalogRow(name="Radiotelegraphy", elements=[{"name": "1RTG"}])
        row.bump_element("1rtg")
        assert row.elements[0].value == 1
        assert len(row.elements) == 1

    def test_bump_element_creates(self) -> None:
        row = CatalogRow(name="Radiotelegraphy")
        row.bump_element("3PHN")
        row.bump_element("3PHN")
        assert [(e.name, e.value) for e in row.elements] == [("3PHN", 2)]
