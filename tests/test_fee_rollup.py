"""Tests for statement-of-account fee rollup."""

from __future__ import annotations

from decimal import Decimal

from licensereport.aggregation.fees import FeeRollup
from licensereport.catalog.models import FeeLine
from licensereport.catalog.store import CatalogStore


def _lines(*pairs: tuple[str, str]) -> list[FeeLine]:
    return [FeeLine(item=item, amount=Decimal(amount)) for item, amount in pairs]


class TestFeeRollup:
    def test_matched_and_other(self, catalog: CatalogStore) -> None:
        rollup = FeeRollup(catalog)
        added = rollup.apply(_lines(("Surcharge", "50"), ("Unknown Thing", "30")))
        assert catalog.find_fee_bucket("Surcharge").value == Decimal("50")
        assert catalog.other_bucket.value == Decimal("30")
        assert added == {"Surcharge": Decimal("50"), "Other": Decimal("30")}
        untouched = [b for b in catalog.fee_buckets if b.name not in ("Surcharge", "Other")]
        assert all(b.value == 0 for b in untouched)

    def test_case_insensitive_match(self, catalog: CatalogStore) -> None:
        FeeRollup(catalog).apply(_lines(("license fee", "100"), ("LICENSE FEE", "25")))
        assert catalog.find_fee_bucket("License Fee").value == Decimal("125")
        assert catalog.other_bucket.value == Decimal("0")

    def test_blank_item_goes_to_other(self, catalog: CatalogStore) -> None:
        FeeRollup(catalog).apply(_lines(("", "12.50")))
        assert catalog.other_bucket.value == Decimal("12.50")

    def test_conservation(self, catalog: CatalogStore) -> None:
        lines = _lines(
            ("Filing Fee", "180"),
            ("Documentary Stamp Tax", "30"),
            ("Spectrum User Fee", "1200.75"),
            ("Mystery", "-15"),
            ("", "4"),
        )
        FeeRollup(catalog).apply(lines)
        assert sum(b.value for b in catalog.fee_buckets) == sum(line.amount for line in lines)

    def test_accumulates_across_calls(self, catalog: CatalogStore) -> None:
        rollup = FeeRollup(catalog)
        rollup.apply(_lines(("Filing Fee", "10")))
        rollup.apply(_lines(("Filing Fee", "15")))
        assert catalog.find_fee_bucket("Filing Fee").value == Decimal("25")

    def test_empty(self, catalog: CatalogStore) -> None:
        assert FeeRollup(catalog).apply([]) == {}
        assert all(b.value == 0 for b in catalog.fee_buckets)
