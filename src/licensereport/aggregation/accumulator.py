"""Per-application count, fee and element increments against catalog rows."""

from __future__ import annotations

import logging
from decimal import Decimal

from licensereport.catalog.models import FeeLine
from licensereport.catalog.store import CatalogStore
from licensereport.classification.rules import StationRuleTable, detect_receive_kind
from licensereport.core.types import ReceiveKind
from licensereport.ingest.records import ApplicationRecord

logger = logging.getLogger(__name__)

SURCHARGE_ITEMS: frozenset[str] = frozenset({
    "Surcharge",
    "SUR - License Fee",
    "SUR - Spectrum User Fee",
})


def surcharge_total(lines: list[FeeLine]) -> Decimal:
    """Sum of the fee lines that denote a surcharge."""
    return sum((line.amount for line in lines if line.item in SURCHARGE_ITEMS), Decimal("0"))


class Accumulator:
    """Applies one application's contribution to the catalog rows.

    Two kinds of rows receive counts. The application's own base row (resolved
    from its label) gains ``equipment_count * years``. Each station particular
    that the rule table classifies bumps its category row by
    ``1 + equipment_count + years``.
    """

    def __init__(self, catalog: CatalogStore, rules: StationRuleTable) -> None:
        self._catalog = catalog
        self._rules = rules
        self.total_fee: Decimal = Decimal("0")

    def resolve_base(self, record: ApplicationRecord) -> int:
        """Resolve the base row and record its new/renewal kind when the label says."""
        index = self._catalog.ensure_row(record.label)
        kind = detect_receive_kind(record.label)
        if kind is not ReceiveKind.UNSET:
            self._catalog.row(index).receive_kind = kind
        return index

    def classify_particulars(self, record: ApplicationRecord, base_index: int) -> list[str]:
        """Bump the category row of every classifiable particular.

        Returns the labels that were bumped, one per matching particular.
        """
        family = self._rules.detect_family(record.label)
        if family is None:
            return []

        receive_kind = self._catalog.row(base_index).receive_kind
        bumped: list[str] = []
        for particular in record.particulars:
            if particular.station_class is None:
                continue
            label = self._rules.classify(
                family, record.nature_of_service, particular.station_class, receive_kind
            )
            if label is None:
                continue
            index = self._catalog.ensure_row(label)
            self.bump_station(index, record.equipment_count, record.year_multiplier)
            bumped.append(label)
        return bumped

    def bump_station(self, index: int, equipment_count: int, years: int) -> int:
        increment = 1 + equipment_count + years
        self._catalog.row(index).count += increment
        return increment

    def accumulate_base(self, index: int, record: ApplicationRecord) -> None:
        row = self._catalog.row(index)
        row.count += record.equipment_count * record.year_multiplier

        if row.type is None and record.type:
            row.type = record.type

        row.surcharge += surcharge_total(record.soa)
        row.total_fee += record.total_fee
        self.total_fee += record.total_fee

        if record.element.strip():
            row.bump_element(record.element.strip())
