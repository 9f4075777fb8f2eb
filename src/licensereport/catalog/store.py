"""Ordered catalog of report rows and fee buckets for a single report batch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from licensereport.catalog.models import CatalogBaseline, CatalogRow, Element, FeeBucket

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "service_catalog.yml"


def normalize_name(name: str | None) -> str:
    """Lookup key for row and bucket names: trimmed and case-folded."""
    if name is None:
        return ""
    return str(name).strip().casefold()


def _parse_service(data: Any) -> CatalogRow:
    if isinstance(data, str):
        return CatalogRow(name=data)
    if not isinstance(data, dict) or not data.get("name"):
        raise ValueError(f"Catalog service entry must be a name or a mapping with 'name': {data!r}")
    elements = data.get("elements")
    return CatalogRow(
        name=str(data["name"]),
        elements=[Element(name=str(e)) for e in elements] if elements else None,
    )


def load_baseline(config_path: str | Path | None = None) -> CatalogBaseline:
    """Load the baseline catalog from YAML.

    Duplicate service or fee names (case-insensitive) are collapsed; the first
    occurrence wins.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file is not a mapping or an entry is malformed.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH
    with open(path) as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Catalog config {path} must be a mapping")

    services: list[CatalogRow] = []
    seen: set[str] = set()
    for entry in raw.get("services", []) or []:
        row = _parse_service(entry)
        key = normalize_name(row.name)
        if key in seen:
            logger.debug("Skipping duplicate catalog row %r", row.name)
            continue
        seen.add(key)
        services.append(row)

    other_fee = str(raw.get("other_fee", "Other"))
    fees: list[str] = []
    seen_fees: set[str] = set()
    for name in [*(raw.get("fees", []) or []), other_fee]:
        key = normalize_name(str(name))
        if key in seen_fees:
            continue
        seen_fees.add(key)
        fees.append(str(name))

    return CatalogBaseline(
        unknown_service=str(raw.get("unknown_service", "unknown")),
        other_fee=other_fee,
        services=services,
        fees=fees,
    )


class CatalogStore:
    """Insertion-ordered rows and fee buckets, seeded from a baseline.

    Rows are resolved through a dict keyed by normalized name, so lookups are
    O(1) while iteration order stays the order rows were first seen. Rows and
    buckets only ever grow during a scan.
    """

    def __init__(self, baseline: CatalogBaseline | None = None) -> None:
        baseline = baseline or CatalogBaseline()
        self._unknown_name = baseline.unknown_service
        self._rows: list[CatalogRow] = []
        self._index: dict[str, int] = {}
        for row in baseline.services:
            self._append(row.model_copy(deep=True))

        self._fees: list[FeeBucket] = []
        self._fee_index: dict[str, int] = {}
        for name in [*baseline.fees, baseline.other_fee]:
            key = normalize_name(name)
            if key not in self._fee_index:
                self._fee_index[key] = len(self._fees)
                self._fees.append(FeeBucket(name=name))
        self._other_key = normalize_name(baseline.other_fee)

    @classmethod
    def from_config(cls, config_path: str | Path | None = None) -> CatalogStore:
        return cls(load_baseline(config_path))

    def _append(self, row: CatalogRow) -> int:
        index = len(self._rows)
        self._rows.append(row)
        self._index[normalize_name(row.name)] = index
        return index

    def ensure_row(self, label: str | None) -> int:
        """Return the index of the row named *label*, appending a zeroed row if absent.

        Blank or missing labels resolve to the ``unknown`` sentinel row.
        """
        key = normalize_name(label)
        display = str(label).strip() if key else self._unknown_name
        if not key:
            key = normalize_name(self._unknown_name)
        index = self._index.get(key)
        if index is None:
            index = self._append(CatalogRow(name=display))
            logger.debug("Added catalog row %r at index %d", display, index)
        return index

    def row(self, index: int) -> CatalogRow:
        return self._rows[index]

    def find_row(self, label: str | None) -> CatalogRow | None:
        index = self._index.get(normalize_name(label))
        return self._rows[index] if index is not None else None

    @property
    def rows(self) -> list[CatalogRow]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def find_fee_bucket(self, name: str | None) -> FeeBucket | None:
        index = self._fee_index.get(normalize_name(name))
        return self._fees[index] if index is not None else None

    @property
    def other_bucket(self) -> FeeBucket:
        return self._fees[self._fee_index[self._other_key]]

    @property
    def fee_buckets(self) -> list[FeeBucket]:
        return list(self._fees)
