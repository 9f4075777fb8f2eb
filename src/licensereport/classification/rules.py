"""Station classification rules for radio station license applications.

Loads a table keyed by (service family, nature of service, station class)
from YAML config and maps each application particular onto one of two
catalog labels: the NEW variant or the RENEWAL variant.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path
from typing import NamedTuple

import yaml

from licensereport.core.types import (
    ApplicationTypeCode,
    NatureOfService,
    ReceiveKind,
    ServiceFamily,
    StationClass,
)

logger = logging.getLogger(__name__)

# Default path to the station rules config
_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "station_rules.yml"

# Families are tried in this order; the first marker found in the label wins.
_FAMILY_PRIORITY: tuple[ServiceFamily, ...] = (
    ServiceFamily.MICROWAVE,
    ServiceFamily.VSAT,
    ServiceFamily.WDN,
    ServiceFamily.GENERIC,
)

_APPLICATION_TYPE_CODES: dict[str, ApplicationTypeCode] = {
    "(new)": ApplicationTypeCode.NEW,
    "(renewal)": ApplicationTypeCode.RENEWAL,
    "(modification)": ApplicationTypeCode.MODIFICATION,
}

_PAREN_GROUP = re.compile(r"\([^)]*\)")


class LabelPair(NamedTuple):
    """Catalog labels for the new and renewal variants of one category."""

    new: str
    renewal: str

    def pick(self, receive_kind: ReceiveKind) -> str:
        return self.new if receive_kind == ReceiveKind.NEW else self.renewal


class RuleKey(NamedTuple):
    family: ServiceFamily
    nature: NatureOfService
    station_class: StationClass


def detect_receive_kind(label: str | None) -> ReceiveKind:
    """Derive new/renewal from an application label.

    Renewal and modification are checked first since "renewal" itself
    contains "new".
    """
    text = (label or "").casefold()
    if "renewal" in text or "modification" in text:
        return ReceiveKind.RENEWAL
    if "new" in text:
        return ReceiveKind.NEW
    return ReceiveKind.UNSET


def detect_application_type(label: str | None) -> ApplicationTypeCode | None:
    """Map the first parenthesized group of a label to NEW / REN / MOD."""
    match = _PAREN_GROUP.search((label or "").casefold())
    if match is None:
        return None
    return _APPLICATION_TYPE_CODES.get(match.group(0))


class StationRuleTable:
    """Decision table for per-particular station classification.

    Loads the table from a YAML config file. Every combination of the four
    families, three natures of service and six station classes must be
    present, for 72 label pairs in total.
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        self._config_path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH
        self._markers: dict[ServiceFamily, str] = {}
        self._table: dict[RuleKey, LabelPair] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load and validate the YAML configuration file."""
        with open(self._config_path) as fh:
            config = yaml.safe_load(fh) or {}
        if not isinstance(config, dict):
            raise ValueError(f"Station rules {self._config_path} must be a mapping")

        for family_raw, marker in (config.get("markers") or {}).items():
            family = self._parse(ServiceFamily, family_raw, "family")
            self._markers[family] = str(marker).casefold()

        for family_raw, natures in (config.get("families") or {}).items():
            family = self._parse(ServiceFamily, family_raw, "family")
            for nature_raw, classes in (natures or {}).items():
                nature = self._parse(NatureOfService, nature_raw, "nature of service")
                for class_raw, labels in (classes or {}).items():
                    station_class = self._parse(StationClass, class_raw, "station class")
                    if not isinstance(labels, list) or len(labels) != 2:
                        raise ValueError(
                            f"Rule {family}/{nature}/{station_class} must be a "
                            f"[new, renewal] label pair, got {labels!r}"
                        )
                    self._table[RuleKey(family, nature, station_class)] = LabelPair(
                        str(labels[0]), str(labels[1])
                    )

        missing = [family for family in _FAMILY_PRIORITY if family not in self._markers]
        if missing:
            raise ValueError(f"Station rules missing family markers: {missing}")
        logger.debug("Loaded %d station rules from %s", len(self._table), self._config_path)

    @staticmethod
    def _parse(enum_type, raw, what: str):
        try:
            return enum_type(str(raw))
        except ValueError:
            raise ValueError(f"Unknown {what} {raw!r} in station rules") from None

    def detect_family(self, label: str | None) -> ServiceFamily | None:
        """Return the single family whose marker appears in *label*, or None."""
        text = (label or "").casefold()
        for family in _FAMILY_PRIORITY:
            if self._markers[family] in text:
                return family
        return None

    def lookup(
        self,
        family: ServiceFamily | None,
        nature: str | None,
        station_class: str | None,
    ) -> LabelPair | None:
        """Return the label pair for a rule key, or None when any part is unknown."""
        if family is None:
            return None
        try:
            key = RuleKey(family, NatureOfService(nature), StationClass(station_class))
        except ValueError:
            logger.debug(
                "No station rule for family=%s nature=%r class=%r", family, nature, station_class
            )
            return None
        return self._table.get(key)

    def classify(
        self,
        family: ServiceFamily | None,
        nature: str | None,
        station_class: str | None,
        receive_kind: ReceiveKind,
    ) -> str | None:
        """Resolve a particular to its catalog label, or None when no rule applies."""
        pair = self.lookup(family, nature, station_class)
        return pair.pick(receive_kind) if pair is not None else None

    def entries(self) -> Iterator[tuple[RuleKey, LabelPair]]:
        """All rules in table order."""
        yield from self._table.items()

    def __len__(self) -> int:
        return len(self._table)


# Module-level convenience: singleton table and classify function
_table: StationRuleTable | None = None


def _get_table() -> StationRuleTable:
    global _table
    if _table is None:
        _table = StationRuleTable()
    return _table


def classify_particular(
    label: str | None,
    nature: str | None,
    station_class: str | None,
) -> str | None:
    """Convenience function to classify one particular of an application.

    Uses a module-level singleton ``StationRuleTable`` with the default
    config path; the family and new/renewal variant come from *label*.
    """
    table = _get_table()
    return table.classify(
        table.detect_family(label), nature, station_class, detect_receive_kind(label)
    )
