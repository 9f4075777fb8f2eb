"""Report catalog data models: service rows, their sub-counters, and fee buckets."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from licensereport.core.types import ReceiveKind


class Element(BaseModel):
    """A named sub-counter within a catalog row (exam class, certificate grade)."""

    name: str
    value: int = 0


class CatalogRow(BaseModel):
    """One license/permit/certificate category tracked by the report."""

    name: str
    count: int = 0
    total_fee: Decimal = Decimal("0")
    surcharge: Decimal = Decimal("0")
    type: str | None = None
    receive_kind: ReceiveKind = ReceiveKind.UNSET
    elements: list[Element] | None = None

    def bump_element(self, name: str) -> Element:
        """Increment the element matching *name* case-insensitively, creating it if absent."""
        if self.elements is None:
            self.elements = []
        key = name.casefold()
        for element in self.elements:
            if element.name.casefold() == key:
                element.value += 1
                return element
        element = Element(name=name, value=1)
        self.elements.append(element)
        return element


class FeeBucket(BaseModel):
    """Running total for one statement-of-account line item name."""

    name: str
    value: Decimal = Decimal("0")


class FeeLine(BaseModel):
    """A single itemized line on an application's statement of account."""

    item: str = ""
    amount: Decimal = Decimal("0")


class CatalogBaseline(BaseModel):
    """Parsed contents of the baseline catalog file."""

    unknown_service: str = "unknown"
    other_fee: str = "Other"
    services: list[CatalogRow] = Field(default_factory=list)
    fees: list[str] = Field(default_factory=list)
