"""Typed, defaulted view over a raw application document."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from licensereport.catalog.models import FeeLine
from licensereport.core import paths


class Particular(BaseModel):
    """One station entry attached to an application."""

    station_class: str | None = None
    equipment_count: int = 0


class PersonName(BaseModel):
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    suffix: str = ""

    @property
    def full_name(self) -> str:
        return full_name(self.first_name, self.middle_name, self.last_name, self.suffix)


def full_name(first: str | None, middle: str | None, last: str | None, suffix: str | None) -> str:
    """Join the non-blank name parts with single spaces, suffix last."""
    parts = [p.strip() for p in (first, middle, last) if p and p.strip()]
    name = " ".join(parts)
    if suffix and suffix.strip():
        name = f"{name} {suffix.strip()}"
    return name


class ApplicationRecord(BaseModel):
    """Fields of an application document the report engine consumes.

    Build with :meth:`from_document`; absent or mis-typed fields degrade to
    their defaults.
    """

    label: str = ""
    element: str = ""
    nature_of_service: str = ""
    no_of_years: int = 1
    particulars: list[Particular] = Field(default_factory=list)
    validity_start: str = ""
    validity_end: str = ""
    total_fee: Decimal = Decimal("0")
    soa: list[FeeLine] = Field(default_factory=list)
    status: str = ""
    type: str | None = None
    permit_number: str = ""
    updated_at: datetime | None = None
    created_at: datetime | None = None
    evaluator: PersonName | None = None

    @property
    def equipment_count(self) -> int:
        """Equipment items across all particulars, never less than 1."""
        return max(1, sum(p.equipment_count for p in self.particulars))

    @property
    def year_multiplier(self) -> int:
        return max(1, self.no_of_years)

    @classmethod
    def from_document(cls, doc: Any) -> ApplicationRecord:
        if not isinstance(doc, dict):
            return cls()

        particulars = [
            Particular(
                station_class=paths.get_str(p, "stationClass") or None,
                equipment_count=len(paths.get_list(p, "equipments")),
            )
            for p in paths.get_list(doc, "service.particulars")
            if isinstance(p, dict)
        ]

        evaluator_doc = paths.get_dict(doc, "evaluator")
        evaluator = None
        if evaluator_doc:
            evaluator = PersonName(
                first_name=paths.get_str(evaluator_doc, "firstName"),
                middle_name=paths.get_str(evaluator_doc, "middleName"),
                last_name=paths.get_str(evaluator_doc, "lastName"),
                suffix=paths.get_str(evaluator_doc, "suffix"),
            )

        return cls(
            label=paths.get_str(doc, "service.applicationType.label"),
            element=paths.get_str(doc, "service.applicationType.element"),
            nature_of_service=paths.get_str(doc, "service.natureOfService.type"),
            no_of_years=paths.get_int(doc, "service.applicationDetails.noOfYears", 1),
            particulars=particulars,
            validity_start=(
                paths.get_str(doc, "service.validityStart") or paths.get_str(doc, "validityStart")
            ),
            validity_end=(
                paths.get_str(doc, "service.validityEnd") or paths.get_str(doc, "validityEnd")
            ),
            total_fee=paths.get_decimal(doc, "totalFee"),
            soa=[_fee_line(line) for line in paths.get_list(doc, "soa") if isinstance(line, dict)],
            status=paths.get_str(doc, "status"),
            type=paths.get_str(doc, "type") or None,
            permit_number=paths.get_str(doc, "permitNumber"),
            updated_at=paths.get_datetime(doc, "updatedAt"),
            created_at=paths.get_datetime(doc, "createdAt"),
            evaluator=evaluator,
        )


def _fee_line(doc: dict[str, Any]) -> FeeLine:
    # Statement lines appear with both camelCase and PascalCase keys.
    item = paths.get_str(doc, "item") or paths.get_str(doc, "Item")
    amount_raw = paths.resolve(doc, "amount", paths.resolve(doc, "Amount"))
    return FeeLine(item=item, amount=paths.as_decimal(amount_raw))
