"""Statement-of-account rollup into the report's fee buckets."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from licensereport.catalog.models import FeeLine
from licensereport.catalog.store import CatalogStore

logger = logging.getLogger(__name__)


class FeeRollup:
    """Adds fee line amounts to the bucket with the matching name.

    Names match case-insensitively. Lines with no matching bucket, including
    blank names, go to the catch-all bucket so the bucket total always equals
    the total of the lines applied.
    """

    def __init__(self, catalog: CatalogStore) -> None:
        self._catalog = catalog

    def apply(self, lines: Iterable[FeeLine]) -> dict[str, Decimal]:
        """Roll *lines* into the buckets and return the amount added per bucket name."""
        added: dict[str, Decimal] = {}
        for line in lines:
            bucket = self._catalog.find_fee_bucket(line.item)
            if bucket is None:
                bucket = self._catalog.other_bucket
                if line.item:
                    logger.debug("Unmatched fee line %r folded into %r", line.item, bucket.name)
            bucket.value += line.amount
            added[bucket.name] = added.get(bucket.name, Decimal("0")) + line.amount
        return added
