"""Report catalog: service rows and fee buckets."""

from licensereport.catalog.models import CatalogRow, Element, FeeBucket, FeeLine
from licensereport.catalog.store import CatalogStore, load_baseline

__all__ = [
    "CatalogRow",
    "CatalogStore",
    "Element",
    "FeeBucket",
    "FeeLine",
    "load_baseline",
]
