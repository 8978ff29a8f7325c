"""Read-only access to the operator's catalog.

The catalog store itself lives outside this system. ``CatalogSource`` is the
interface the storefront depends on; ``InMemoryCatalogue`` backs it with a
list of records already fetched from the store.
"""

from typing import Protocol

from catalogue.domain import logger
from catalogue.item.item import CatalogItem


class CatalogSource(Protocol):
    def list_items(self) -> list[CatalogItem]: ...

    def get(self, item_id: str) -> CatalogItem | None: ...


class InMemoryCatalogue:
    """Catalog source over a snapshot of catalog records."""

    def __init__(self, records=()):
        self._items = {}
        for record in records:
            item = record if isinstance(record, CatalogItem) else CatalogItem.from_record(record)
            self._items[item.id] = item
        logger.debug("catalogue_loaded", item_count=len(self._items))

    def list_items(self) -> list[CatalogItem]:
        return list(self._items.values())

    def get(self, item_id: str) -> CatalogItem | None:
        return self._items.get(item_id)

    def available_items(self) -> list[CatalogItem]:
        return [item for item in self._items.values() if item.available]

    def on_discount(self, now=None) -> list[CatalogItem]:
        return [item for item in self._items.values() if item.is_on_discount(now)]
