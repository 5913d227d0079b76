# rentwise/service_layer/listing_filters.py
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace

from ..adapters.clients.errors import ApiError
from ..adapters.clients.properties import PropertiesApi
from ..domain.types import Notice, NoticeLevel
from ..schemas import Property

log = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch properties"

# Dropdowns apply on change; typed inputs wait for an explicit search.
IMMEDIATE_FILTERS = frozenset({"property_type", "bedrooms"})

_WIRE_NAMES = {
    "property_type": "propertyType",
    "listing_type": "listingType",
    "min_price": "minPrice",
    "max_price": "maxPrice",
    "city": "city",
    "bedrooms": "bedrooms",
}


@dataclass(frozen=True)
class PropertyFilters:
    property_type: str = ""
    listing_type: str = ""
    min_price: str | float = ""
    max_price: str | float = ""
    city: str = ""
    bedrooms: str | int = ""

    def to_params(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            if v is None:
                continue
            s = str(v).strip()
            if s:
                out[_WIRE_NAMES[f.name]] = s
        return out


FILTER_NAMES = frozenset(f.name for f in fields(PropertyFilters))


class ListingFilterView:
    """
    Keeps `draft` (what the inputs show) apart from `applied` (what the last
    fetch used). Every fetch reads `applied`; typing never hits the network.
    """

    def __init__(self, properties: PropertiesApi, initial: PropertyFilters | None = None) -> None:
        self.api = properties
        self.draft = initial or PropertyFilters()
        self.applied = self.draft
        self.properties: list[Property] = []
        self.loading = False
        self.notice: Notice | None = None

    @property
    def has_unsaved_changes(self) -> bool:
        return self.draft != self.applied

    async def change(self, name: str, value: str | float) -> bool:
        """Edit one filter. Returns True when the change was applied (and fetched)."""
        if name not in FILTER_NAMES:
            raise KeyError(name)

        self.draft = replace(self.draft, **{name: value})
        if name not in IMMEDIATE_FILTERS:
            return False

        # Only the dropdown's own value is committed; pending typed edits stay draft.
        self.applied = replace(self.applied, **{name: value})
        await self.refresh()
        return True

    async def search(self) -> list[Property]:
        self.applied = self.draft
        return await self.refresh()

    async def clear(self) -> list[Property]:
        self.draft = PropertyFilters()
        self.applied = self.draft
        return await self.refresh()

    async def refresh(self) -> list[Property]:
        params = self.applied.to_params()
        self.loading = True
        try:
            page = await self.api.list(params)
        except ApiError as e:
            log.warning("property fetch failed params=%s: %s", params, e.message)
            self.notice = Notice(NoticeLevel.error, FETCH_FAILED)
            return self.properties
        finally:
            self.loading = False

        self.notice = None
        self.properties = page.properties
        return self.properties
