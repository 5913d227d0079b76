# rentwise/adapters/clients/properties.py
from __future__ import annotations

from typing import Any, Mapping

from ...schemas import Property, PropertyPage
from .api_client import ApiClient


def _property(data: Any) -> Property:
    if isinstance(data, dict) and isinstance(data.get("property"), dict):
        data = data["property"]
    return Property.model_validate(data)


def _page(data: Any) -> PropertyPage:
    if isinstance(data, list):
        return PropertyPage(properties=[Property.model_validate(x) for x in data if isinstance(x, dict)])
    return PropertyPage.model_validate(data or {})


class PropertiesApi:
    """
    Property CRUD. Reads are public; mutations need the session token
    (the server answers 401 otherwise, surfaced as ApiAuthError).
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def list(self, filters: Mapping[str, Any] | None = None) -> PropertyPage:
        # ApiClient drops None/"" values, so unset filters never reach the query string
        return _page(await self.client.get("/properties", params=filters))

    async def search(self, params: Mapping[str, Any]) -> PropertyPage:
        return _page(await self.client.get("/properties/search", params=params))

    async def get(self, property_id: str) -> Property:
        return _property(await self.client.get(f"/properties/{property_id}"))

    async def mine(self) -> list[Property]:
        return _page(await self.client.get("/properties/user/my-properties")).properties

    async def create(self, data: Mapping[str, Any]) -> Property:
        return _property(await self.client.post("/properties", json=dict(data)))

    async def update(self, property_id: str, data: Mapping[str, Any]) -> Property:
        return _property(await self.client.put(f"/properties/{property_id}", json=dict(data)))

    async def delete(self, property_id: str) -> None:
        await self.client.delete(f"/properties/{property_id}")
