"""Design-system asset source: fetches asset records over HTTP."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, TypeVar

import httpx
from pydantic import ValidationError

from .models import AssetGroup, AssetRecord

logger = logging.getLogger(__name__)

T = TypeVar("T", AssetRecord, AssetGroup)


class AssetSourceError(RuntimeError):
    """The design-system platform could not provide assets."""


@dataclass(frozen=True)
class RemoteVersionIdentifier:
    design_system_id: str
    version_id: str

    def path(self) -> str:
        return f"/design-systems/{self.design_system_id}/versions/{self.version_id}"


def filter_by_brand(items: Sequence[T], brand_id: Optional[str]) -> List[T]:
    """Keep items of one brand. No brand keeps everything."""
    if not brand_id:
        return list(items)
    return [item for item in items if item.brand_id == brand_id]


class AssetSource:
    def __init__(self, base_url: str, token: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = client

    def _headers(self) -> dict:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _get_list(self, url: str) -> List[Any]:
        logger.debug(f"GET {url}")
        try:
            if self._client is not None:
                r = await self._client.get(url, headers=self._headers())
            else:
                async with httpx.AsyncClient(timeout=30) as client:
                    r = await client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            raise AssetSourceError(f"Request to {url} failed: {e}") from e

        if not r.is_success:
            raise AssetSourceError(f"{url} returned HTTP {r.status_code}")

        try:
            data = r.json()
        except ValueError as e:
            raise AssetSourceError(f"{url} returned invalid JSON") from e
        if not isinstance(data, list):
            raise AssetSourceError(f"{url} returned {type(data).__name__}, expected a list")
        return data

    async def get_assets(self, version: RemoteVersionIdentifier) -> List[AssetRecord]:
        data = await self._get_list(f"{self.base_url}{version.path()}/assets")
        try:
            return [AssetRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise AssetSourceError(f"Malformed asset list: {e}") from e

    async def get_asset_groups(self, version: RemoteVersionIdentifier) -> List[AssetGroup]:
        data = await self._get_list(f"{self.base_url}{version.path()}/asset-groups")
        try:
            return [AssetGroup.model_validate(item) for item in data]
        except ValidationError as e:
            raise AssetSourceError(f"Malformed asset group list: {e}") from e
