"""フィーチャーサーバー HTTP REST ストア実装"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from .converter import to_bool
from .exceptions import FeatureGateErrorCodes, FeatureStoreError
from .models import FeatureValue, HttpFeatureStoreConfig
from .store import FeatureStore


class HttpFeatureStore(FeatureStore):
    """httpx を使ったフィーチャーサーバー REST ストア。"""

    def __init__(self, config: HttpFeatureStoreConfig) -> None:
        self._config = config
        headers: dict[str, str] = {"Accept": "application/json"}
        if config.api_key:
            headers["X-API-Key"] = config.api_key
        self._headers = headers

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=self._headers,
            timeout=self._config.timeout_seconds,
        )

    def _handle_error(self, resp: httpx.Response, context: str) -> None:
        if resp.status_code >= 400:
            raise FeatureStoreError(
                code=FeatureGateErrorCodes.HTTP_ERROR,
                message=f"{context}: HTTP {resp.status_code}: {resp.text}",
            )

    async def get_feature(self, name: str) -> FeatureValue | None:
        """フィーチャーを取得する。サーバーに存在しなければ None。"""
        try:
            async with self._make_client() as client:
                resp = await client.get(f"/api/v1/features/{quote(name, safe='')}")
        except httpx.HTTPError as e:
            raise FeatureStoreError(
                code=FeatureGateErrorCodes.CONNECTION_ERROR,
                message=f"Failed to get feature {name}: {e}",
                cause=e,
            ) from e
        if resp.status_code == 404:
            return None
        self._handle_error(resp, f"get_feature({name})")
        try:
            data: dict[str, Any] = resp.json()
            return FeatureValue.from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise FeatureStoreError(
                code=FeatureGateErrorCodes.HTTP_ERROR,
                message=f"get_feature({name}): invalid response body: {resp.text}",
                cause=e,
            ) from e

    async def get_or_none(self, name: str) -> str | None:
        feature = await self.get_feature(name)
        if feature is None:
            return None
        return feature.value

    async def is_enabled(self, name: str) -> bool:
        value = await self.get_or_none(name)
        if not value:
            return False
        return to_bool(value)
