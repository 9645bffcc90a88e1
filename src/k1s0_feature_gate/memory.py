"""InMemoryFeatureStore 実装"""

from __future__ import annotations

from collections.abc import Mapping

from .converter import to_bool
from .store import FeatureStore


class InMemoryFeatureStore(FeatureStore):
    """テスト・ローカル開発用インメモリフィーチャーストア。"""

    def __init__(self, features: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(features) if features else {}
        self.calls: list[str] = []

    def set_value(self, name: str, value: str) -> None:
        """フィーチャー値を設定する。"""
        self._values[name] = value

    def set_enabled(self, name: str, enabled: bool = True) -> None:
        """真偽値フィーチャーを設定する。"""
        self._values[name] = "true" if enabled else "false"

    def remove(self, name: str) -> bool:
        """フィーチャーを削除する。削除できたら True。"""
        return self._values.pop(name, None) is not None

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    async def get_or_none(self, name: str) -> str | None:
        self.calls.append(name)
        return self._values.get(name)

    async def is_enabled(self, name: str) -> bool:
        value = await self.get_or_none(name)
        if not value:
            return False
        return to_bool(value)
