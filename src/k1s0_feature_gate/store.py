"""FeatureStore 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod


class FeatureStore(ABC):
    """フィーチャー値を解決するストアの抽象基底クラス。

    FeatureGate は名前ごとに 1 回ずつ呼び出し、結果をキャッシュもリトライもしない。
    """

    @abstractmethod
    async def get_or_none(self, name: str) -> str | None:
        """フィーチャーの値を取得する。未設定なら None。"""
        ...

    @abstractmethod
    async def is_enabled(self, name: str) -> bool:
        """フィーチャーが有効か判定する。"""
        ...
