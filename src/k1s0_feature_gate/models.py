"""feature gate データモデル"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AggregationMode(str, Enum):
    """複数フィーチャーの判定結果の集約モード。"""

    REQUIRE_ALL = "all"
    REQUIRE_ANY = "any"


@dataclass
class HttpFeatureStoreConfig:
    """HttpFeatureStore の接続設定。"""

    base_url: str
    api_key: str | None = None
    timeout_seconds: float = 5.0


@dataclass(frozen=True)
class FeatureValue:
    """フィーチャーサーバーが返すフィーチャー値。"""

    name: str
    value: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeatureValue:
        value = data.get("value")
        return cls(
            name=str(data["name"]),
            value=None if value is None else str(value),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}
