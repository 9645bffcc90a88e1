"""FeatureGate によるフィーチャー判定と集約チェック"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from .converter import convert
from .exceptions import AccessDeniedError, InvalidArgumentError
from .models import AggregationMode
from .store import FeatureStore

T = TypeVar("T")

logger = logging.getLogger(__name__)

_REQUIRED_PREFIX = "Required features are not enabled. "
_DENIAL_MESSAGES: dict[AggregationMode, str] = {
    AggregationMode.REQUIRE_ALL: "All of these features must be enabled: ",
    AggregationMode.REQUIRE_ANY: "At least one of these features must be enabled: ",
}


def require_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError(f"Feature name must be a non-empty string: {name!r}")
    return name


def require_names(names: Any) -> tuple[str, ...]:
    if names is None or isinstance(names, (str, bytes)):
        raise InvalidArgumentError(
            f"Feature names must be a sequence of feature names: {names!r}"
        )
    try:
        items = tuple(names)
    except TypeError as e:
        raise InvalidArgumentError(
            f"Feature names must be a sequence of feature names: {names!r}"
        ) from e
    for name in items:
        require_name(name)
    return items


def require_mode(mode: Any) -> AggregationMode:
    try:
        return AggregationMode(mode)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown aggregation mode: {mode!r}") from e


def denial_message(names: Iterable[str], mode: AggregationMode) -> str:
    """集約チェック失敗時のメッセージを組み立てる。"""
    return _REQUIRED_PREFIX + _DENIAL_MESSAGES[mode] + ", ".join(names)


class FeatureGate:
    """FeatureStore 上のフィーチャー判定をまとめたゲート。

    全操作はコルーチン。ストアの例外はラップせずそのまま呼び出し元へ伝播する。
    """

    def __init__(self, store: FeatureStore) -> None:
        self._store = store

    @property
    def store(self) -> FeatureStore:
        return self._store

    async def get_or_none(self, name: str) -> str | None:
        """フィーチャーの生の値を取得する。未設定なら None。"""
        return await self._store.get_or_none(require_name(name))

    async def get(self, name: str, default: T, value_type: type[T] | None = None) -> T:
        """フィーチャー値を型変換して取得する。

        値が未設定なら default を返す。value_type を省略した場合は default の型
        （default も None なら str）に変換する。変換できなければ ConversionError。
        """
        value = await self.get_or_none(name)
        if value is None:
            return default
        target: Any = value_type
        if target is None:
            target = str if default is None else type(default)
        return convert(value, target)  # type: ignore[no-any-return]

    async def is_enabled(self, name: str) -> bool:
        """フィーチャーが有効か判定する。"""
        return await self._store.is_enabled(require_name(name))

    async def is_enabled_many(
        self,
        names: Iterable[str],
        mode: AggregationMode = AggregationMode.REQUIRE_ALL,
    ) -> bool:
        """複数フィーチャーを mode に従って順番に判定する。

        names が空なら常に True。REQUIRE_ALL は最初の無効、REQUIRE_ANY は最初の
        有効なフィーチャーで判定を打ち切る。
        """
        items = require_names(names)
        mode = require_mode(mode)
        if not items:
            return True

        if mode is AggregationMode.REQUIRE_ALL:
            for name in items:
                if not await self._store.is_enabled(name):
                    return False
            return True

        for name in items:
            if await self._store.is_enabled(name):
                return True
        return False

    async def is_enabled_concurrently(
        self,
        names: Iterable[str],
        mode: AggregationMode = AggregationMode.REQUIRE_ALL,
    ) -> bool:
        """is_enabled_many の並列版。結果は is_enabled_many と同一。

        全フィーチャーを同時に問い合わせ、names の先頭から順に結果を確定させる。
        先行する全フィーチャーが非確定だった位置の結果（または例外）だけを採用し、
        確定した時点で残りをキャンセルする。
        """
        items = require_names(names)
        mode = require_mode(mode)
        if not items:
            return True

        # REQUIRE_ALL は False、REQUIRE_ANY は True が返れば確定する
        decisive = mode is AggregationMode.REQUIRE_ANY
        tasks = [asyncio.create_task(self._store.is_enabled(name)) for name in items]
        try:
            cursor = 0
            while cursor < len(tasks):
                head = tasks[cursor]
                if not head.done():
                    await asyncio.wait(tasks[cursor:], return_when=asyncio.FIRST_COMPLETED)
                    continue
                if bool(head.result()) is decisive:
                    return decisive
                cursor += 1
            return not decisive
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            # 完了済みタスクの例外も回収する
            await asyncio.gather(*tasks, return_exceptions=True)

    async def check_enabled(self, name: str) -> None:
        """フィーチャーが有効でなければ AccessDeniedError を送出する。"""
        if not await self.is_enabled(name):
            logger.debug("Feature check denied", extra={"feature_names": [name]})
            raise AccessDeniedError(f"Feature is not enabled: {name}", [name])

    async def check_enabled_many(
        self,
        names: Iterable[str],
        mode: AggregationMode = AggregationMode.REQUIRE_ALL,
    ) -> None:
        """複数フィーチャーが mode を満たさなければ AccessDeniedError を送出する。

        メッセージには失敗したフィーチャーだけでなく names の全フィーチャー名を列挙する。
        """
        items = require_names(names)
        mode = require_mode(mode)
        if await self.is_enabled_many(items, mode):
            return
        logger.debug(
            "Feature check denied",
            extra={"feature_names": list(items), "mode": mode.value},
        )
        raise AccessDeniedError(denial_message(items, mode), items, mode)
