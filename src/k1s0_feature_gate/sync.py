"""非同期 FeatureGate の同期ラッパー"""

from __future__ import annotations

import asyncio
import contextvars
from collections.abc import Awaitable, Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from .gate import FeatureGate
from .models import AggregationMode

T = TypeVar("T")


async def _await(fn: Callable[[], Awaitable[T]]) -> T:
    return await fn()


def run_sync(fn: Callable[[], Awaitable[T]]) -> T:
    """非同期関数を完了まで実行し、結果を返す。

    実行中のイベントループがなければ asyncio.run で実行する。
    ループ内から呼ばれた場合は別スレッドの新しいループで実行し、完了まで待機する
    （contextvars は引き継ぐ）。例外はキャンセルも含めそのまま再送出する。
    タイムアウトは設けない。
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_await(fn))

    ctx = contextvars.copy_context()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="feature-gate-sync") as executor:
        future = executor.submit(ctx.run, asyncio.run, _await(fn))
        return future.result()


class SyncFeatureGate:
    """FeatureGate のブロッキング版ファサード。"""

    def __init__(self, gate: FeatureGate) -> None:
        self._gate = gate

    @property
    def gate(self) -> FeatureGate:
        return self._gate

    def get_or_none(self, name: str) -> str | None:
        return run_sync(lambda: self._gate.get_or_none(name))

    def get(self, name: str, default: T, value_type: type[T] | None = None) -> T:
        return run_sync(lambda: self._gate.get(name, default, value_type))

    def is_enabled(self, name: str) -> bool:
        return run_sync(lambda: self._gate.is_enabled(name))

    def is_enabled_many(
        self,
        names: Iterable[str],
        mode: AggregationMode = AggregationMode.REQUIRE_ALL,
    ) -> bool:
        return run_sync(lambda: self._gate.is_enabled_many(names, mode))

    def check_enabled(self, name: str) -> None:
        run_sync(lambda: self._gate.check_enabled(name))

    def check_enabled_many(
        self,
        names: Iterable[str],
        mode: AggregationMode = AggregationMode.REQUIRE_ALL,
    ) -> None:
        run_sync(lambda: self._gate.check_enabled_many(names, mode))
