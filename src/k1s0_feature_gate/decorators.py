"""フィーチャー必須ガードデコレーター"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from .gate import FeatureGate, require_mode, require_names
from .models import AggregationMode
from .sync import run_sync

F = TypeVar("F", bound=Callable[..., Any])


def requires_features(
    gate: FeatureGate,
    *names: str,
    mode: AggregationMode = AggregationMode.REQUIRE_ALL,
) -> Callable[[F], F]:
    """関数の実行前に names のフィーチャーが有効か検証するデコレーター。

    コルーチン関数には await で、通常の関数には run_sync でチェックを行う。
    条件を満たさなければ AccessDeniedError を送出し、関数本体は実行しない。

    Example:
        @requires_features(gate, "reports.export", "reports.pdf")
        async def export_pdf(report_id: str) -> bytes: ...
    """
    items = require_names(names)
    mode = require_mode(mode)

    def decorator(fn: F) -> F:
        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                await gate.check_enabled_many(items, mode)
                return await fn(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            run_sync(lambda: gate.check_enabled_many(items, mode))
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
