"""フィーチャー値（文字列）の型変換"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from .exceptions import ConversionError

T = TypeVar("T")

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def to_bool(value: str) -> bool:
    """文字列を bool に変換する。解釈できなければ ConversionError。"""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConversionError(value, bool)


def _to_enum(value: str, target: type[Enum]) -> Enum:
    # メンバー名を優先し、見つからなければ値の文字列表現で照合する
    stripped = value.strip()
    member = target.__members__.get(stripped)
    if member is not None:
        return member
    for candidate in target:
        if str(candidate.value) == stripped:
            return candidate
    raise ConversionError(value, target)


def convert(value: str, target: type[T]) -> T:
    """保存値 value を target 型に変換する。

    対応する型: str, bool, int, float, Decimal, Enum サブクラス。
    変換できない場合は ConversionError を送出する（デフォルト値へのフォールバックはしない）。
    """
    result: Any
    if target is str:
        result = value
    elif target is bool:
        result = to_bool(value)
    elif isinstance(target, type) and issubclass(target, Enum):
        result = _to_enum(value, target)
    elif target is int:
        try:
            result = int(value.strip())
        except ValueError as e:
            raise ConversionError(value, target, cause=e) from e
    elif target is float:
        try:
            result = float(value.strip())
        except ValueError as e:
            raise ConversionError(value, target, cause=e) from e
    elif target is Decimal:
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ConversionError(value, target, cause=e) from e
    else:
        raise ConversionError(value, target)
    return result  # type: ignore[no-any-return]
