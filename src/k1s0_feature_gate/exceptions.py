"""feature gate ライブラリの例外型定義"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import AggregationMode


class FeatureGateError(Exception):
    """feature gate ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class FeatureGateErrorCodes:
    """FeatureGateError のエラーコード定数。"""

    INVALID_ARGUMENT: str = "INVALID_ARGUMENT"
    FEATURE_NOT_ENABLED: str = "FEATURE_NOT_ENABLED"
    CONVERSION_ERROR: str = "CONVERSION_ERROR"
    HTTP_ERROR: str = "HTTP_ERROR"
    CONNECTION_ERROR: str = "CONNECTION_ERROR"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


class InvalidArgumentError(FeatureGateError):
    """フィーチャー名などの引数が不正な場合のエラー。"""

    def __init__(self, message: str) -> None:
        super().__init__(FeatureGateErrorCodes.INVALID_ARGUMENT, message)


class AccessDeniedError(FeatureGateError):
    """要求されたフィーチャーが有効でない場合のエラー。

    feature_names には判定対象となった全フィーチャー名、
    mode には集約モード（単一フィーチャーの場合は None）が入る。
    """

    def __init__(
        self,
        message: str,
        feature_names: Sequence[str],
        mode: AggregationMode | None = None,
    ) -> None:
        super().__init__(FeatureGateErrorCodes.FEATURE_NOT_ENABLED, message)
        self.feature_names = tuple(feature_names)
        self.mode = mode


class ConversionError(FeatureGateError):
    """保存値を要求された型に変換できない場合のエラー。"""

    def __init__(
        self,
        value: str,
        target: Any,
        cause: Exception | None = None,
    ) -> None:
        target_name = getattr(target, "__name__", repr(target))
        super().__init__(
            FeatureGateErrorCodes.CONVERSION_ERROR,
            f"Cannot convert {value!r} to {target_name}",
            cause=cause,
        )
        self.value = value
        self.target = target


class FeatureStoreError(FeatureGateError):
    """同梱ストア実装（HTTP など）の通信エラー。"""


class SettingsError(FeatureGateError):
    """設定ファイルの読み込み・検証エラー。"""
