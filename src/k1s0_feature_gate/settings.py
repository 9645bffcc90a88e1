"""feature gate 設定（pydantic BaseModel）と YAML ローダー"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import FeatureGateErrorCodes, SettingsError


def _feature_value_to_str(value: Any) -> Any:
    # YAML の true / 10 などクォートなしのスカラーをストアの文字列表現に揃える
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class StoreSection(BaseModel):
    """フィーチャーストア設定。"""

    kind: Literal["memory", "http"] = "memory"
    base_url: str = ""
    api_key: str = ""
    timeout_seconds: float = Field(default=5.0, gt=0)
    features: dict[str, str] = Field(default_factory=dict)

    @field_validator("features", mode="before")
    @classmethod
    def _stringify_features(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {str(name): _feature_value_to_str(item) for name, item in value.items()}

    @model_validator(mode="after")
    def _check_base_url(self) -> StoreSection:
        if self.kind == "http" and not self.base_url:
            raise ValueError("store.base_url is required when store.kind is 'http'")
        return self


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class FeatureGateSettings(BaseModel):
    """feature gate 設定全体。"""

    store: StoreSection = Field(default_factory=StoreSection)
    log: LogSection = Field(default_factory=LogSection)


def _overlay(base: dict[str, Any], env: dict[str, Any]) -> dict[str, Any]:
    """環境別設定 env をベース設定に重ねた新しい辞書を返す。

    セクション（dict）同士は再帰的に重ね、それ以外は env の値で置き換える。
    store.features のように名前をキーとする表もフィーチャー単位で上書きされる。
    """
    merged: dict[str, Any] = dict(base)
    for key, env_value in env.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(env_value, dict):
            merged[key] = _overlay(base_value, env_value)
        else:
            merged[key] = env_value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(
            code=FeatureGateErrorCodes.READ_FILE,
            message=f"Failed to read settings file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise SettingsError(
            code=FeatureGateErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise SettingsError(
            code=FeatureGateErrorCodes.PARSE_YAML,
            message=f"Settings file must contain a mapping: {path}",
        )
    return data


def load_settings(base_path: Path, env_path: Path | None = None) -> FeatureGateSettings:
    """設定ファイルを読み込んで FeatureGateSettings を返す。

    env_path が存在する場合はベース設定にディープマージする。
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = _overlay(data, _read_yaml(env_path))
    try:
        return FeatureGateSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(
            code=FeatureGateErrorCodes.VALIDATION,
            message=f"Settings validation failed: {e}",
            cause=e,
        ) from e
