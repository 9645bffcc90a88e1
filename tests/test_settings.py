"""設定ローダーとファクトリーのユニットテスト"""

from pathlib import Path

import pytest
from k1s0_feature_gate import (
    FeatureGate,
    FeatureGateErrorCodes,
    FeatureGateSettings,
    HttpFeatureStore,
    InMemoryFeatureStore,
    LogSection,
    SettingsError,
    StoreSection,
    build_gate,
    build_store,
    factory,
    load_settings,
    new_logger,
)
from pydantic import ValidationError


def test_load_minimal_settings(tmp_path: Path) -> None:
    """空に近い設定ファイルはデフォルト値で補完される。"""
    settings_file = tmp_path / "features.yaml"
    settings_file.write_text("log:\n  level: DEBUG\n")
    settings = load_settings(settings_file)
    assert settings.store.kind == "memory"
    assert settings.store.features == {}
    assert settings.log.level == "DEBUG"
    assert settings.log.format == "json"


def test_load_with_env_override(tmp_path: Path) -> None:
    """環境別設定がディープマージされる。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text("store:\n  features:\n    beta: 'false'\n    maxItems: '10'\n")
    env_file = tmp_path / "prod.yaml"
    env_file.write_text("store:\n  features:\n    beta: 'true'\n")
    settings = load_settings(base_file, env_file)
    assert settings.store.features == {"beta": "true", "maxItems": "10"}


def test_load_env_not_exists(tmp_path: Path) -> None:
    """env_path が存在しない場合は base のみ使用。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text("store:\n  kind: memory\n")
    settings = load_settings(base_file, tmp_path / "nonexistent.yaml")
    assert settings.store.kind == "memory"


def test_load_file_not_found(tmp_path: Path) -> None:
    """存在しないファイルで SettingsError(READ_FILE_ERROR)。"""
    with pytest.raises(SettingsError) as exc_info:
        load_settings(tmp_path / "missing.yaml")
    assert exc_info.value.code == FeatureGateErrorCodes.READ_FILE


def test_load_invalid_yaml(tmp_path: Path) -> None:
    """不正 YAML で SettingsError(PARSE_YAML_ERROR)。"""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("store: {invalid: yaml: content:\n")
    with pytest.raises(SettingsError) as exc_info:
        load_settings(bad_file)
    assert exc_info.value.code == FeatureGateErrorCodes.PARSE_YAML


def test_load_http_without_base_url(tmp_path: Path) -> None:
    """http ストアで base_url が無ければ SettingsError(VALIDATION_ERROR)。"""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("store:\n  kind: http\n")
    with pytest.raises(SettingsError) as exc_info:
        load_settings(bad_file)
    assert exc_info.value.code == FeatureGateErrorCodes.VALIDATION


def test_store_section_rejects_non_positive_timeout() -> None:
    """timeout_seconds は正の値のみ。"""
    with pytest.raises(ValidationError):
        StoreSection(timeout_seconds=0)


def test_load_unquoted_feature_values(tmp_path: Path) -> None:
    """クォートなしの真偽値・数値もフィーチャー値として読み込める。"""
    settings_file = tmp_path / "features.yaml"
    settings_file.write_text(
        "store:\n  features:\n    beta: true\n    legacy: false\n    maxItems: 10\n    ratio: 0.5\n"
    )
    settings = load_settings(settings_file)
    assert settings.store.features == {
        "beta": "true",
        "legacy": "false",
        "maxItems": "10",
        "ratio": "0.5",
    }


async def test_unquoted_feature_values_drive_gate(tmp_path: Path) -> None:
    """クォートなしで設定した値がゲートの判定と型変換に使われる。"""
    settings_file = tmp_path / "features.yaml"
    settings_file.write_text("store:\n  features:\n    beta: true\n    maxItems: 10\n")
    gate = build_gate(load_settings(settings_file))
    assert await gate.is_enabled("beta") is True
    assert await gate.get("maxItems", 1) == 10


def test_env_override_does_not_mutate_base_values(tmp_path: Path) -> None:
    """環境別設定はフィーチャー単位で上書きし、他の値は残す。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text("store:\n  features:\n    a: true\n")
    env_file = tmp_path / "prod.yaml"
    env_file.write_text("store:\n  features:\n    b: true\nlog:\n  format: text\n")
    settings = load_settings(base_file, env_file)
    assert settings.store.features == {"a": "true", "b": "true"}
    assert settings.log.format == "text"
    assert load_settings(base_file).store.features == {"a": "true"}


async def test_build_gate_with_memory_store() -> None:
    """memory ストアは features で初期化される。"""
    settings = FeatureGateSettings.model_validate(
        {"store": {"kind": "memory", "features": {"beta": "true"}}}
    )
    gate = build_gate(settings)
    assert isinstance(gate, FeatureGate)
    assert isinstance(gate.store, InMemoryFeatureStore)
    assert await gate.is_enabled("beta") is True


def test_build_store_http() -> None:
    """http ストアの生成。"""
    settings = FeatureGateSettings.model_validate(
        {"store": {"kind": "http", "base_url": "http://featureflag-server:8080"}}
    )
    assert isinstance(build_store(settings), HttpFeatureStore)


def test_build_gate_with_configured_logger() -> None:
    """new_logger で設定したロガーを渡せる。"""
    settings = FeatureGateSettings()
    logger = new_logger(LogSection(format="text"))
    gate = build_gate(settings, logger=logger)
    assert isinstance(gate.store, InMemoryFeatureStore)


def test_build_gate_configures_logger_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """logger 省略時は settings.log の内容でロガーを構成する。"""
    received: list[LogSection] = []
    real_new_logger = factory.new_logger

    def recording_new_logger(section: LogSection, name: str) -> object:
        received.append(section)
        return real_new_logger(section, name=name)

    monkeypatch.setattr(factory, "new_logger", recording_new_logger)
    settings = FeatureGateSettings.model_validate({"log": {"level": "DEBUG", "format": "text"}})
    build_gate(settings)
    assert received == [LogSection(level="DEBUG", format="text")]
