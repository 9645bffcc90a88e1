"""設定からストアと FeatureGate を組み立てる"""

from __future__ import annotations

import structlog

from .gate import FeatureGate
from .http_store import HttpFeatureStore
from .logger import new_logger
from .memory import InMemoryFeatureStore
from .models import HttpFeatureStoreConfig
from .settings import FeatureGateSettings
from .store import FeatureStore


def build_store(settings: FeatureGateSettings) -> FeatureStore:
    """settings.store.kind に応じたストアを生成する。"""
    section = settings.store
    if section.kind == "http":
        return HttpFeatureStore(
            HttpFeatureStoreConfig(
                base_url=section.base_url,
                api_key=section.api_key or None,
                timeout_seconds=section.timeout_seconds,
            )
        )
    return InMemoryFeatureStore(section.features)


def build_gate(
    settings: FeatureGateSettings,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> FeatureGate:
    """設定から FeatureGate を生成する。

    logger を省略した場合は settings.log に従ってロガーを構成する。
    """
    log = logger if logger is not None else new_logger(settings.log, name=__name__)
    store = build_store(settings)
    log.info(
        "feature gate initialized",
        store_kind=settings.store.kind,
        seeded_features=len(settings.store.features),
    )
    return FeatureGate(store)
