"""k1s0 feature gate library."""

from .converter import convert
from .decorators import requires_features
from .exceptions import (
    AccessDeniedError,
    ConversionError,
    FeatureGateError,
    FeatureGateErrorCodes,
    FeatureStoreError,
    InvalidArgumentError,
    SettingsError,
)
from .factory import build_gate, build_store
from .gate import FeatureGate
from .http_store import HttpFeatureStore
from .logger import new_logger
from .memory import InMemoryFeatureStore
from .models import AggregationMode, FeatureValue, HttpFeatureStoreConfig
from .settings import FeatureGateSettings, LogSection, StoreSection, load_settings
from .store import FeatureStore
from .sync import SyncFeatureGate, run_sync

__all__ = [
    "AccessDeniedError",
    "AggregationMode",
    "ConversionError",
    "FeatureGate",
    "FeatureGateError",
    "FeatureGateErrorCodes",
    "FeatureGateSettings",
    "FeatureStore",
    "FeatureStoreError",
    "FeatureValue",
    "HttpFeatureStore",
    "HttpFeatureStoreConfig",
    "InMemoryFeatureStore",
    "InvalidArgumentError",
    "LogSection",
    "SettingsError",
    "StoreSection",
    "SyncFeatureGate",
    "build_gate",
    "build_store",
    "convert",
    "load_settings",
    "new_logger",
    "requires_features",
    "run_sync",
]
