"""LogSection に従った structlog ロガー設定"""

from __future__ import annotations

import logging
import sys

import structlog

from .settings import LogSection

LOGGER_NAME = "k1s0_feature_gate"


def _renderer(section: LogSection) -> structlog.types.Processor:
    if section.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def new_logger(
    section: LogSection | None = None,
    name: str = LOGGER_NAME,
) -> structlog.stdlib.BoundLogger:
    """log セクションの設定で structlog を構成し、name のロガーを返す。

    ゲートの判定ログ（logging.getLogger 経由）も同じレベルで出力されるよう、
    パッケージのロガーにもレベルを設定する。
    """
    section = section or LogSection()
    level = logging.getLevelName(section.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger(LOGGER_NAME).setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _renderer(section),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.get_logger(name)
