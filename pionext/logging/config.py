"""
Logging configuration для pionext.

structlog поверх stdlib logging. Чистые функции кривой не логируют;
логируют только TradeSimulator (отказы, принятые симуляции) и solver
(итоги поиска).
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    extra_processors: Optional[list] = None,
) -> None:
    """
    Настройка structlog для всего приложения.

    Args:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: JSON вывод вместо человекочитаемого
        include_timestamp: Добавлять ISO timestamp
        extra_processors: Дополнительные processors structlog

    Raises:
        ValueError: Если level не является уровнем logging
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown logging level: {level}")

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **initial_values: Any) -> FilteringBoundLogger:
    """
    Получение structlog логгера.

    Логгер ленивый: конфигурация применяется при первом использовании,
    поэтому его можно создавать на уровне модуля до configure_logging.

    Args:
        name: Имя логгера (обычно __name__)
        initial_values: Контекст, привязанный ко всем событиям логгера
    """
    return structlog.get_logger(name, **initial_values)


def get_trading_logger(name: str) -> FilteringBoundLogger:
    """Логгер симуляции сделок с привязанным subsystem="trading"."""
    return get_logger(name, subsystem="trading")
