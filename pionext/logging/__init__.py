"""Structured logging для pionext (structlog)."""

from .config import configure_logging, get_logger, get_trading_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "get_trading_logger",
]
