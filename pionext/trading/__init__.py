"""Trading — симуляция сделок и обратный поиск количества кредитов.

- TradeSimulator: прямая симуляция BUY/SELL и диспетчеризация TradeIntent
- QuantitySolver: бинарный поиск quantity по сумме в валюте
"""

from .quotes import quote_amount, supply_after
from .simulator import TradeSimulator, TradeSimulatorConfig
from .solver import (
    DEFAULT_NARROWING_FACTOR,
    QuantitySearchResult,
    QuantitySolver,
    SolverConfig,
    search_quantity,
    solve_quantity_for_spend,
)

__all__ = [
    "TradeSimulator",
    "TradeSimulatorConfig",
    "QuantitySolver",
    "QuantitySearchResult",
    "SolverConfig",
    "DEFAULT_NARROWING_FACTOR",
    "search_quantity",
    "solve_quantity_for_spend",
    "quote_amount",
    "supply_after",
]
