"""
QuantitySolver — обратная задача: сумма в валюте → количество кредитов

"Хочу потратить / получить $X": ищет целое quantity, чья симулированная
стоимость (или выручка) ближе всего к X.

АЛГОРИТМ (ограниченный бинарный поиск по целому quantity):
1. Диапазон [0, high]:
   - BUY:  high = floor(max_supply - current_supply)
   - SELL: high = floor(max_sellable) (баланс держателя)
2. Сужение для малых сумм: если target < current_price,
   high = min(high, ceil(target / (current_price * narrowing_factor))).
   narrowing_factor = 0.5: эмпирическая эвристика, не доказанная граница.
3. Каждая итерация котирует mid; вне границ → high = mid - 1.
4. Отслеживается лучший кандидат (min |amount - target|) за весь поиск:
   стоимость выпукла по quantity, и последняя граница поиска не обязательно
   ближайшая.
5. Точное совпадение завершает поиск досрочно; иначе low > high.

Сложность: O(log(high)) котировок, каждая O(1).

Граничные случаи:
- target <= 0 → 0 без входа в цикл
- high <= 0 (всё продано, нулевой баланс) → 0 без входа в цикл
"""

import math
from dataclasses import dataclass
from typing import Final, Optional

from pionext.core.domain.curve_state import CurveState
from pionext.core.domain.trade import TradeSide
from pionext.core.math.bonding_curve import price
from pionext.core.math.numerical_safeguards import validate_finite, validate_positive
from pionext.logging import get_trading_logger
from pionext.trading.quotes import quote_amount

logger = get_trading_logger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Эвристика сужения диапазона для сумм меньше текущей цены
DEFAULT_NARROWING_FACTOR: Final[float] = 0.5


# =============================================================================
# CONFIG / RESULT
# =============================================================================


@dataclass(frozen=True)
class SolverConfig:
    """Конфигурация QuantitySolver."""

    narrowing_factor: float = DEFAULT_NARROWING_FACTOR

    def __post_init__(self) -> None:
        validate_positive(self.narrowing_factor, "narrowing_factor")


@dataclass(frozen=True)
class QuantitySearchResult:
    """Результат одного запуска поиска."""

    quantity: int  # Лучшее найденное количество кредитов
    amount: float  # Симулированная сумма для quantity
    diff: float  # |amount - target|
    iterations: int  # Количество итераций бинарного поиска
    exact: bool  # amount == target


# =============================================================================
# SOLVER
# =============================================================================


class QuantitySolver:
    """Бинарный поиск quantity по целевой сумме в валюте."""

    def __init__(self, config: SolverConfig | None = None):
        """
        Args:
            config: конфигурация solver (опционально, используется default)
        """
        self.config = config or SolverConfig()

    def search(
        self,
        target_amount: float,
        side: TradeSide,
        state: CurveState,
        max_sellable: Optional[float] = None,
    ) -> QuantitySearchResult:
        """
        Поиск quantity с суммой, ближайшей к target_amount.

        Args:
            target_amount: Сумма к оплате (BUY) или желаемая выручка (SELL)
            side: Направление сделки
            state: Снапшот кривой
            max_sellable: Баланс держателя для SELL (default: current_supply)

        Returns:
            QuantitySearchResult (quantity == 0, если подходящего нет)

        Raises:
            ValueError: Если target_amount или max_sellable NaN/Inf
        """
        validate_finite(target_amount, "target_amount")

        if target_amount <= 0:
            return self._empty_result(target_amount)

        if side == TradeSide.BUY:
            high = math.floor(state.max_supply - state.current_supply)
        else:
            if max_sellable is None:
                max_sellable = state.current_supply
            validate_finite(max_sellable, "max_sellable")
            high = math.floor(max_sellable)

        current_price = price(state.current_supply, state.max_supply)
        if target_amount < current_price:
            high = min(
                high,
                math.ceil(target_amount / (current_price * self.config.narrowing_factor)),
            )

        if high <= 0:
            return self._empty_result(target_amount)

        low = 0
        best_quantity = 0
        best_amount = 0.0
        best_diff = math.inf
        iterations = 0

        while low <= high:
            iterations += 1
            mid = (low + high) // 2

            amount = quote_amount(side, mid, state)
            if amount is None:
                high = mid - 1
                continue

            diff = abs(amount - target_amount)
            if diff < best_diff:
                best_diff = diff
                best_quantity = mid
                best_amount = amount

            if amount > target_amount:
                high = mid - 1
            elif amount < target_amount:
                low = mid + 1
            else:
                return QuantitySearchResult(
                    quantity=mid,
                    amount=amount,
                    diff=0.0,
                    iterations=iterations,
                    exact=True,
                )

        logger.debug(
            "quantity_search_finished",
            side=side.value,
            target_amount=target_amount,
            quantity=best_quantity,
            diff=best_diff,
            iterations=iterations,
        )

        return QuantitySearchResult(
            quantity=best_quantity,
            amount=best_amount,
            diff=best_diff,
            iterations=iterations,
            exact=False,
        )

    def solve(
        self,
        target_amount: float,
        side: TradeSide,
        state: CurveState,
        max_sellable: Optional[float] = None,
    ) -> int:
        """То же, что search, но возвращает только quantity."""
        return self.search(target_amount, side, state, max_sellable).quantity

    def _empty_result(self, target_amount: float) -> QuantitySearchResult:
        return QuantitySearchResult(
            quantity=0,
            amount=0.0,
            diff=abs(target_amount),
            iterations=0,
            exact=False,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def solve_quantity_for_spend(
    target_amount: float,
    side: TradeSide,
    state: CurveState,
    max_sellable: Optional[float] = None,
) -> int:
    """
    Количество кредитов, чья стоимость/выручка ближе всего к target_amount.

    Использует QuantitySolver с конфигурацией по умолчанию.
    """
    return QuantitySolver().solve(target_amount, side, state, max_sellable)


def search_quantity(
    target_amount: float,
    side: TradeSide,
    state: CurveState,
    max_sellable: Optional[float] = None,
) -> QuantitySearchResult:
    """QuantitySolver().search с конфигурацией по умолчанию (quantity + диагностика)."""
    return QuantitySolver().search(target_amount, side, state, max_sellable)
