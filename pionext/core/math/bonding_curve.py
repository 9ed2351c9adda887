"""
BondingCurve — Квадратичная кривая цены кредитов проекта

Модуль определяет цену кредита как функцию выпущенного supply и её
замкнутый интеграл для расчёта стоимости покупки / выручки продажи.

ФОРМУЛЫ:
    price(S)        = (S / max_supply)^2
    cost(a, b)      = max_supply * ((b / max_supply)^3 / 3 - (a / max_supply)^3 / 3)
    total_raise     = cost(0, max_supply)   = max_supply / 3
    current_raise   = cost(0, current_supply)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. price(0) == 0, price(max_supply) == 1 (финальная цена кредита = 1)
2. price строго возрастает и выпукла на [0, max_supply]
3. cost(a, b) == -cost(b, a), cost(s, s) == 0
4. max_supply <= 0 → InvalidCurveConfiguration (без тихих NaN/Inf)
5. Никакого округления внутри: округление только при отображении

Все функции чистые: без I/O, без состояния, детерминированы.
"""

import math
from typing import Final, NamedTuple

from pionext.core.math.numerical_safeguards import (
    is_valid_float,
    validate_finite,
    validate_non_negative,
)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Цена кредита при полностью выпущенном supply
FINAL_PRICE: Final[float] = 1.0

# Количество точек для графика кривой по умолчанию
DEFAULT_NUM_POINTS: Final[int] = 50

# Минимальный шаг сэмплирования (в кредитах)
MIN_SAMPLE_STEP: Final[float] = 1.0


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidCurveConfiguration(ValueError):
    """
    Некорректная конфигурация кривой: max_supply <= 0 или не finite.

    При max_supply <= 0 формулы дают NaN/Inf; вместо распространения
    невалидных значений вычисление прерывается.
    """

    pass


# =============================================================================
# ТИПЫ
# =============================================================================


class CurvePoint(NamedTuple):
    """Точка кривой для построения графика."""

    supply: float
    price: float


# =============================================================================
# ЦЕНА И ИНТЕГРАЛ
# =============================================================================


def _check_max_supply(max_supply: float) -> None:
    if not is_valid_float(max_supply) or max_supply <= 0:
        raise InvalidCurveConfiguration(
            f"max_supply must be a positive finite number, got {max_supply}"
        )


def price(supply: float, max_supply: float) -> float:
    """
    Маржинальная цена кредита при заданном supply.

    Args:
        supply: Выпущенный supply (кредиты)
        max_supply: Максимальный supply кривой

    Returns:
        (supply / max_supply)^2

    Raises:
        InvalidCurveConfiguration: Если max_supply <= 0

    Examples:
        >>> price(50, 100)
        0.25
        >>> price(100, 100)
        1.0
    """
    _check_max_supply(max_supply)
    return (supply / max_supply) ** 2


def cost(from_supply: float, to_supply: float, max_supply: float) -> float:
    """
    Определённый интеграл цены от from_supply до to_supply.

    Для покупки (to > from) — стоимость, для продажи cost(new, current) —
    выручка. Вне диапазона [0, max_supply] формула определена, но
    экономически бессмысленна: границы проверяет вызывающий код.

    Args:
        from_supply: Начальный supply
        to_supply: Конечный supply
        max_supply: Максимальный supply кривой

    Returns:
        Стоимость в валюте (отрицательна при to_supply < from_supply)

    Raises:
        InvalidCurveConfiguration: Если max_supply <= 0

    Examples:
        >>> round(cost(50, 60, 100), 6)
        3.033333
    """
    _check_max_supply(max_supply)

    normalized_to = (to_supply / max_supply) ** 3 / 3
    normalized_from = (from_supply / max_supply) ** 3 / 3

    return (normalized_to - normalized_from) * max_supply


def total_raise(max_supply: float) -> float:
    """Сумма, собранная при продаже всего max_supply по кривой."""
    return cost(0.0, max_supply, max_supply)


def current_raise(current_supply: float, max_supply: float) -> float:
    """Сумма, собранная к текущему моменту (интеграл от 0 до current_supply)."""
    return cost(0.0, current_supply, max_supply)


# =============================================================================
# ПРОИЗВОДНЫЕ ВЕЛИЧИНЫ
# =============================================================================


def raise_progress(current_supply: float, max_supply: float) -> float:
    """
    Доля собранной суммы от максимально возможной.

    Returns:
        current_raise / total_raise в диапазоне [0, 1]
    """
    return current_raise(current_supply, max_supply) / total_raise(max_supply)


def discount_pct(current_supply: float, max_supply: float) -> int:
    """
    Скидка текущей цены относительно финальной цены (в процентах, целое).

    Если текущая цена равна нулю (ничего не выпущено), скидка не
    показывается и возвращается 0.

    Examples:
        >>> discount_pct(50, 100)
        75
    """
    current_price = price(current_supply, max_supply)
    if current_price <= 0:
        return 0
    return round((FINAL_PRICE - current_price) / FINAL_PRICE * 100)


def holding_value(balance: float, current_supply: float, max_supply: float) -> float:
    """
    Оценка холдинга по текущей маржинальной цене.

    Raises:
        ValueError: Если balance отрицательный или NaN/Inf
    """
    validate_non_negative(balance, "balance")
    return balance * price(current_supply, max_supply)


# =============================================================================
# ТОЧКИ ГРАФИКА
# =============================================================================


def curve_sample_points(
    current_supply: float,
    max_supply: float,
    num_points: int = DEFAULT_NUM_POINTS,
) -> tuple[CurvePoint, ...]:
    """
    Сэмплирование кривой от 0 до max_supply включительно.

    Шаг = max(max_supply / num_points, 1). Последняя точка всегда
    (max_supply, 1.0): точка i * step во float может не совпасть с
    max_supply. Количество точек ограничено floor(max_supply / step) + 2.

    current_supply принимается для совместимости с вызывающим графиком
    (маркер текущей цены) и на точки не влияет.

    Args:
        current_supply: Текущий supply
        max_supply: Максимальный supply (<= 0 → пустой результат)
        num_points: Желаемое количество интервалов

    Returns:
        Кортеж CurvePoint, упорядоченный по supply (повторно итерируемый)

    Raises:
        ValueError: Если num_points <= 0
    """
    if num_points <= 0:
        raise ValueError(f"num_points must be positive, got {num_points}")

    validate_finite(current_supply, "current_supply")
    if not is_valid_float(max_supply) or max_supply <= 0:
        return ()

    step = max(max_supply / num_points, MIN_SAMPLE_STEP)

    # i * step, а не накопление: при step меньше шага float у supply
    # сумма перестаёт расти
    points: list[CurvePoint] = []
    for i in range(math.floor(max_supply / step) + 1):
        supply = i * step
        if supply > max_supply:
            break
        points.append(CurvePoint(supply=supply, price=price(supply, max_supply)))

    if points[-1].supply != max_supply:
        points.append(CurvePoint(supply=max_supply, price=FINAL_PRICE))

    return tuple(points)
