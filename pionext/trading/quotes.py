"""
Quotes — сырая котировка суммы сделки по кривой

Общая точка для TradeSimulator и QuantitySolver: стоимость покупки или
выручка продажи quantity кредитов без построения TradeResult.
"""

from typing import Optional

from pionext.core.domain.curve_state import CurveState
from pionext.core.domain.trade import TradeSide
from pionext.core.math.bonding_curve import cost


def supply_after(side: TradeSide, quantity: float, state: CurveState) -> float:
    """Supply после сделки (без проверки границ)."""
    if side == TradeSide.BUY:
        return state.current_supply + quantity
    return state.current_supply - quantity


def quote_amount(side: TradeSide, quantity: float, state: CurveState) -> Optional[float]:
    """
    Стоимость покупки (BUY) или выручка продажи (SELL) quantity кредитов.

    Допускает quantity == 0 (сумма 0), что нужно solver'у на нижней
    границе поиска.

    Args:
        side: Направление сделки
        quantity: Количество кредитов (>= 0)
        state: Снапшот кривой

    Returns:
        Сумма в валюте (>= 0) или None, если сделка выходит за
        [0, max_supply] или quantity < 0
    """
    if quantity < 0:
        return None

    new_supply = supply_after(side, quantity, state)

    if side == TradeSide.BUY:
        if new_supply > state.max_supply:
            return None
        return cost(state.current_supply, new_supply, state.max_supply)

    if new_supply < 0:
        return None
    return cost(new_supply, state.current_supply, state.max_supply)
