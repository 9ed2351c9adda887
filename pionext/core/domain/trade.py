"""
Trade — Намерения, результаты и отказы симуляции сделок

Immutable Pydantic модели для обмена с TradeSimulator:
- TradeIntent: tagged variant Buy | Sell | BuySpend | SellForProceeds
- TradeResult: результат успешной симуляции
- TradeRejection: отказ с причиной из RejectionReason

Отказы возвращаются как значения, а не исключения: вызывающий код решает,
показать ли их пользователю или превратить в HTTP ошибку.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .curve_state import CurveState


# =============================================================================
# ENUMS
# =============================================================================


class TradeSide(str, Enum):
    """Направление сделки"""

    BUY = "buy"
    SELL = "sell"


class RejectionReason(str, Enum):
    """Причина отказа в симуляции сделки"""

    INVALID_CURVE_CONFIGURATION = "invalid_curve_configuration"  # max_supply <= 0
    NON_POSITIVE_AMOUNT = "non_positive_amount"  # quantity или сумма <= 0
    EXCEEDS_MAX_SUPPLY = "exceeds_max_supply"  # покупка выше max_supply
    INSUFFICIENT_SUPPLY = "insufficient_supply"  # продажа ниже нуля
    NO_VIABLE_QUANTITY = "no_viable_quantity"  # solver не нашёл quantity > 0
    INSUFFICIENT_BALANCE = "insufficient_balance"  # не хватает валюты на покупку
    INSUFFICIENT_HOLDINGS = "insufficient_holdings"  # не хватает кредитов на продажу


# =============================================================================
# TRADE INTENTS
# =============================================================================


class Buy(BaseModel):
    """Купить quantity кредитов"""

    kind: Literal["buy"] = "buy"
    quantity: float = Field(..., allow_inf_nan=False, description="Количество кредитов")

    model_config = {"frozen": True}


class Sell(BaseModel):
    """Продать quantity кредитов"""

    kind: Literal["sell"] = "sell"
    quantity: float = Field(..., allow_inf_nan=False, description="Количество кредитов")

    model_config = {"frozen": True}


class BuySpend(BaseModel):
    """Потратить currency_amount на покупку кредитов"""

    kind: Literal["buy_spend"] = "buy_spend"
    currency_amount: float = Field(..., allow_inf_nan=False, description="Сумма к оплате")

    model_config = {"frozen": True}


class SellForProceeds(BaseModel):
    """Продать столько кредитов, чтобы получить currency_amount"""

    kind: Literal["sell_for_proceeds"] = "sell_for_proceeds"
    currency_amount: float = Field(
        ..., allow_inf_nan=False, description="Желаемая выручка"
    )

    model_config = {"frozen": True}


TradeIntent = Annotated[
    Union[Buy, Sell, BuySpend, SellForProceeds],
    Field(discriminator="kind"),
]


# =============================================================================
# RESULTS
# =============================================================================


class TradeResult(BaseModel):
    """
    Результат успешной симуляции сделки.

    Создаётся заново на каждый вызов и не изменяется (frozen=True).
    """

    side: TradeSide = Field(..., description="Направление сделки")
    amount: float = Field(..., gt=0, description="Количество кредитов в сделке")
    cost_or_proceeds: float = Field(
        ..., ge=0, description="Стоимость покупки или выручка продажи"
    )
    average_price: float = Field(..., ge=0, description="cost_or_proceeds / amount")
    new_price: float = Field(..., ge=0, description="Маржинальная цена после сделки")
    price_impact: float = Field(
        ..., description="Изменение маржинальной цены (рост при покупке, падение при продаже)"
    )
    new_supply: float = Field(..., ge=0, description="Supply после сделки")

    model_config = {"frozen": True}

    @property
    def cost(self) -> float:
        """Стоимость покупки (alias cost_or_proceeds)"""
        return self.cost_or_proceeds

    @property
    def proceeds(self) -> float:
        """Выручка продажи (alias cost_or_proceeds)"""
        return self.cost_or_proceeds

    def apply_to(self, state: CurveState) -> CurveState:
        """
        Новый снапшот кривой после сделки.

        Применение атомарно только в связке с внешним хранилищем:
        между симуляцией и записью new_supply не должно быть конкурентных
        сделок по той же кривой (CAS или блокировка на кредит).
        """
        return state.with_supply(self.new_supply)


class TradeRejection(BaseModel):
    """Отказ в симуляции сделки"""

    reason: RejectionReason = Field(..., description="Причина отказа")
    details: str = Field("", description="Человекочитаемое описание")

    model_config = {"frozen": True}


TradeOutcome = Union[TradeResult, TradeRejection]
