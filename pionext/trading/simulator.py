"""
TradeSimulator — симуляция покупки/продажи кредитов по кривой

Переводит намерение сделки против снапшота CurveState в TradeResult или
TradeRejection:
- simulate_buy / simulate_sell — прямая симуляция по количеству
- simulate — диспетчеризация TradeIntent, включая суммы в валюте
  (BuySpend / SellForProceeds через QuantitySolver) и проверки балансов

ФОРМУЛЫ:
    BUY:  new_supply = current + q; cost = cost(current, new_supply)
          price_impact = price(new_supply) - price(current)
    SELL: new_supply = current - q; proceeds = cost(new_supply, current)
          price_impact = price(current) - price(new_supply)
    average_price = cost_or_proceeds / q

КОНКУРЕНТНОСТЬ:
Симулятор не хранит состояния и не изменяет входы, поэтому безопасен при
вызове из любого количества потоков. Атомарность "прочитать supply →
симулировать → записать new_supply" обеспечивает внешнее хранилище
(compare-and-swap по current_supply или блокировка на кредит), иначе
конкурентные сделки теряют обновления.

Все отказы локальны и возвращаются как TradeRejection; повторов нет.
"""

from dataclasses import dataclass
from typing import Optional

from pionext.core.domain.curve_state import CurveState
from pionext.core.domain.trade import (
    Buy,
    BuySpend,
    RejectionReason,
    Sell,
    SellForProceeds,
    TradeIntent,
    TradeOutcome,
    TradeRejection,
    TradeResult,
    TradeSide,
)
from pionext.core.math.bonding_curve import InvalidCurveConfiguration, price
from pionext.core.math.numerical_safeguards import validate_finite
from pionext.logging import get_trading_logger
from pionext.trading.quotes import quote_amount, supply_after
from pionext.trading.solver import DEFAULT_NARROWING_FACTOR, QuantitySolver, SolverConfig

logger = get_trading_logger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class TradeSimulatorConfig:
    """Конфигурация TradeSimulator."""

    # Эвристика сужения диапазона solver'а для малых сумм
    narrowing_factor: float = DEFAULT_NARROWING_FACTOR


# =============================================================================
# SIMULATOR
# =============================================================================


class TradeSimulator:
    """Симуляция сделок по квадратичной кривой."""

    def __init__(self, config: TradeSimulatorConfig | None = None):
        """
        Args:
            config: конфигурация симулятора (опционально, используется default)
        """
        self.config = config or TradeSimulatorConfig()
        self.solver = QuantitySolver(
            SolverConfig(narrowing_factor=self.config.narrowing_factor)
        )

    def simulate_buy(self, quantity: float, state: CurveState) -> TradeOutcome:
        """
        Симуляция покупки quantity кредитов.

        Returns:
            TradeResult или TradeRejection
            (NON_POSITIVE_AMOUNT, EXCEEDS_MAX_SUPPLY, INVALID_CURVE_CONFIGURATION)

        Raises:
            ValueError: Если quantity NaN/Inf
        """
        return self._simulate(TradeSide.BUY, quantity, state)

    def simulate_sell(self, quantity: float, state: CurveState) -> TradeOutcome:
        """
        Симуляция продажи quantity кредитов.

        Returns:
            TradeResult или TradeRejection
            (NON_POSITIVE_AMOUNT, INSUFFICIENT_SUPPLY, INVALID_CURVE_CONFIGURATION)

        Raises:
            ValueError: Если quantity NaN/Inf
        """
        return self._simulate(TradeSide.SELL, quantity, state)

    def simulate(
        self,
        intent: TradeIntent,
        state: CurveState,
        holder_balance: Optional[float] = None,
        currency_balance: Optional[float] = None,
    ) -> TradeOutcome:
        """
        Симуляция произвольного TradeIntent.

        Порядок проверок:
        1. Положительность количества/суммы
        2. Для сумм в валюте — поиск quantity (0 → NO_VIABLE_QUANTITY)
        3. Границы supply и симуляция
        4. Балансы (если переданы): валюта для BUY, кредиты для SELL

        BuySpend ищет quantity с ближайшей стоимостью, а не наибольшую
        по карману: стоимость может превысить currency_amount. Поэтому
        BuySpend на весь currency_balance нередко получает
        INSUFFICIENT_BALANCE.

        Args:
            intent: Buy | Sell | BuySpend | SellForProceeds
            state: Снапшот кривой
            holder_balance: Кредиты держателя (ограничивает SELL)
            currency_balance: Валюта покупателя (ограничивает BUY)

        Returns:
            TradeResult или TradeRejection
        """
        if isinstance(intent, Buy):
            outcome = self.simulate_buy(intent.quantity, state)
        elif isinstance(intent, Sell):
            outcome = self.simulate_sell(intent.quantity, state)
        elif isinstance(intent, (BuySpend, SellForProceeds)):
            outcome = self._simulate_spend(intent, state, holder_balance)
        else:
            raise TypeError(f"Unsupported trade intent: {type(intent).__name__}")

        if isinstance(outcome, TradeRejection):
            return outcome

        return self._check_balances(outcome, holder_balance, currency_balance)

    # -------------------------------------------------------------------------
    # internals
    # -------------------------------------------------------------------------

    def _simulate_spend(
        self,
        intent: BuySpend | SellForProceeds,
        state: CurveState,
        holder_balance: Optional[float],
    ) -> TradeOutcome:
        side = TradeSide.BUY if isinstance(intent, BuySpend) else TradeSide.SELL
        target = intent.currency_amount

        if target <= 0:
            return self._reject(
                RejectionReason.NON_POSITIVE_AMOUNT,
                f"currency_amount must be positive, got {target}",
            )

        try:
            quantity = self.solver.solve(target, side, state, max_sellable=holder_balance)
        except InvalidCurveConfiguration as e:
            return self._reject(RejectionReason.INVALID_CURVE_CONFIGURATION, str(e))

        if quantity == 0:
            return self._reject(
                RejectionReason.NO_VIABLE_QUANTITY,
                f"no {side.value} quantity matches currency_amount {target}",
            )

        return self._simulate(side, quantity, state)

    def _simulate(self, side: TradeSide, quantity: float, state: CurveState) -> TradeOutcome:
        validate_finite(quantity, "quantity")

        if quantity <= 0:
            return self._reject(
                RejectionReason.NON_POSITIVE_AMOUNT,
                f"quantity must be positive, got {quantity}",
            )

        try:
            current_price = price(state.current_supply, state.max_supply)

            amount = quote_amount(side, quantity, state)
            if amount is None:
                return self._reject_bounds(side, quantity, state)

            new_supply = supply_after(side, quantity, state)
            new_price = price(new_supply, state.max_supply)
        except InvalidCurveConfiguration as e:
            return self._reject(RejectionReason.INVALID_CURVE_CONFIGURATION, str(e))

        if side == TradeSide.BUY:
            price_impact = new_price - current_price
        else:
            price_impact = current_price - new_price

        result = TradeResult(
            side=side,
            amount=quantity,
            cost_or_proceeds=amount,
            average_price=amount / quantity,
            new_price=new_price,
            price_impact=price_impact,
            new_supply=new_supply,
        )

        logger.debug(
            "trade_simulated",
            side=side.value,
            amount=quantity,
            cost_or_proceeds=amount,
            new_supply=new_supply,
            price_impact=price_impact,
        )
        return result

    def _reject_bounds(
        self, side: TradeSide, quantity: float, state: CurveState
    ) -> TradeRejection:
        if side == TradeSide.BUY:
            return self._reject(
                RejectionReason.EXCEEDS_MAX_SUPPLY,
                f"buying {quantity} from supply {state.current_supply} "
                f"exceeds max_supply {state.max_supply}",
            )
        return self._reject(
            RejectionReason.INSUFFICIENT_SUPPLY,
            f"selling {quantity} exceeds current_supply {state.current_supply}",
        )

    def _check_balances(
        self,
        result: TradeResult,
        holder_balance: Optional[float],
        currency_balance: Optional[float],
    ) -> TradeOutcome:
        if result.side == TradeSide.BUY and currency_balance is not None:
            if currency_balance < result.cost_or_proceeds:
                return self._reject(
                    RejectionReason.INSUFFICIENT_BALANCE,
                    f"cost {result.cost_or_proceeds:.6f} exceeds balance {currency_balance:.6f}",
                )

        if result.side == TradeSide.SELL and holder_balance is not None:
            if holder_balance < result.amount:
                return self._reject(
                    RejectionReason.INSUFFICIENT_HOLDINGS,
                    f"selling {result.amount} exceeds holdings {holder_balance}",
                )

        return result

    def _reject(self, reason: RejectionReason, details: str) -> TradeRejection:
        logger.info("trade_rejected", reason=reason.value, details=details)
        return TradeRejection(reason=reason, details=details)
