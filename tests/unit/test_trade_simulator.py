"""
Юнит-тесты для TradeSimulator

Проверяет:
1. Конкретный сценарий покупки (max_supply=100, current_supply=50, buy 10)
2. Продажу и price impact со знаком "падение цены"
3. Round-trip: buy q, затем sell q возвращает исходную стоимость
4. Границы: EXCEEDS_MAX_SUPPLY, INSUFFICIENT_SUPPLY
5. Защиту от нулевых / отрицательных количеств
6. Диспетчеризацию TradeIntent и проверки балансов
7. Неизменность входного CurveState
"""

import math

import pytest

from pionext.core.domain import (
    Buy,
    BuySpend,
    CurveState,
    RejectionReason,
    Sell,
    SellForProceeds,
    TradeRejection,
    TradeResult,
    TradeSide,
)
from pionext.core.math.bonding_curve import cost, price
from pionext.trading import TradeSimulator, TradeSimulatorConfig


@pytest.fixture
def simulator() -> TradeSimulator:
    return TradeSimulator()


@pytest.fixture
def mid_state() -> CurveState:
    """Кривая на половине supply: цена 0.25"""
    return CurveState(current_supply=50, max_supply=100)


# =============================================================================
# BUY
# =============================================================================


class TestSimulateBuy:
    """Тесты прямой симуляции покупки"""

    def test_concrete_scenario(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        """Buy 10 при supply 50/100: cost ≈ 3.0333, new_price 0.36, impact 0.11"""
        result = simulator.simulate_buy(10, mid_state)

        assert isinstance(result, TradeResult)
        assert result.side == TradeSide.BUY
        assert result.amount == 10
        assert result.new_supply == 60
        assert result.cost == pytest.approx(100 * (0.6**3 / 3 - 0.5**3 / 3), rel=1e-12)
        assert result.cost == pytest.approx(3.0333, abs=1e-4)
        assert result.average_price == pytest.approx(result.cost / 10, rel=1e-12)
        assert result.new_price == pytest.approx(0.36, abs=1e-12)
        assert result.price_impact == pytest.approx(0.11, abs=1e-12)

    def test_buy_entire_remaining_supply(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        """Покупка всего остатка допустима, цена становится 1"""
        result = simulator.simulate_buy(50, mid_state)

        assert isinstance(result, TradeResult)
        assert result.new_supply == 100
        assert result.new_price == 1.0

    def test_exceeds_max_supply(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        """Buy (max - current + 1) → EXCEEDS_MAX_SUPPLY"""
        quantity = mid_state.max_supply - mid_state.current_supply + 1
        result = simulator.simulate_buy(quantity, mid_state)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.EXCEEDS_MAX_SUPPLY

    @pytest.mark.parametrize("quantity", [0, -5, -0.001])
    def test_non_positive_quantity(
        self, simulator: TradeSimulator, mid_state: CurveState, quantity: float
    ) -> None:
        """Buy 0 / -5 → NON_POSITIVE_AMOUNT"""
        result = simulator.simulate_buy(quantity, mid_state)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.NON_POSITIVE_AMOUNT

    def test_nan_quantity_raises(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        with pytest.raises(ValueError, match="quantity"):
            simulator.simulate_buy(math.nan, mid_state)

    def test_from_zero_supply(self, simulator: TradeSimulator) -> None:
        """Покупка с нулевого supply: price impact равен новой цене"""
        state = CurveState(current_supply=0, max_supply=1_000)
        result = simulator.simulate_buy(100, state)

        assert isinstance(result, TradeResult)
        assert result.price_impact == pytest.approx(result.new_price)
        assert result.new_price == pytest.approx(0.01)

    def test_invalid_curve_configuration(self, simulator: TradeSimulator) -> None:
        """Невалидированный снапшот с max_supply 0 → INVALID_CURVE_CONFIGURATION"""
        state = CurveState.model_construct(current_supply=0.0, max_supply=0.0)
        result = simulator.simulate_buy(1, state)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.INVALID_CURVE_CONFIGURATION


# =============================================================================
# SELL
# =============================================================================


class TestSimulateSell:
    """Тесты прямой симуляции продажи"""

    def test_concrete_sell(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        """Sell 10 при supply 50/100: proceeds = cost(40, 50)"""
        result = simulator.simulate_sell(10, mid_state)

        assert isinstance(result, TradeResult)
        assert result.side == TradeSide.SELL
        assert result.new_supply == 40
        assert result.proceeds == pytest.approx(cost(40, 50, 100), rel=1e-12)
        assert result.proceeds > 0
        assert result.new_price == pytest.approx(0.16, abs=1e-12)
        # Положительный impact = падение цены
        assert result.price_impact == pytest.approx(0.09, abs=1e-12)

    def test_sell_entire_supply(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        result = simulator.simulate_sell(50, mid_state)

        assert isinstance(result, TradeResult)
        assert result.new_supply == 0
        assert result.new_price == 0.0
        assert result.proceeds == pytest.approx(mid_state.current_raise(), rel=1e-12)

    def test_insufficient_supply(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        """Sell (current + 1) → INSUFFICIENT_SUPPLY"""
        result = simulator.simulate_sell(mid_state.current_supply + 1, mid_state)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.INSUFFICIENT_SUPPLY

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_non_positive_quantity(
        self, simulator: TradeSimulator, mid_state: CurveState, quantity: float
    ) -> None:
        result = simulator.simulate_sell(quantity, mid_state)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.NON_POSITIVE_AMOUNT


# =============================================================================
# ROUND TRIP / IMMUTABILITY
# =============================================================================


class TestRoundTrip:
    """Покупка и немедленная продажа того же количества"""

    @pytest.mark.parametrize(
        "current_supply,max_supply,quantity",
        [
            (0, 100, 10),
            (50, 100, 10),
            (123.5, 1_000, 400.25),
            (0, 1_000_000, 66_943),
            (999_000, 1_000_000, 1_000),
        ],
    )
    def test_sell_returns_buy_cost(
        self,
        simulator: TradeSimulator,
        current_supply: float,
        max_supply: float,
        quantity: float,
    ) -> None:
        state = CurveState(current_supply=current_supply, max_supply=max_supply)

        bought = simulator.simulate_buy(quantity, state)
        assert isinstance(bought, TradeResult)

        sold = simulator.simulate_sell(quantity, bought.apply_to(state))
        assert isinstance(sold, TradeResult)

        assert sold.proceeds == pytest.approx(bought.cost, rel=1e-9)
        assert sold.new_supply == pytest.approx(current_supply, abs=1e-9)
        assert sold.price_impact == pytest.approx(bought.price_impact, rel=1e-9)

    def test_state_not_mutated(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        snapshot = mid_state.model_dump()

        simulator.simulate_buy(10, mid_state)
        simulator.simulate_sell(10, mid_state)
        simulator.simulate(BuySpend(currency_amount=1.0), mid_state)

        assert mid_state.model_dump() == snapshot


# =============================================================================
# SIMULATE (INTENT DISPATCH)
# =============================================================================


class TestSimulateIntent:
    """Тесты диспетчеризации TradeIntent"""

    def test_buy_intent(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        assert simulator.simulate(Buy(quantity=10), mid_state) == simulator.simulate_buy(
            10, mid_state
        )

    def test_sell_intent(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        assert simulator.simulate(Sell(quantity=10), mid_state) == simulator.simulate_sell(
            10, mid_state
        )

    def test_buy_spend(self, simulator: TradeSimulator) -> None:
        """Потратить 100 при supply 0/1e6 → ближайшее целое количество"""
        state = CurveState(current_supply=0, max_supply=1_000_000)
        result = simulator.simulate(BuySpend(currency_amount=100), state)

        assert isinstance(result, TradeResult)
        assert result.side == TradeSide.BUY
        assert result.amount == simulator.solver.solve(100, TradeSide.BUY, state)
        assert result.cost == pytest.approx(100, abs=0.01)

    def test_sell_for_proceeds_limited_by_holdings(self, simulator: TradeSimulator) -> None:
        """SellForProceeds ищет в пределах баланса держателя"""
        state = CurveState(current_supply=500, max_supply=1_000)
        result = simulator.simulate(
            SellForProceeds(currency_amount=1_000), state, holder_balance=100
        )

        assert isinstance(result, TradeResult)
        assert result.side == TradeSide.SELL
        assert result.amount == 100

    def test_sell_for_proceeds(self, simulator: TradeSimulator) -> None:
        state = CurveState(current_supply=500, max_supply=1_000)
        result = simulator.simulate(SellForProceeds(currency_amount=10), state)

        assert isinstance(result, TradeResult)
        assert result.proceeds == pytest.approx(10, abs=0.3)

    @pytest.mark.parametrize(
        "intent",
        [
            BuySpend(currency_amount=0),
            BuySpend(currency_amount=-10),
            SellForProceeds(currency_amount=0),
        ],
    )
    def test_non_positive_currency_amount(
        self, simulator: TradeSimulator, mid_state: CurveState, intent
    ) -> None:
        result = simulator.simulate(intent, mid_state)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.NON_POSITIVE_AMOUNT

    def test_no_viable_quantity_sold_out(self, simulator: TradeSimulator) -> None:
        """Всё продано → покупка на сумму невозможна"""
        state = CurveState(current_supply=100, max_supply=100)
        result = simulator.simulate(BuySpend(currency_amount=5), state)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.NO_VIABLE_QUANTITY

    def test_no_viable_quantity_zero_holdings(
        self, simulator: TradeSimulator, mid_state: CurveState
    ) -> None:
        result = simulator.simulate(
            SellForProceeds(currency_amount=1), mid_state, holder_balance=0
        )

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.NO_VIABLE_QUANTITY

    def test_no_viable_quantity_amount_below_one_credit(
        self, simulator: TradeSimulator, mid_state: CurveState
    ) -> None:
        """Сумма меньше цены одного кредита → 0 кредитов"""
        result = simulator.simulate(BuySpend(currency_amount=0.1), mid_state)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.NO_VIABLE_QUANTITY

    def test_insufficient_balance(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        """Стоимость 3.03 при балансе 1.0 → INSUFFICIENT_BALANCE"""
        result = simulator.simulate(Buy(quantity=10), mid_state, currency_balance=1.0)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.INSUFFICIENT_BALANCE

    def test_sufficient_balance(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        result = simulator.simulate(Buy(quantity=10), mid_state, currency_balance=5.0)

        assert isinstance(result, TradeResult)

    def test_buy_spend_whole_balance_can_exceed_it(
        self, simulator: TradeSimulator, mid_state: CurveState
    ) -> None:
        """Ближайшее к 3.0 количество: 10 кредитов за 3.0333 > баланса 3.0"""
        spend_all = simulator.simulate(
            BuySpend(currency_amount=3.0), mid_state, currency_balance=3.0
        )

        assert isinstance(spend_all, TradeRejection)
        assert spend_all.reason == RejectionReason.INSUFFICIENT_BALANCE
        assert "3.033333" in spend_all.details

        with_margin = simulator.simulate(
            BuySpend(currency_amount=3.0), mid_state, currency_balance=3.04
        )

        assert isinstance(with_margin, TradeResult)
        assert with_margin.amount == 10
        assert with_margin.cost == pytest.approx(cost(50, 60, 100))

    def test_insufficient_holdings(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        """Продажа 5 при балансе 3 → INSUFFICIENT_HOLDINGS"""
        result = simulator.simulate(Sell(quantity=5), mid_state, holder_balance=3)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.INSUFFICIENT_HOLDINGS

    def test_supply_bounds_checked_before_balances(
        self, simulator: TradeSimulator, mid_state: CurveState
    ) -> None:
        result = simulator.simulate(Sell(quantity=60), mid_state, holder_balance=3)

        assert isinstance(result, TradeRejection)
        assert result.reason == RejectionReason.INSUFFICIENT_SUPPLY

    def test_unsupported_intent(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        with pytest.raises(TypeError, match="Unsupported trade intent"):
            simulator.simulate(object(), mid_state)

    def test_custom_narrowing_factor(self) -> None:
        simulator = TradeSimulator(TradeSimulatorConfig(narrowing_factor=0.25))

        assert simulator.solver.config.narrowing_factor == 0.25

    def test_price_consistency(self, simulator: TradeSimulator, mid_state: CurveState) -> None:
        result = simulator.simulate(Buy(quantity=25), mid_state)

        assert isinstance(result, TradeResult)
        assert result.new_price == price(result.new_supply, mid_state.max_supply)
