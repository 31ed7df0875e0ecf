"""
Tests for User buy/sell transactions.

Covers the all-or-nothing behaviour of both legs, the exact result messages,
trade history, and the round-trip properties (sell then buy at an unchanged
price restores cash and holdings).
"""

import pytest

from models.stock import Stock
from models.trade import TradeStatus
from simulation.user import User


@pytest.fixture
def aapl() -> Stock:
    return Stock(symbol="AAPL", name="Apple Inc.", price=175.22)


@pytest.fixture
def googl() -> Stock:
    return Stock(symbol="GOOGL", name="Alphabet Inc.", price=140.50)


@pytest.fixture
def msft() -> Stock:
    return Stock(symbol="MSFT", name="Microsoft Corp.", price=370.90)


# =============================================================================
# Buy
# =============================================================================


class TestBuy:

    def test_buy_then_sell_round_trip(self, aapl):
        user = User("alice", 10_000.0)

        bought = user.buy(aapl, 10)
        assert bought.status is TradeStatus.FILLED
        assert bought.message == "Successfully purchased 10 shares of AAPL for $1752.20"
        assert bought.gross == pytest.approx(1752.20)
        assert user.portfolio.cash == pytest.approx(8247.80)
        assert user.portfolio.holdings == {"AAPL": 10}

        sold = user.sell(aapl, 10)
        assert sold.ok
        assert sold.message == "Successfully sold 10 shares of AAPL for $1752.20"
        assert user.portfolio.cash == pytest.approx(10_000.0)
        assert user.portfolio.holdings == {}

    def test_insufficient_funds_leaves_state_unchanged(self, googl):
        user = User("carol", 100.0)
        result = user.buy(googl, 10)
        assert result.status is TradeStatus.INSUFFICIENT_FUNDS
        assert result.message == "Error: Insufficient funds to complete purchase."
        assert user.portfolio.cash == 100.0
        assert user.portfolio.holdings == {}
        assert user.get_trade_history() == []

    def test_buy_with_exact_cash(self, googl):
        user = User("dave", 281.0)
        assert user.buy(googl, 2).ok
        assert user.portfolio.cash == pytest.approx(0.0)
        assert user.portfolio.cash >= 0

    @pytest.mark.parametrize("shares", [0, -3])
    def test_non_positive_shares_rejected(self, aapl, shares):
        user = User("erin", 1_000.0)
        result = user.buy(aapl, shares)
        assert result.status is TradeStatus.INVALID_REQUEST
        assert result.message == "Invalid stock or number of shares."
        assert user.portfolio.cash == 1_000.0

    def test_unknown_stock_rejected(self):
        user = User("erin", 1_000.0)
        result = user.buy(None, 1)
        assert result.status is TradeStatus.INVALID_REQUEST
        assert result.symbol is None

    @pytest.mark.parametrize("shares", [10**307, 10**400])
    def test_cost_too_large_for_a_float_rejected(self, aapl, shares):
        user = User("lena", 1_000.0)
        result = user.buy(aapl, shares)
        assert result.status is TradeStatus.INVALID_REQUEST
        assert result.message == "Invalid stock or number of shares."
        assert user.portfolio.cash == 1_000.0
        assert user.portfolio.holdings == {}
        assert user.get_trade_history() == []

    def test_buy_stock_returns_message(self, aapl):
        user = User("frank", 1_000.0)
        assert user.buy_stock(aapl, 1) == "Successfully purchased 1 shares of AAPL for $175.22"


# =============================================================================
# Sell
# =============================================================================


class TestSell:

    def test_insufficient_shares(self, msft):
        user = User("gina", 10_000.0)
        user.buy(msft, 3)
        cash_before = user.portfolio.cash

        result = user.sell(msft, 5)
        assert result.status is TradeStatus.INSUFFICIENT_SHARES
        assert result.message == "Error: You do not own enough shares of MSFT to sell."
        assert user.portfolio.holdings == {"MSFT": 3}
        assert user.portfolio.cash == cash_before

    def test_sell_unowned(self, aapl):
        user = User("hank", 500.0)
        assert user.sell_stock(aapl, 1) == (
            "Error: You do not own enough shares of AAPL to sell."
        )

    def test_sell_uses_current_price(self, aapl):
        user = User("ivy", 1_000.0)
        user.buy(aapl, 2)
        aapl.price = 200.0
        result = user.sell(aapl, 2)
        assert result.gross == pytest.approx(400.0)
        assert user.portfolio.cash == pytest.approx(1_000.0 - 2 * 175.22 + 400.0)

    def test_partial_sell_keeps_entry(self, aapl):
        user = User("jay", 1_000.0)
        user.buy(aapl, 4)
        user.sell(aapl, 1)
        assert user.portfolio.holdings == {"AAPL": 3}

    def test_invalid_sell(self, aapl):
        user = User("kim", 1_000.0)
        assert user.sell(aapl, 0).status is TradeStatus.INVALID_REQUEST
        assert user.sell(None, 1).message == "Invalid stock or number of shares."

    @pytest.mark.parametrize("shares", [10**307, 10**400])
    def test_proceeds_too_large_for_a_float_rejected(self, aapl, shares):
        user = User("mo", 1_000.0)
        user.buy(aapl, 2)
        cash_before = user.portfolio.cash

        result = user.sell(aapl, shares)
        assert result.status is TradeStatus.INVALID_REQUEST
        assert user.portfolio.holdings == {"AAPL": 2}
        assert user.portfolio.cash == cash_before


# =============================================================================
# Transaction properties and history
# =============================================================================


class TestTransactionProperties:

    def test_buy_postcondition(self, googl):
        user = User("lee", 5_000.0)
        user.buy(googl, 1)
        cash, shares = user.portfolio.cash, user.portfolio.shares_of(googl)

        user.buy(googl, 7)
        assert user.portfolio.cash == pytest.approx(cash - 7 * googl.price)
        assert user.portfolio.shares_of(googl) == shares + 7

    def test_sell_then_buy_restores_state(self, msft):
        user = User("max", 2_000.0)
        user.buy(msft, 4)
        cash, holdings = user.portfolio.cash, user.portfolio.holdings

        assert user.sell(msft, 4).ok
        assert user.buy(msft, 4).ok
        assert user.portfolio.cash == pytest.approx(cash)
        assert user.portfolio.holdings == holdings

    def test_cash_never_negative_over_sequence(self, aapl, googl):
        user = User("nia", 1_000.0)
        for stock, shares in [(aapl, 3), (googl, 5), (aapl, 2), (googl, 1)]:
            user.buy(stock, shares)
            assert user.portfolio.cash >= 0
            assert all(count > 0 for count in user.portfolio.holdings.values())

    def test_trade_history_records_fills_only(self, aapl):
        day = [0]
        user = User("oli", 1_000.0, clock=lambda: day[0])
        user.buy(aapl, 2)
        day[0] = 3
        user.sell(aapl, 1)
        user.sell(aapl, 5)  # rejected

        history = user.get_trade_history()
        assert [(t.side, t.quantity, t.day) for t in history] == [
            ("buy", 2, 0),
            ("sell", 1, 3),
        ]
        assert history[0].gross == pytest.approx(2 * 175.22)
        assert len({t.trade_id for t in history}) == 2
