"""Authenticated player: owns one portfolio and executes buy/sell against it.

Cash and shares move together or not at all. A buy takes cash first and a
sell takes shares first; the second leg cannot fail once the first has
succeeded, so there is nothing to roll back.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Callable

from models.stock import Stock
from models.trade import ExecutedTrade, TradeResult, TradeSide, TradeStatus
from simulation.portfolio import Portfolio

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid stock or number of shares."
INSUFFICIENT_FUNDS_MESSAGE = "Error: Insufficient funds to complete purchase."
# Largest share count accepted in one order (a signed 32-bit int).
MAX_SHARES = 2**31 - 1


class User:
    """A logged-in session bound to one ``Portfolio``.

    ``day`` is read from the market at trade time (via *clock*) so trades can
    be stamped without the user holding a reference to the market.
    """

    def __init__(
        self,
        username: str,
        starting_cash: float,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.username = username
        self.starting_cash = float(starting_cash) + 0.0
        self.portfolio = Portfolio(starting_cash)
        self._clock = clock
        self._trade_history: list[ExecutedTrade] = []

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def get_trade_history(self) -> list[ExecutedTrade]:
        """Return the filled trades of this session, oldest first."""
        return list(self._trade_history)

    def buy(self, stock: Stock | None, shares: int) -> TradeResult:
        """Buy *shares* of *stock* at its current price."""
        if not _valid_request(stock, shares):
            return _rejected("buy", stock, shares)

        price = stock.price
        total_cost = _gross(price, shares)
        if total_cost is None:
            return _rejected("buy", stock, shares)
        if not self.portfolio.remove_cash(total_cost):
            logger.info(
                "%s: buy %d %s rejected, cost $%.2f exceeds cash $%.2f",
                self.username, shares, stock.symbol, total_cost, self.portfolio.cash,
            )
            return TradeResult(
                status=TradeStatus.INSUFFICIENT_FUNDS,
                side="buy",
                symbol=stock.symbol,
                quantity=shares,
                price=price,
                message=INSUFFICIENT_FUNDS_MESSAGE,
            )

        self.portfolio.add_shares(stock, shares)
        return self._filled(
            "buy", stock, shares, price, total_cost,
            f"Successfully purchased {shares} shares of {stock.symbol} for ${total_cost:.2f}",
        )

    def sell(self, stock: Stock | None, shares: int) -> TradeResult:
        """Sell *shares* of *stock* at its current price."""
        if not _valid_request(stock, shares):
            return _rejected("sell", stock, shares)
        if _gross(stock.price, shares) is None:
            return _rejected("sell", stock, shares)

        if not self.portfolio.remove_shares(stock, shares):
            logger.info(
                "%s: sell %d %s rejected, only %d held",
                self.username, shares, stock.symbol, self.portfolio.shares_of(stock),
            )
            return TradeResult(
                status=TradeStatus.INSUFFICIENT_SHARES,
                side="sell",
                symbol=stock.symbol,
                quantity=shares,
                price=stock.price,
                message=f"Error: You do not own enough shares of {stock.symbol} to sell.",
            )

        price = stock.price
        proceeds = price * shares
        self.portfolio.add_cash(proceeds)
        return self._filled(
            "sell", stock, shares, price, proceeds,
            f"Successfully sold {shares} shares of {stock.symbol} for ${proceeds:.2f}",
        )

    def buy_stock(self, stock: Stock | None, shares: int) -> str:
        return self.buy(stock, shares).message

    def sell_stock(self, stock: Stock | None, shares: int) -> str:
        return self.sell(stock, shares).message

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _filled(
        self,
        side: TradeSide,
        stock: Stock,
        shares: int,
        price: float,
        gross: float,
        message: str,
    ) -> TradeResult:
        trade = ExecutedTrade(
            trade_id=uuid.uuid4().hex[:12],
            day=self._clock() if self._clock is not None else 0,
            symbol=stock.symbol,
            side=side,
            quantity=shares,
            price=price,
        )
        self._trade_history.append(trade)
        logger.info("%s: %s", self.username, message)
        return TradeResult(
            status=TradeStatus.FILLED,
            side=side,
            symbol=stock.symbol,
            quantity=shares,
            price=price,
            gross=gross,
            message=message,
            trade=trade,
        )


def _valid_request(stock: Stock | None, shares: int) -> bool:
    if stock is None:
        return False
    if isinstance(shares, bool) or not isinstance(shares, int):
        return False
    return shares > 0


def _gross(price: float, shares: int) -> float | None:
    """``price * shares``, or ``None`` when the product is not a finite float."""
    try:
        gross = price * shares
    except OverflowError:
        return None
    return gross if math.isfinite(gross) else None


def _rejected(side: TradeSide, stock: Stock | None, shares: int) -> TradeResult:
    return TradeResult(
        status=TradeStatus.INVALID_REQUEST,
        side=side,
        symbol=stock.symbol if stock is not None else None,
        quantity=shares if isinstance(shares, int) and abs(shares) <= MAX_SHARES else 0,
        message=INVALID_REQUEST_MESSAGE,
    )
