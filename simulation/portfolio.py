"""Mutable portfolio: cash balance plus integer share holdings.

Holdings are keyed by symbol. The portfolio also keeps a lookup-only
reference to each held ``Stock`` (owned by the ``Market``) so it can value
positions at the current price without going back through the market.
"""

from __future__ import annotations

import math

from models.portfolio import HoldingLine, PortfolioSnapshot
from models.stock import Stock
from simulation.errors import InvalidAmount
from simulation.rendering import render_portfolio


class Portfolio:
    """Cash and share holdings for one user.

    Each mutating method either applies its whole change or leaves the
    portfolio untouched. Shortfalls (``remove_cash``, ``remove_shares``)
    are reported by returning ``False``; malformed arguments raise
    ``InvalidAmount``.
    """

    def __init__(self, initial_cash: float) -> None:
        if not math.isfinite(initial_cash) or initial_cash < 0:
            raise InvalidAmount(f"Initial cash must be a non-negative number, got {initial_cash}.")
        self._cash: float = float(initial_cash) + 0.0
        self._holdings: dict[str, int] = {}
        self._stocks: dict[str, Stock] = {}

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def cash(self) -> float:
        return self._cash

    @property
    def holdings(self) -> dict[str, int]:
        """Copy of the symbol -> share count mapping."""
        return dict(self._holdings)

    def is_empty(self) -> bool:
        """True when no shares are held (cash is not considered)."""
        return not self._holdings

    def shares_of(self, stock: Stock | str) -> int:
        symbol = stock.symbol if isinstance(stock, Stock) else stock
        return self._holdings.get(symbol, 0)

    def total_value(self) -> float:
        """Cash plus every holding valued at its stock's current price."""
        return self._cash + sum(
            shares * self._stocks[symbol].price
            for symbol, shares in self._holdings.items()
        )

    def snapshot(self) -> PortfolioSnapshot:
        """Return an immutable, priced view of the current state."""
        return PortfolioSnapshot(
            cash=self._cash,
            holdings=[
                HoldingLine(
                    symbol=symbol,
                    name=self._stocks[symbol].name,
                    shares=shares,
                    price=self._stocks[symbol].price,
                )
                for symbol, shares in self._holdings.items()
            ],
        )

    def render(self) -> str:
        return render_portfolio(self.snapshot())

    # ------------------------------------------------------------------
    # Cash
    # ------------------------------------------------------------------

    def add_cash(self, amount: float) -> None:
        _require_positive_amount(amount)
        self._cash += amount

    def remove_cash(self, amount: float) -> bool:
        """Withdraw *amount* if the balance covers it; return whether it did."""
        _require_positive_amount(amount)
        if self._cash < amount:
            return False
        self._cash -= amount
        return True

    # ------------------------------------------------------------------
    # Shares
    # ------------------------------------------------------------------

    def add_shares(self, stock: Stock, shares: int) -> None:
        _require_positive_shares(shares)
        self._stocks[stock.symbol] = stock
        self._holdings[stock.symbol] = self._holdings.get(stock.symbol, 0) + shares

    def remove_shares(self, stock: Stock, shares: int) -> bool:
        """Remove *shares* of *stock* if that many are held; return whether it did.

        The holding entry is dropped when its count reaches zero.
        """
        _require_positive_shares(shares)
        held = self._holdings.get(stock.symbol, 0)
        if held < shares:
            return False
        remaining = held - shares
        if remaining == 0:
            del self._holdings[stock.symbol]
            del self._stocks[stock.symbol]
        else:
            self._holdings[stock.symbol] = remaining
        return True


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _require_positive_amount(amount: float) -> None:
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(f"Cash amount must be positive, got {amount}.")


def _require_positive_shares(shares: int) -> None:
    if isinstance(shares, bool) or not isinstance(shares, int) or shares <= 0:
        raise InvalidAmount(f"Share count must be a positive integer, got {shares!r}.")
