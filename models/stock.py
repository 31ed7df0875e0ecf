"""Tradable instrument model and the built-in market roster."""

from __future__ import annotations

import random

from pydantic import BaseModel, ConfigDict, Field

PRICE_FLOOR = 1.0
MAX_DAILY_MOVE = 0.05


class Stock(BaseModel):
    """A named instrument with a mutable current price.

    ``symbol`` and ``name`` are frozen; ``price`` changes only through
    :meth:`advance_day`. Assignment is validated, so the price floor holds
    even if a caller writes ``price`` directly.
    """

    model_config = ConfigDict(validate_assignment=True)

    symbol: str = Field(min_length=1, frozen=True)
    name: str = Field(min_length=1, frozen=True)
    price: float = Field(ge=PRICE_FLOOR)
    previous_price: float | None = Field(
        default=None,
        description="Price before the most recent day advance, if any.",
    )

    def matches(self, symbol: str) -> bool:
        """Case-insensitive symbol comparison."""
        return self.symbol.casefold() == symbol.strip().casefold()

    def advance_day(self, rng: random.Random) -> float:
        """Apply one day of uniform drift and return the new price.

        ``u`` in ``[0, 1)`` maps to a change fraction in ``[-0.05, +0.05)``;
        the result is clamped to :data:`PRICE_FLOOR`.
        """
        change = (rng.random() - 0.5) / 10.0
        self.previous_price = self.price
        self.price = max(PRICE_FLOOR, self.price * (1.0 + change))
        return self.price

    @property
    def change(self) -> float:
        if self.previous_price is None:
            return 0.0
        return self.price - self.previous_price

    @property
    def percent_change(self) -> float:
        if not self.previous_price:
            return 0.0
        return self.change / self.previous_price * 100.0

    def __str__(self) -> str:
        return f"{self.name} ({self.symbol}): ${self.price:.2f}"


# (symbol, name, opening price), in display order.
DEFAULT_ROSTER: tuple[tuple[str, str, float], ...] = (
    ("GOOGL", "Alphabet Inc.", 140.50),
    ("AAPL", "Apple Inc.", 175.22),
    ("MSFT", "Microsoft Corp.", 370.90),
    ("AMZN", "Amazon.com, Inc.", 155.46),
    ("TSLA", "Tesla, Inc.", 245.88),
)


def build_roster() -> list[Stock]:
    """Return fresh ``Stock`` objects for the built-in roster."""
    return [Stock(symbol=s, name=n, price=p) for s, n, p in DEFAULT_ROSTER]
