"""Trade outcome models: TradeSide, TradeStatus, TradeResult, ExecutedTrade."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

TradeSide = Literal["buy", "sell"]


class TradeStatus(str, Enum):
    """How a buy or sell request ended."""

    FILLED = "filled"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_SHARES = "insufficient_shares"
    INVALID_REQUEST = "invalid_request"


class ExecutedTrade(BaseModel):
    """Single filled trade, recorded in the session's trade history."""

    trade_id: str
    day: int  # Market day on which the trade filled
    symbol: str
    side: TradeSide
    quantity: int = Field(gt=0)
    price: float

    @property
    def gross(self) -> float:
        return self.price * self.quantity


class TradeResult(BaseModel):
    """Outcome of ``User.buy`` / ``User.sell``.

    Trades are all-or-nothing: when ``status`` is anything but ``FILLED`` the
    portfolio is unchanged and ``trade`` is ``None``. ``message`` is the text
    shown to the player.
    """

    status: TradeStatus
    side: TradeSide
    symbol: str | None = None
    quantity: int = 0
    price: float | None = None  # Unit price used (None when rejected up front)
    gross: float = 0.0  # Cost of a buy or proceeds of a sell
    message: str
    trade: ExecutedTrade | None = None

    @property
    def ok(self) -> bool:
        return self.status is TradeStatus.FILLED

    def __str__(self) -> str:
        return self.message
