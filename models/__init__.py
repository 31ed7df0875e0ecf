"""Data models for the stock-market simulator.

The simulation package (portfolio, user, market, session) and the CLI import
from models.
"""

from models.account import UserRecord, validate_username
from models.config import SimulatorConfig
from models.portfolio import HoldingLine, PortfolioSnapshot
from models.stock import DEFAULT_ROSTER, Stock, build_roster
from models.trade import ExecutedTrade, TradeResult, TradeSide, TradeStatus

__all__ = [
    # account
    "UserRecord",
    "validate_username",
    # config
    "SimulatorConfig",
    # portfolio
    "HoldingLine",
    "PortfolioSnapshot",
    # stock
    "DEFAULT_ROSTER",
    "Stock",
    "build_roster",
    # trade
    "ExecutedTrade",
    "TradeResult",
    "TradeSide",
    "TradeStatus",
]
