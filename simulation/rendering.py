"""Pure text renderers for the terminal session.

Nothing here mutates state. Stock listings show two-decimal prices without
thousands separators; portfolio and summary figures use separators.
"""

from __future__ import annotations

from collections.abc import Iterable

from models.portfolio import PortfolioSnapshot
from models.stock import Stock

MARKET_HEADER = "-------------------- CURRENT MARKET --------------------"
MARKET_FOOTER = "------------------------------------------------------"
PORTFOLIO_HEADER = "-------------------- PORTFOLIO --------------------"
PORTFOLIO_FOOTER = "---------------------------------------------------"


def money(amount: float) -> str:
    """``1234.5`` -> ``"1,234.50"``."""
    return f"{amount:,.2f}"


def render_stock(stock: Stock) -> str:
    return str(stock)


def render_market(stocks: Iterable[Stock]) -> str:
    lines = [MARKET_HEADER]
    lines.extend(render_stock(stock) for stock in stocks)
    lines.append(MARKET_FOOTER)
    return "\n".join(lines)


def render_day_moves(stocks: Iterable[Stock]) -> str:
    """One line per stock with the last day's move, e.g. ``AAPL  +1.23 (+0.70%)``."""
    return "\n".join(
        f"  {stock.symbol:<6}{stock.change:+.2f} ({stock.percent_change:+.2f}%)"
        for stock in stocks
    )


def render_portfolio(snapshot: PortfolioSnapshot) -> str:
    lines = [
        PORTFOLIO_HEADER,
        f"Cash Balance: ${money(snapshot.cash)}",
        "Stock Holdings:",
    ]
    if not snapshot.holdings:
        lines.append("  No stocks owned.")
    for line in snapshot.holdings:
        lines.append(
            f"  - {line.name} ({line.symbol}): {line.shares} shares @ ${money(line.price)}"
            f" | Total Value: ${money(line.value)}"
        )
    lines.append(f"Total Portfolio Value: ${money(snapshot.total_value)}")
    lines.append(PORTFOLIO_FOOTER)
    return "\n".join(lines)


def render_session_summary(
    username: str,
    starting_cash: float,
    final_value: float,
    trade_count: int,
    days: int,
) -> str:
    """End-of-session recap shown before the goodbye line."""
    if starting_cash > 0:
        return_pct = (final_value - starting_cash) / starting_cash * 100
        return_text = f"{return_pct:+.2f}%"
    else:
        return_text = "n/a"
    return "\n".join(
        [
            f"Session summary for {username}:",
            f"  Starting cash:         ${money(starting_cash)}",
            f"  Final portfolio value: ${money(final_value)}",
            f"  Return:                {return_text}",
            f"  Trades executed:       {trade_count}",
            f"  Days simulated:        {days}",
        ]
    )
