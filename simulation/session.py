"""Interactive session loop: authentication phase, then the main menu.

Lifecycle:
    1. Prompt for log in (``1``) or sign up (``2``) until a ``User`` exists.
    2. Show the six-option menu and dispatch until the player exits.
    3. Print a session summary and the goodbye line.

All terminal I/O goes through two callables: ``prompt(text) -> str`` reads
one line (raising ``EOFError`` at end of input) and ``emit(text)`` writes
one block of text. Defaults are ``input`` and ``print``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from simulation.errors import InvalidAmount, InvalidUsername, PersistenceError, UserExists
from simulation.market import Market
from simulation.rendering import render_day_moves, render_session_summary
from simulation.user import MAX_SHARES, User

logger = logging.getLogger(__name__)

WELCOME = "Welcome to the Stock Market Simulator!"
GOODBYE = "Thank you for playing. Goodbye!"
MAIN_MENU = "\n".join(
    [
        "",
        "===== Main Menu =====",
        "1. View Market Prices",
        "2. View Your Portfolio",
        "3. Buy Stock",
        "4. Sell Stock",
        "5. Advance to Next Day",
        "6. Exit Simulator",
        "=====================",
    ]
)
AUTH_MENU = "1. Log In\n2. Sign Up"
EXIT_CHOICE = 6


class SessionLoop:
    """Drives one player's session against a ``Market``."""

    def __init__(
        self,
        market: Market,
        prompt: Callable[[str], str] = input,
        emit: Callable[[str], None] = print,
    ) -> None:
        self._market = market
        self._prompt = prompt
        self._emit = emit
        self._user: User | None = None
        self._handlers: dict[int, Callable[[User], None]] = {
            1: self._view_market,
            2: self._view_portfolio,
            3: self._buy,
            4: self._sell,
            5: self._advance_day,
        }

    @property
    def user(self) -> User | None:
        """The authenticated user, once the auth phase has finished."""
        return self._user

    def run(self) -> int:
        """Run until the player exits or input ends. Returns the exit code."""
        self._emit(WELCOME)
        try:
            self._user = self._authenticate()
            self._main_loop(self._user)
        except EOFError:
            logger.debug("End of input; leaving the session.")
            self._emit("")

        if self._user is not None:
            self._emit(
                render_session_summary(
                    username=self._user.username,
                    starting_cash=self._user.starting_cash,
                    final_value=self._user.portfolio.total_value(),
                    trade_count=len(self._user.get_trade_history()),
                    days=self._market.day,
                )
            )
        self._emit(GOODBYE)
        return 0

    # ------------------------------------------------------------------
    # Phase 1: authentication
    # ------------------------------------------------------------------

    def _authenticate(self) -> User:
        while True:
            self._emit(AUTH_MENU)
            option = self._read("Choose an option (1 or 2): ")
            if option == "1":
                user = self._login()
            elif option == "2":
                user = self._signup()
            else:
                self._emit("Invalid option. Please enter 1 or 2.")
                continue
            if user is not None:
                return user

    def _login(self) -> User | None:
        username = self._read("Enter your username: ")
        password = self._read("Enter your password: ")
        user = self._market.login(username, password)
        if user is None:
            self._emit("Login failed. Invalid username or password.")
            return None
        self._emit(f"Login successful! Welcome back, {user.username}!")
        return user

    def _signup(self) -> User | None:
        username = self._read("Choose a username: ")
        password = self._read("Choose a password: ")
        cash_text = self._read("Enter your initial cash balance: $")
        try:
            initial_cash = float(cash_text)
        except ValueError:
            self._emit("Invalid cash amount.")
            return None
        if not math.isfinite(initial_cash):
            self._emit("Invalid cash amount.")
            return None

        try:
            self._market.signup(username, password, initial_cash)
        except UserExists:
            self._emit("Username already exists. Please try a different username.")
            return None
        except InvalidUsername as exc:
            self._emit(f"Invalid username. {exc}")
            return None
        except InvalidAmount:
            self._emit("Invalid cash amount.")
            return None
        except PersistenceError as exc:
            logger.warning("%s", exc)
            self._emit(f"Warning: {exc}. Your account will last for this session only.")

        user = self._market.login(username, password)
        if user is not None:
            self._emit(f"Account created successfully! Welcome, {user.username}!")
        return user

    # ------------------------------------------------------------------
    # Phase 2: main menu
    # ------------------------------------------------------------------

    def _main_loop(self, user: User) -> None:
        while True:
            self._emit(MAIN_MENU)
            text = self._read("Choose an option: ")
            try:
                choice = int(text)
            except ValueError:
                self._emit("Invalid input. Please enter a number between 1 and 6.")
                continue
            if choice == EXIT_CHOICE:
                return
            handler = self._handlers.get(choice)
            if handler is None:
                self._emit("Invalid choice. Please enter a number between 1 and 6.")
                continue
            handler(user)

    def _view_market(self, user: User) -> None:
        self._emit(self._market.render())

    def _view_portfolio(self, user: User) -> None:
        self._emit(user.portfolio.render())

    def _buy(self, user: User) -> None:
        self._emit(self._market.render())
        symbol = self._read("Enter the symbol of the stock you want to buy: ")
        stock = self._market.lookup(symbol)
        if stock is None:
            self._emit("Invalid stock symbol.")
            return
        shares = self._read_shares("Enter the number of shares to buy: ")
        if shares is None:
            return
        self._emit(user.buy(stock, shares).message)

    def _sell(self, user: User) -> None:
        self._emit(user.portfolio.render())
        if user.portfolio.is_empty():
            self._emit("You have no stocks to sell.")
            return
        symbol = self._read("Enter the symbol of the stock you want to sell: ")
        stock = self._market.lookup(symbol)
        if stock is None:
            self._emit("Invalid stock symbol. You do not own this stock.")
            return
        shares = self._read_shares("Enter the number of shares to sell: ")
        if shares is None:
            return
        self._emit(user.sell(stock, shares).message)

    def _advance_day(self, user: User) -> None:
        self._emit("\nMarket is updating for the next day...")
        self._market.advance_day()
        self._emit(f"Market update complete. Day {self._market.day}.")
        self._emit(render_day_moves(self._market.stocks))
        self._emit(self._market.render())

    # ------------------------------------------------------------------
    # Input helpers
    # ------------------------------------------------------------------

    def _read(self, text: str) -> str:
        return self._prompt(text).strip()

    def _read_shares(self, text: str) -> int | None:
        try:
            shares = int(self._read(text))
        except ValueError:
            shares = None
        if shares is None or abs(shares) > MAX_SHARES:
            self._emit("Invalid input. Please enter a whole number for shares.")
            return None
        return shares
