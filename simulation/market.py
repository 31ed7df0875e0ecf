"""Market: the fixed instrument roster plus the persisted credential store.

The market owns every ``Stock`` for the life of the process. Portfolios hold
references into this roster, so the roster is never replaced or resized.
"""

from __future__ import annotations

import logging
import math
import random
from pathlib import Path

from models.account import UserRecord, validate_username
from models.config import SimulatorConfig
from models.stock import Stock, build_roster
from simulation.credentials import CredentialStore, hash_password
from simulation.errors import InvalidAmount, InvalidUsername, UserExists
from simulation.rendering import render_market
from simulation.user import User

logger = logging.getLogger(__name__)


class Market:
    """Instrument roster, day counter, and account operations.

    *rng* supplies the uniform ``[0, 1)`` samples for day advances; pass a
    seeded ``random.Random`` (or any object with ``random()``) for
    reproducible runs.
    """

    def __init__(
        self,
        config: SimulatorConfig | None = None,
        rng: random.Random | None = None,
        users_file: str | Path | None = None,
    ) -> None:
        self._config = config or SimulatorConfig()
        # Fail at startup rather than at the first signup.
        hash_password("")
        self._rng = rng if rng is not None else random.Random(self._config.seed)
        self._stocks: tuple[Stock, ...] = tuple(build_roster())
        self._day = 0
        self._users = CredentialStore(users_file or self._config.users_file)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    @property
    def stocks(self) -> tuple[Stock, ...]:
        """Roster in display order."""
        return self._stocks

    @property
    def day(self) -> int:
        """Number of day advances since the market opened."""
        return self._day

    def lookup(self, symbol: str) -> Stock | None:
        """Case-insensitive symbol lookup. Returns ``None`` if not listed."""
        for stock in self._stocks:
            if stock.matches(symbol):
                return stock
        return None

    def advance_day(self) -> None:
        """Move every price once by the day-advance rule."""
        for stock in self._stocks:
            stock.advance_day(self._rng)
        self._day += 1
        logger.debug(
            "Day %d prices: %s",
            self._day,
            ", ".join(f"{s.symbol}={s.price:.2f}" for s in self._stocks),
        )

    def render(self) -> str:
        return render_market(self._stocks)

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    @property
    def users(self) -> CredentialStore:
        return self._users

    def signup(self, username: str, password: str, starting_cash: float) -> UserRecord:
        """Register a new account and flush the credential store.

        Raises ``InvalidUsername``, ``InvalidAmount`` or ``UserExists`` without
        touching the store. Raises ``PersistenceError`` if the write fails;
        the account is registered in memory either way.
        """
        try:
            validate_username(username)
        except ValueError as exc:
            raise InvalidUsername(str(exc)) from exc
        if not math.isfinite(starting_cash) or starting_cash < 0:
            raise InvalidAmount(
                f"Starting cash must be a non-negative number, got {starting_cash}."
            )
        # Adding 0.0 turns -0.0 into 0.0.
        starting_cash = float(starting_cash) + 0.0
        if username in self._users:
            raise UserExists(username)

        record = UserRecord(
            username=username,
            hashed_password=hash_password(password),
            cash_balance=starting_cash,
        )
        logger.info("Registering account '%s'", username)
        self._users.add(record)
        return record

    def login(self, username: str, password: str) -> User | None:
        """Return a fresh ``User`` for valid credentials, else ``None``.

        The portfolio starts from the cash stored at signup.
        """
        record = self._users.get(username)
        if record is None or record.hashed_password != hash_password(password):
            logger.info("Failed login for '%s'", username)
            return None
        logger.info("Login for '%s'", username)
        return User(record.username, record.cash_balance, clock=lambda: self._day)
