"""Exception types raised by the simulator core.

Insufficient funds and insufficient shares are not exceptions: they come back
as ``TradeResult`` outcomes. Everything here is either a rejected argument,
an account-store problem, or a fatal startup condition.
"""


class SimulatorError(Exception):
    """Base class for simulator errors."""


class InvalidAmount(SimulatorError, ValueError):
    """A cash amount or share count was zero, negative, or not finite."""


class InvalidUsername(SimulatorError, ValueError):
    """The username cannot be stored in the credential file."""


class UserExists(SimulatorError):
    """Signup collided with an existing username."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username '{username}' already exists.")
        self.username = username


class PersistenceError(SimulatorError):
    """Writing the credential store failed.

    Raised after the in-memory change has been applied, so the running
    session can continue with the new account.
    """


class CryptoUnavailable(SimulatorError):
    """SHA-256 is not available from ``hashlib``."""
