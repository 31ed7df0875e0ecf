"""Persisted account model."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

# Characters the ``.users.dat`` line format cannot represent.
FORBIDDEN_USERNAME_CHARS = (",", "\n", "\r")


def validate_username(username: str) -> str:
    """Return *username* unchanged, or raise ``ValueError`` if it cannot be stored."""
    if not username:
        raise ValueError("Username must not be empty.")
    if any(c in username for c in FORBIDDEN_USERNAME_CHARS):
        raise ValueError("Username must not contain commas or line breaks.")
    return username


class UserRecord(BaseModel):
    """One credential-store entry: ``<username>,<sha256hex>,<cash>`` on disk.

    ``cash_balance`` is the starting cash chosen at signup; session trades
    never write back to it.
    """

    username: Annotated[str, AfterValidator(validate_username)]
    hashed_password: str = Field(pattern=r"^[0-9a-f]{64}$")
    cash_balance: float = Field(ge=0, allow_inf_nan=False)

    def to_line(self) -> str:
        """Serialise to the store's line format (no trailing newline)."""
        return f"{self.username},{self.hashed_password},{self.cash_balance!r}"

    @classmethod
    def from_line(cls, line: str) -> UserRecord | None:
        """Parse one store line.

        Returns ``None`` when the line does not have exactly three
        comma-separated fields. Raises ``ValueError`` (pydantic's
        ``ValidationError``) when it does but a field is invalid.
        """
        parts = line.split(",")
        if len(parts) != 3:
            return None
        username, hashed, cash = parts
        return cls(username=username, hashed_password=hashed, cash_balance=cash)
