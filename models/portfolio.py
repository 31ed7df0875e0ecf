"""Portfolio state models."""

from pydantic import BaseModel, Field


class HoldingLine(BaseModel):
    """One holding priced at the moment the snapshot was taken."""

    symbol: str
    name: str
    shares: int = Field(gt=0)
    price: float

    @property
    def value(self) -> float:
        return self.shares * self.price


class PortfolioSnapshot(BaseModel):
    """Cash and priced holdings at a point in the session.

    Produced by ``Portfolio.snapshot`` and consumed by the renderers, so
    formatting never touches the live portfolio.
    """

    cash: float = Field(ge=0)
    holdings: list[HoldingLine] = []

    @property
    def positions(self) -> dict[str, int]:
        """Symbol -> share count."""
        return {line.symbol: line.shares for line in self.holdings}

    @property
    def holdings_value(self) -> float:
        return sum(line.value for line in self.holdings)

    @property
    def total_value(self) -> float:
        return self.cash + self.holdings_value
