"""
Currency and local price models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


@dataclass(frozen=True)
class FxRates:
    """USD-based exchange-rate snapshot (1 USD -> rate units of currency)."""

    date: str
    rates: Dict[str, float] = field(compare=False)
    base: str = "USD"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the cache envelope."""
        return {"base": self.base, "date": self.date, "rates": dict(self.rates)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FxRates":
        """Rebuild from a cached payload."""
        rates = data["rates"]
        if not isinstance(rates, dict):
            raise ValueError("rates must be a mapping")
        return cls(
            date=str(data["date"]),
            rates={str(code): float(rate) for code, rate in rates.items()},
            base=str(data.get("base", "USD")),
        )

    def validate(self) -> bool:
        """Validate FX rates data."""
        if self.base != "USD":
            raise ValueError("FX rates must be USD based")

        if not self.date:
            raise ValueError("FX rates date cannot be empty")

        for code, rate in self.rates.items():
            if not isinstance(rate, (int, float)) or rate < 0:
                raise ValueError(f"Invalid rate for {code}: {rate}")

        return True


@dataclass(frozen=True)
class SteamPrice:
    """Exact storefront price for one app in one region."""

    amount: float
    currency: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the cache envelope."""
        return {"amount": self.amount, "currency": self.currency}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SteamPrice":
        """Rebuild from a cached payload."""
        return cls(amount=float(data["amount"]), currency=str(data["currency"]))


class PriceKind(Enum):
    """Whether a local price is a storefront quote or an FX estimate."""

    EXACT = "exact"
    APPROX = "approx"


@dataclass(frozen=True)
class LocalPrice:
    """Formatted local-currency price with its provenance."""

    text: str
    kind: PriceKind

    def __str__(self) -> str:
        if self.kind is PriceKind.APPROX:
            return f"≈ {self.text}"
        return self.text
