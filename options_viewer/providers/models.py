"""Data models for option contracts and the provider response envelope."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


CONTRACT_TYPES = ("call", "put")


@dataclass
class Greeks:
    """Option price sensitivities as reported by the provider."""
    delta: Optional[float] = None
    gamma: Optional[float] = None
    theta: Optional[float] = None
    vega: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Greeks"]:
        """Build Greeks from the provider object; None when the object is absent."""
        if not isinstance(data, dict):
            return None
        return cls(
            delta=data.get("delta"),
            gamma=data.get("gamma"),
            theta=data.get("theta"),
            vega=data.get("vega")
        )

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {
            "delta": self.delta,
            "gamma": self.gamma,
            "theta": self.theta,
            "vega": self.vega
        }


@dataclass
class OptionContract:
    """Individual option contract exactly as the provider sent it.

    Numeric fields stay in their provider encoding (mostly strings); all
    coercion happens in the metrics layer.
    """
    contract_type: Optional[str]
    expiration_date: Optional[str]
    implied_volatility: Optional[str]
    open_interest: Optional[str]
    strike_price: Optional[str]
    ticker: Optional[str]
    underlying_price: Optional[Any]
    day_change: Optional[str]
    day_change_percent: Optional[str]
    day_volume: Optional[str]
    greeks: Optional[Greeks] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionContract":
        """Map a provider contract object onto the dataclass."""
        quote = data.get("last_quote")
        if not isinstance(quote, dict):
            quote = {}

        return cls(
            contract_type=data.get("contract_type"),
            expiration_date=data.get("expiration_date"),
            implied_volatility=data.get("implied_volatility"),
            open_interest=data.get("open_interest"),
            strike_price=data.get("strike_price"),
            ticker=data.get("ticker"),
            underlying_price=quote.get("underlying_price"),
            day_change=data.get("day_change"),
            day_change_percent=data.get("day_change_percent"),
            day_volume=data.get("day_volume"),
            greeks=Greeks.from_dict(data.get("greeks")),
            raw=data
        )


class MoneynessLabel(str, Enum):
    """Where the strike sits relative to the underlying price."""
    ABOVE_UNDERLYING = "above current price"
    BELOW_UNDERLYING = "below current price"


@dataclass
class AnnotatedContract:
    """Option contract plus its derived display metrics."""
    contract: OptionContract
    strike: float
    moneyness_percent: float
    moneyness_label: MoneynessLabel
    formatted_expiration: Optional[str]
    greeks_display: Dict[str, Optional[str]]


@dataclass
class ResponseEnvelope:
    """Outer provider wrapper; ``response`` holds a second JSON document."""
    req_id: Optional[str]
    response: str


@dataclass
class DecodeResult:
    """Tagged outcome of a two-stage envelope decode."""
    contracts: List[OptionContract] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
