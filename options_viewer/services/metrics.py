"""Derived display metrics for option contracts."""
import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from options_viewer.providers.models import (
    AnnotatedContract,
    Greeks,
    MoneynessLabel,
    OptionContract
)


# Fixed English abbreviations; strftime('%b') follows the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
)

GREEK_NAMES = ("delta", "gamma", "theta", "vega")


def to_float(value: Any) -> float:
    """Coerce a provider value to float, returning NaN when it is not numeric."""
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def calculate_moneyness(strike: float, underlying: float) -> float:
    """
    Percentage distance of the strike from the underlying price.

    Returns:
        (strike - underlying) / underlying * 100, sign preserved, or NaN when
        either input is NaN or the underlying is zero
    """
    if math.isnan(strike) or math.isnan(underlying) or underlying == 0:
        return math.nan
    return (strike - underlying) / underlying * 100


def moneyness_label(strike: float, underlying: float) -> MoneynessLabel:
    """Above when the strike is strictly greater; ties and unknowns are below."""
    if calculate_moneyness(strike, underlying) > 0:
        return MoneynessLabel.ABOVE_UNDERLYING
    return MoneynessLabel.BELOW_UNDERLYING


def parse_expiration(value: Optional[str]) -> Optional[date]:
    """Parse the calendar date from an ISO string without timezone conversion."""
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def format_expiration(value: Optional[str]) -> Optional[str]:
    """Render an ISO expiration date as e.g. "Mar 14"."""
    expiry = parse_expiration(value)
    if expiry is None:
        return None
    return f"{MONTH_ABBREVIATIONS[expiry.month - 1]} {expiry.day}"


def format_greek(value: Any) -> Optional[str]:
    """Render a single greek with 4 decimal places."""
    number = to_float(value)
    if math.isnan(number):
        return None
    return f"{number:.4f}"


def format_greeks(greeks: Optional[Greeks]) -> Dict[str, Optional[str]]:
    if greeks is None:
        return {name: None for name in GREEK_NAMES}
    values = greeks.as_dict()
    return {name: format_greek(values[name]) for name in GREEK_NAMES}


def annotate(contract: OptionContract) -> AnnotatedContract:
    """
    Attach moneyness, expiration and greek display values to a contract.

    Never raises: unusable strike or underlying values yield NaN moneyness,
    so one malformed contract cannot break rendering of the others.
    """
    strike = to_float(contract.strike_price)
    underlying = to_float(contract.underlying_price)

    return AnnotatedContract(
        contract=contract,
        strike=strike,
        moneyness_percent=calculate_moneyness(strike, underlying),
        moneyness_label=moneyness_label(strike, underlying),
        formatted_expiration=format_expiration(contract.expiration_date),
        greeks_display=format_greeks(contract.greeks)
    )


def annotate_all(contracts: List[OptionContract]) -> List[AnnotatedContract]:
    """Annotate contracts preserving upstream order."""
    return [annotate(contract) for contract in contracts]
