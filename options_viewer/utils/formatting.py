"""Text rendering for option contract cards and the selection view."""
import math
from typing import List

from options_viewer.client.state import SelectionState, SelectionStatus
from options_viewer.providers.models import AnnotatedContract


LOADING_MESSAGE = "Loading option contracts..."


def format_strike(strike: float) -> str:
    """Format a strike as "$150.00", or "N/A" when unknown."""
    if math.isnan(strike):
        return "N/A"
    return f"${strike:.2f}"


def format_moneyness(percent: float) -> str:
    """Format signed moneyness, e.g. "+7.14%" or "-7.14%"."""
    if math.isnan(percent):
        return "N/A"
    sign = "+" if percent > 0 else ""
    return f"{sign}{percent:.2f}%"


def format_day_change(day_change, day_change_percent) -> str:
    return f"{_text(day_change)} ({_text(day_change_percent)})"


def _text(value) -> str:
    return "N/A" if value is None else str(value)


def format_contract_card(annotated: AnnotatedContract) -> str:
    """
    Format one annotated contract for display.

    Args:
        annotated: Contract with derived metrics

    Returns:
        Multi-line card text
    """
    contract = annotated.contract
    greeks = annotated.greeks_display

    greek_line = " | ".join(
        f"{name.capitalize()}: {greeks[name] if greeks[name] is not None else '-'}"
        for name in ("delta", "gamma", "theta", "vega")
    )

    lines = [
        f"{format_strike(annotated.strike)}  "
        f"{format_moneyness(annotated.moneyness_percent)} {annotated.moneyness_label.value}",
        f"Implied Volatility: {_text(contract.implied_volatility)}",
        f"Open Interest: {_text(contract.open_interest)}",
        f"Day Change: {format_day_change(contract.day_change, contract.day_change_percent)}",
        f"Day Volume: {_text(contract.day_volume)}",
        greek_line,
        f"{annotated.formatted_expiration or 'N/A'} contract expires",
    ]
    return "\n".join(lines)


def format_contract_list(contracts: List[AnnotatedContract], contract_type: str) -> str:
    """Format a titled list of cards, with a placeholder when empty."""
    title = f"{contract_type.capitalize()} Options"
    if not contracts:
        return f"{title}\n\nNo {contract_type} options available for this stock."

    cards = "\n\n".join(format_contract_card(c) for c in contracts)
    return f"{title}\n\n{cards}"


def format_selection_state(state: SelectionState) -> str:
    """Format the whole viewer for the current selection state."""
    header = f"Option Contracts: {state.ticker}" if state.ticker else "Option Contracts"
    parts = [header]

    if state.status == SelectionStatus.ERROR and state.error_message:
        parts.append(state.error_message)

    if state.status == SelectionStatus.LOADING:
        parts.append(LOADING_MESSAGE)
    else:
        parts.append(format_contract_list(state.call_contracts, "call"))
        parts.append(format_contract_list(state.put_contracts, "put"))

    return "\n\n".join(parts)
