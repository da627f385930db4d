"""Utilities package initialization."""
from options_viewer.utils.formatting import (
    format_contract_card,
    format_contract_list,
    format_selection_state
)

__all__ = [
    "format_contract_card",
    "format_contract_list",
    "format_selection_state"
]
