"""Client package initialization."""
from options_viewer.client.contracts_client import ContractsClient
from options_viewer.client.controller import SelectionController
from options_viewer.client.state import SelectionState, SelectionStatus, FETCH_ERROR_MESSAGE

__all__ = [
    "ContractsClient",
    "SelectionController",
    "SelectionState",
    "SelectionStatus",
    "FETCH_ERROR_MESSAGE"
]
