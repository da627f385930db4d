"""Selection view state."""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from options_viewer.providers.models import AnnotatedContract


FETCH_ERROR_MESSAGE = "Failed to fetch option contracts. Please try again."


class SelectionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class SelectionState:
    """What the viewer shows for the current ticker selection."""
    ticker: Optional[str] = None
    status: SelectionStatus = SelectionStatus.IDLE
    call_contracts: List[AnnotatedContract] = field(default_factory=list)
    put_contracts: List[AnnotatedContract] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status == SelectionStatus.LOADING

    def snapshot(self) -> "SelectionState":
        """Copy handed to readers so only the controller mutates the live state."""
        return replace(
            self,
            call_contracts=list(self.call_contracts),
            put_contracts=list(self.put_contracts)
        )
