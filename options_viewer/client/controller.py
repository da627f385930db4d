"""Selection state machine driving the call/put fetch cycle for a ticker."""
import logging
from typing import Callable, List, Optional

from options_viewer.client.contracts_client import ContractsClient
from options_viewer.client.state import FETCH_ERROR_MESSAGE, SelectionState, SelectionStatus
from options_viewer.core.config import settings
from options_viewer.services.metrics import annotate_all


logger = logging.getLogger(__name__)

StateListener = Callable[[SelectionState], None]


class SelectionController:
    """
    Owns the SelectionState for one viewer session.

    Transitions:
        any --select()--> LOADING --both fetches ok--> LOADED
                                  --either fails----> ERROR

    Each select() takes a generation number. A cycle that settles after a
    newer select() has started is discarded, so a slow response for an
    abandoned ticker never overwrites the current one.
    """

    def __init__(
        self,
        client: Optional[ContractsClient] = None,
        default_ticker: Optional[str] = None
    ):
        self.client = client or ContractsClient()
        self.default_ticker = default_ticker or settings.default_ticker
        self._state = SelectionState()
        self._generation = 0
        self._activated = False
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> SelectionState:
        """Read-only snapshot of the current state."""
        return self._state.snapshot()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a callback invoked with a snapshot after every transition.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        snapshot = self._state.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    async def activate(self) -> SelectionState:
        """Select the default ticker on first activation only."""
        if self._activated:
            return self.state
        self._activated = True
        logger.info(f"Activating viewer with default ticker {self.default_ticker}")
        return await self.select(self.default_ticker)

    async def select(self, ticker: str) -> SelectionState:
        """
        Load call and put contracts for a ticker.

        Previous lists stay in place while loading. Calls are fetched first
        and puts only after the call fetch has settled.

        Returns:
            Snapshot of the state once this cycle settles
        """
        self._generation += 1
        generation = self._generation

        ticker = ticker.strip().upper()
        self._state.ticker = ticker
        self._state.status = SelectionStatus.LOADING
        self._state.error_message = None
        self._notify()

        try:
            call_contracts = annotate_all(await self.client.fetch_contracts(ticker, "call"))
            put_contracts = annotate_all(await self.client.fetch_contracts(ticker, "put"))
        except Exception as e:
            if generation != self._generation:
                logger.info(f"Discarding stale failure for {ticker}: {e}")
                return self.state
            logger.error(f"Failed to fetch option contracts for {ticker}: {e}", exc_info=True)
            self._state.status = SelectionStatus.ERROR
            self._state.error_message = FETCH_ERROR_MESSAGE
            self._state.call_contracts = []
            self._state.put_contracts = []
            self._notify()
            return self.state

        if generation != self._generation:
            logger.info(f"Discarding stale results for {ticker}")
            return self.state

        self._state.call_contracts = call_contracts
        self._state.put_contracts = put_contracts
        self._state.status = SelectionStatus.LOADED
        logger.info(
            f"Loaded {len(call_contracts)} call and {len(put_contracts)} put contracts for {ticker}"
        )
        self._notify()
        return self.state

    async def close(self):
        await self.client.close()
