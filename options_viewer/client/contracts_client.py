"""HTTP client the selection controller uses to reach the proxy gateway."""
import httpx
import logging
from typing import List, Optional

from options_viewer.core.config import settings
from options_viewer.providers import UpstreamBusinessError, UpstreamTransportError
from options_viewer.providers import envelope
from options_viewer.providers.models import OptionContract


logger = logging.getLogger(__name__)

OPTION_CONTRACTS_PATH = "/api/option-contracts"


class ContractsClient:
    """Fetches and decodes one contract list per call from the gateway."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        limit: Optional[int] = None,
        days_forward: Optional[int] = None
    ):
        self.limit = settings.default_limit if limit is None else limit
        self.days_forward = settings.default_days_forward if days_forward is None else days_forward
        self.client = client or httpx.AsyncClient(
            base_url=base_url or settings.proxy_base_url,
            timeout=settings.upstream_timeout_seconds
        )

    async def fetch_contracts(self, ticker: str, contract_type: str) -> List[OptionContract]:
        """
        Fetch and decode option contracts of one type.

        Raises:
            UpstreamTransportError: If the gateway cannot be reached
            UpstreamBusinessError: On any non-2xx status
            DecodeError: If the envelope cannot be decoded
        """
        params = {
            "ticker_symbol": ticker,
            "limit": str(self.limit),
            "days_forward": str(self.days_forward),
            "contract_type": contract_type
        }

        try:
            response = await self.client.get(
                OPTION_CONTRACTS_PATH,
                params=params,
                headers={"Content-Type": "application/json"}
            )
        except httpx.HTTPError as e:
            raise UpstreamTransportError(f"Gateway request failed: {str(e)}") from e

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise UpstreamBusinessError(response.status_code, body)

        contracts = envelope.decode(response.content)
        logger.debug(f"Decoded {len(contracts)} {contract_type} contracts for {ticker}")
        return contracts

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
