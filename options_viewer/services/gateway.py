"""Proxy gateway between the viewer and the upstream options provider."""
import logging
from typing import Any, Optional, Tuple, Union

from options_viewer.core.config import settings
from options_viewer.providers import (
    InvalidParameterError,
    MissingParameterError,
    UpstreamTransportError
)
from options_viewer.providers.models import CONTRACT_TYPES
from options_viewer.providers.upstream import UpstreamClient, build_upstream_headers


logger = logging.getLogger(__name__)

TICKER_REQUIRED_BODY = {"error": "ticker_symbol is required"}
UPSTREAM_FAILURE_BODY = {"error": "Failed to fetch data from external API"}


def validate_request(ticker_symbol: Optional[str], contract_type: str) -> str:
    """
    Validate inbound parameters before anything is sent upstream.

    Returns:
        The ticker symbol, stripped of surrounding whitespace

    Raises:
        MissingParameterError: If ticker_symbol is missing or blank
        InvalidParameterError: If contract_type is not call or put
    """
    if ticker_symbol is None or not ticker_symbol.strip():
        raise MissingParameterError("ticker_symbol")

    if contract_type not in CONTRACT_TYPES:
        raise InvalidParameterError(
            f"contract_type must be one of: {', '.join(CONTRACT_TYPES)}"
        )

    return ticker_symbol.strip()


class ProxyGateway:
    """Validates requests and relays them to the upstream provider."""

    def __init__(self, upstream: Optional[UpstreamClient] = None):
        self.upstream = upstream or UpstreamClient()

    async def fetch_contracts(
        self,
        ticker_symbol: Optional[str],
        limit: Optional[Union[int, str]] = None,
        days_forward: Optional[Union[int, str]] = None,
        contract_type: Optional[str] = None
    ) -> Tuple[int, Any]:
        """
        Relay one option contracts request.

        Args:
            ticker_symbol: Underlying ticker (required)
            limit: Max contracts to return (default 20), forwarded as given
            days_forward: Expiration window in days (default 14), forwarded as given
            contract_type: "call" or "put" (default "call")

        Returns:
            (status_code, body). Upstream status and body are passed through
            unchanged; 400 and 500 are only produced here for invalid input
            and failed upstream calls.
        """
        if limit is None:
            limit = settings.default_limit
        if days_forward is None:
            days_forward = settings.default_days_forward
        if contract_type is None:
            contract_type = "call"

        try:
            ticker_symbol = validate_request(ticker_symbol, contract_type)
        except MissingParameterError:
            logger.info("Rejected option contracts request without ticker_symbol")
            return 400, dict(TICKER_REQUIRED_BODY)
        except InvalidParameterError as e:
            logger.info(f"Rejected option contracts request: {e}")
            return 400, {"error": str(e)}

        # Credential is read per request and never logged
        headers = build_upstream_headers(
            ticker_symbol=ticker_symbol,
            api_key=settings.polygon_api_key,
            limit=limit,
            days_forward=days_forward,
            contract_type=contract_type
        )

        logger.info(
            f"Fetching {contract_type} contracts for {ticker_symbol} "
            f"(limit={limit}, days_forward={days_forward})"
        )

        try:
            status_code, body = await self.upstream.fetch(headers)
        except UpstreamTransportError as e:
            logger.error(f"Error fetching from external API for {ticker_symbol}: {e}", exc_info=True)
            return 500, dict(UPSTREAM_FAILURE_BODY)
        except Exception as e:
            logger.error(f"Unexpected error fetching from external API for {ticker_symbol}: {e}", exc_info=True)
            return 500, dict(UPSTREAM_FAILURE_BODY)

        logger.info(f"Upstream responded {status_code} for {ticker_symbol} {contract_type}")
        return status_code, body

    async def close(self):
        """Close the upstream HTTP client."""
        await self.upstream.close()
