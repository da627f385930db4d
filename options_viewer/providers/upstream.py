"""HTTP client for the upstream options-data lambda."""
import httpx
import logging
from typing import Any, Dict, Optional, Tuple, Union
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)
from options_viewer.providers import UpstreamTransportError
from options_viewer.core.config import settings


logger = logging.getLogger(__name__)


def build_upstream_headers(
    ticker_symbol: str,
    api_key: Optional[str],
    limit: Union[int, str],
    days_forward: Union[int, str],
    contract_type: str
) -> Dict[str, str]:
    """
    Build the request headers the upstream lambda reads its parameters from.

    The lambda takes every query parameter, the API key included, as a
    request header rather than from the query string or body. Header names
    and string values must stay exactly as below.
    """
    return {
        "Content-Type": "application/json",
        "ticker_symbol": ticker_symbol,
        "api_key": api_key or "",
        "limit": str(limit),
        "days_forward": str(days_forward),
        "contract_type": contract_type,
    }


class UpstreamClient:
    """Relay to the single fixed upstream endpoint."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.url = url or settings.upstream_url
        self.max_attempts = max_attempts or settings.upstream_max_attempts
        self.client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.upstream_timeout_seconds
        )

    async def _make_request(self, headers: Dict[str, str]) -> httpx.Response:
        """Issue the GET, retrying transient transport failures.

        Retries only timeouts and connection errors, and only when
        ``max_attempts`` is above 1. HTTP error statuses are never retried;
        they belong to the caller.
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        ):
            with attempt:
                return await self.client.get(self.url, headers=headers)

    async def fetch(self, headers: Dict[str, str]) -> Tuple[int, Any]:
        """
        Fetch option contracts from the upstream.

        Args:
            headers: Output of build_upstream_headers

        Returns:
            (status_code, json_body) exactly as the upstream returned them

        Raises:
            UpstreamTransportError: On network failure, timeout or non-JSON body
        """
        try:
            response = await self._make_request(headers)
        except httpx.TimeoutException as e:
            raise UpstreamTransportError(f"Upstream timeout: {str(e)}") from e
        except httpx.HTTPError as e:
            raise UpstreamTransportError(f"Upstream connection error: {str(e)}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamTransportError(
                f"Upstream returned a non-JSON body (status {response.status_code})"
            ) from e

        return response.status_code, body

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
