"""Shared proxy gateway instance for the API process."""
import asyncio
from options_viewer.services.gateway import ProxyGateway


# Global gateway (owns the upstream HTTP connection pool)
_gateway: ProxyGateway | None = None
_gateway_lock = asyncio.Lock()


async def get_gateway() -> ProxyGateway:
    """Get the process-wide gateway, creating it on first use."""
    global _gateway

    # Fast path: gateway already initialized
    if _gateway is not None:
        return _gateway

    async with _gateway_lock:
        # Double-check after acquiring lock
        if _gateway is None:
            _gateway = ProxyGateway()
    return _gateway


async def close_gateway():
    """Close the gateway's upstream client."""
    global _gateway
    async with _gateway_lock:
        if _gateway:
            await _gateway.close()
            _gateway = None
