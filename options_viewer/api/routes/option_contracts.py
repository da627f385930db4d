"""Option contracts proxy route."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from typing import Optional

from options_viewer.core.gateway import get_gateway
from options_viewer.services.gateway import ProxyGateway

router = APIRouter(prefix="/api/option-contracts", tags=["option-contracts"])

# Statuses that must be sent without a body
NO_BODY_STATUSES = (204, 304)


@router.get("")
async def get_option_contracts(
    ticker_symbol: Optional[str] = None,
    limit: Optional[str] = None,
    days_forward: Optional[str] = None,
    contract_type: Optional[str] = None,
    gateway: ProxyGateway = Depends(get_gateway)
):
    """
    Relay an option contracts request to the upstream provider.

    limit and days_forward are forwarded as given; the upstream decides
    whether they are valid. The upstream status code and JSON body are
    returned unchanged, except:
    - 400 when ticker_symbol is missing or contract_type is invalid
    - 500 when the upstream call itself fails
    """
    status_code, body = await gateway.fetch_contracts(
        ticker_symbol,
        limit=limit,
        days_forward=days_forward,
        contract_type=contract_type
    )
    if status_code < 200 or status_code in NO_BODY_STATUSES:
        return Response(status_code=status_code)
    return JSONResponse(content=body, status_code=status_code)
