"""Shared pytest fixtures and factories for option contract tests."""
import json
import pytest
import httpx
from typing import Any, Callable, Dict, List, Optional

from options_viewer.providers.models import OptionContract


def create_contract_dict(
    strike_price: Any = "150",
    underlying_price: Any = 140.0,
    contract_type: str = "call",
    expiration_date: str = "2025-03-14",
    ticker: Optional[str] = None,
    greeks: Optional[Dict[str, float]] = None,
    include_greeks: bool = True
) -> Dict[str, Any]:
    """Factory for a provider contract object (snake_case, string-encoded)."""
    if ticker is None:
        flag = "C" if contract_type == "call" else "P"
        ticker = f"O:AAPL250314{flag}00{strike_price}000"

    data = {
        "contract_type": contract_type,
        "expiration_date": expiration_date,
        "implied_volatility": "0.2345",
        "open_interest": "1200",
        "strike_price": strike_price,
        "ticker": ticker,
        "last_quote": {"underlying_price": underlying_price},
        "day_change": "0.25",
        "day_change_percent": "1.2%",
        "day_volume": "350",
    }
    if include_greeks:
        data["greeks"] = greeks or {
            "delta": 0.52,
            "gamma": 0.0123,
            "theta": -0.0456,
            "vega": 0.1789
        }
    return data


def create_contract(**kwargs) -> OptionContract:
    """Factory for an OptionContract built from a provider object."""
    return OptionContract.from_dict(create_contract_dict(**kwargs))


def create_envelope(contracts: List[Dict[str, Any]], req_id: str = "req-1") -> str:
    """Double-encode contracts the way the upstream provider does."""
    inner = json.dumps({"option_contracts": contracts})
    return json.dumps({"req_id": req_id, "response": inner})


def create_envelope_body(contracts: List[Dict[str, Any]], req_id: str = "req-1") -> Dict[str, Any]:
    """Outer envelope as a parsed object, as the gateway relays it."""
    return json.loads(create_envelope(contracts, req_id))


def create_contract_list(count: int, contract_type: str = "call") -> List[Dict[str, Any]]:
    """Create ``count`` contracts with ascending strikes."""
    return [
        create_contract_dict(strike_price=str(130 + 5 * i), contract_type=contract_type)
        for i in range(count)
    ]


def create_stub_upstream(
    handler: Callable[[httpx.Request], httpx.Response]
) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered in-process by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def sample_contract_dict():
    """Call 10 above a 140 underlying."""
    return create_contract_dict()


@pytest.fixture
def sample_contract():
    return create_contract()


@pytest.fixture
def sample_envelope():
    """Envelope with two calls in a known order."""
    return create_envelope([
        create_contract_dict(strike_price="150"),
        create_contract_dict(strike_price="130"),
    ])
