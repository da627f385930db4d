"""Two-stage decoder for the provider's double-encoded response envelope.

The provider serializes its own response to a string and wraps that string
in an outer JSON object::

    {"req_id": "...", "response": "{\\"option_contracts\\": [...]}"}

Decoding therefore takes exactly two strict ``json.loads`` passes.
"""
import json
import logging
from typing import Any, List, Union

from options_viewer.providers import DecodeError
from options_viewer.providers.models import DecodeResult, OptionContract, ResponseEnvelope


logger = logging.getLogger(__name__)


def decode_envelope(raw_body: Union[str, bytes]) -> ResponseEnvelope:
    """
    Decode the outer envelope layer.

    Args:
        raw_body: Body returned by the gateway

    Returns:
        ResponseEnvelope with the still-encoded inner document

    Raises:
        DecodeError: If the body is not a JSON object with a string ``response``
    """
    try:
        data = json.loads(raw_body)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Envelope is not valid JSON: {e}", stage="envelope")

    return envelope_from_object(data)


def envelope_from_object(data: Any) -> ResponseEnvelope:
    """Validate an already-parsed outer object as a ResponseEnvelope."""
    if not isinstance(data, dict):
        raise DecodeError("Envelope must be a JSON object", stage="envelope")

    payload = data.get("response")
    if not isinstance(payload, str):
        raise DecodeError("Envelope is missing the encoded 'response' document", stage="envelope")

    return ResponseEnvelope(req_id=data.get("req_id"), response=payload)


def decode_payload(payload: str) -> List[OptionContract]:
    """
    Decode the inner document carried in ``ResponseEnvelope.response``.

    Raises:
        DecodeError: If the payload is not JSON, is not an object, or has no
            ``option_contracts`` list
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Envelope payload is not valid JSON: {e}", stage="payload")

    if not isinstance(data, dict) or "option_contracts" not in data:
        raise DecodeError("Envelope payload has no 'option_contracts' field", stage="payload")

    items = data["option_contracts"]
    if not isinstance(items, list):
        raise DecodeError("'option_contracts' must be a list", stage="payload")

    contracts = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise DecodeError(f"Option contract at index {index} is not an object", stage="payload")
        contracts.append(OptionContract.from_dict(item))

    return contracts


def decode(raw_body: Union[str, bytes]) -> List[OptionContract]:
    """Decode both envelope layers and return contracts in upstream order."""
    envelope = decode_envelope(raw_body)
    return decode_payload(envelope.response)


def try_decode(raw_body: Union[str, bytes]) -> DecodeResult:
    """Decode both layers, returning a tagged result instead of raising."""
    try:
        return DecodeResult(contracts=decode(raw_body))
    except DecodeError as e:
        logger.debug(f"Envelope decode failed at {e.stage} stage: {e}")
        return DecodeResult(error=e)
