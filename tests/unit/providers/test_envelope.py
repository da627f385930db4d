"""Unit tests for the two-stage envelope decoder.

This module tests decoding of the provider's double-encoded response,
including strict failure on malformed layers.
"""
import json
import pytest

from options_viewer.providers import DecodeError
from options_viewer.providers.envelope import (
    decode,
    decode_envelope,
    decode_payload,
    try_decode
)
from tests.conftest import create_contract_dict, create_envelope


# ============================================================================
# Tests for decode_envelope (stage 1)
# ============================================================================

@pytest.mark.unit
class TestDecodeEnvelope:
    """Test the outer envelope layer."""

    def test_valid_envelope(self):
        """✅ Outer layer → req_id and still-encoded payload."""
        envelope = decode_envelope('{"req_id": "abc", "response": "{\\"option_contracts\\": []}"}')

        assert envelope.req_id == "abc"
        assert envelope.response == '{"option_contracts": []}'

    def test_accepts_bytes(self):
        """✅ Raw bytes body."""
        envelope = decode_envelope(b'{"req_id": "1", "response": "{}"}')
        assert envelope.response == "{}"

    def test_invalid_json(self):
        """❌ Outer body not JSON → DecodeError."""
        with pytest.raises(DecodeError) as exc:
            decode_envelope("not json")
        assert exc.value.stage == "envelope"

    def test_not_an_object(self):
        """❌ Outer body is a list → DecodeError."""
        with pytest.raises(DecodeError):
            decode_envelope("[1, 2]")

    def test_response_already_structured(self):
        """❌ response is an object, not an encoded string → DecodeError."""
        with pytest.raises(DecodeError):
            decode_envelope('{"req_id": "1", "response": {"option_contracts": []}}')

    def test_missing_response(self):
        """❌ No response field → DecodeError."""
        with pytest.raises(DecodeError):
            decode_envelope('{"req_id": "1"}')


# ============================================================================
# Tests for decode_payload (stage 2)
# ============================================================================

@pytest.mark.unit
class TestDecodePayload:
    """Test the inner payload layer."""

    def test_valid_payload(self):
        """✅ Inner document → OptionContract list."""
        payload = json.dumps({"option_contracts": [create_contract_dict(strike_price="155")]})

        contracts = decode_payload(payload)

        assert len(contracts) == 1
        assert contracts[0].strike_price == "155"
        assert contracts[0].underlying_price == 140.0

    def test_empty_list(self):
        """✅ Empty option_contracts → []."""
        assert decode_payload('{"option_contracts": []}') == []

    def test_invalid_json(self):
        """❌ Payload not JSON → DecodeError at payload stage."""
        with pytest.raises(DecodeError) as exc:
            decode_payload("{option_contracts: oops")
        assert exc.value.stage == "payload"

    def test_missing_option_contracts(self):
        """❌ Payload without option_contracts → DecodeError, not []."""
        with pytest.raises(DecodeError):
            decode_payload('{"results": []}')

    def test_option_contracts_not_list(self):
        """❌ option_contracts is an object → DecodeError."""
        with pytest.raises(DecodeError):
            decode_payload('{"option_contracts": {"a": 1}}')

    def test_element_not_object(self):
        """❌ A contract entry is a string → DecodeError."""
        with pytest.raises(DecodeError):
            decode_payload('{"option_contracts": ["AAPL"]}')


# ============================================================================
# Tests for decode / try_decode
# ============================================================================

@pytest.mark.unit
class TestDecode:
    """Test the full two-stage decode."""

    def test_preserves_order(self):
        """✅ Contracts returned exactly as encoded, in order."""
        raw = [create_contract_dict(strike_price=s) for s in ("160", "120", "140")]

        contracts = decode(create_envelope(raw))

        assert [c.strike_price for c in contracts] == ["160", "120", "140"]
        assert [c.raw for c in contracts] == raw

    def test_single_decode_is_not_enough(self):
        """❌ Payload encoded once more than expected → DecodeError."""
        inner = json.dumps(json.dumps({"option_contracts": []}))
        body = json.dumps({"req_id": "1", "response": inner})

        with pytest.raises(DecodeError):
            decode(body)

    def test_invalid_inner_json(self):
        """❌ response not valid JSON → DecodeError."""
        with pytest.raises(DecodeError):
            decode('{"req_id": "1", "response": "not json"}')

    def test_try_decode_success(self, sample_envelope):
        """✅ Tagged result on success."""
        result = try_decode(sample_envelope)

        assert result.ok
        assert result.error is None
        assert len(result.contracts) == 2

    def test_try_decode_failure(self):
        """✅ Tagged result on failure carries the DecodeError."""
        result = try_decode('{"req_id": "1", "response": "{}"}')

        assert not result.ok
        assert isinstance(result.error, DecodeError)
        assert result.contracts == []
