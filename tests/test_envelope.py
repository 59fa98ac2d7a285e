from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from postgrid_client.constants import ResponseStatus
from postgrid_client.envelope import Envelope, EnvelopeCodec
from postgrid_client.errors import (
    GatewayTimeoutError,
    MalformedEnvelopeError,
    MalformedPayloadError,
    ServiceError,
)
from postgrid_client.models import VerifiedAddress

from conftest import make_response, success_envelope


@pytest.fixture
def codec():
    return EnvelopeCodec()


def test_success_decodes_into_target(codec):
    resp = make_response(200, {"status": "success", "message": "ok", "data": {"line1": "X"}})

    result = codec.decode(resp, VerifiedAddress)

    assert isinstance(result, VerifiedAddress)
    assert result.line1 == "X"


def test_success_without_target_returns_none(codec):
    resp = make_response(200, success_envelope({"anything": 1}))

    assert codec.decode(resp) is None


def test_service_error_carries_message(codec):
    resp = make_response(500, {"status": "error", "message": "bad address"})

    with pytest.raises(ServiceError) as excinfo:
        codec.decode(resp, VerifiedAddress)

    assert excinfo.value.message == "bad address"
    assert excinfo.value.status_code == 500


def test_service_error_ignores_data(codec):
    resp = make_response(200, {"status": "error", "message": "nope", "data": {"line1": 12}})

    with pytest.raises(ServiceError):
        codec.decode(resp, VerifiedAddress)


@pytest.mark.parametrize("body", [None, "<html>origin timed out</html>", '{"status": "success"}'])
def test_gateway_timeout_checked_before_body(codec, body):
    resp = make_response(524, body)

    with pytest.raises(GatewayTimeoutError) as excinfo:
        codec.decode(resp, VerifiedAddress)

    assert excinfo.value.status_code == 524


def test_gateway_timeout_never_parses_json(codec):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = 524
    resp.url = "https://api.test/v1/addver/verifications"

    with pytest.raises(GatewayTimeoutError):
        codec.decode(resp)

    resp.json.assert_not_called()


def test_non_json_body_keeps_raw_text(codec):
    resp = make_response(502, "<html>Bad Gateway</html>")

    with pytest.raises(MalformedEnvelopeError) as excinfo:
        codec.decode(resp, VerifiedAddress)

    err = excinfo.value
    assert err.raw_body == "<html>Bad Gateway</html>"
    assert err.status_code == 502
    assert "Bad Gateway" in str(err)


@pytest.mark.parametrize("body", [
    [1, 2, 3],
    {"message": "missing status"},
    {"status": "pending", "message": "?"},
    "just a string",
])
def test_wrong_envelope_shape(codec, body):
    resp = make_response(200, body)

    with pytest.raises(MalformedEnvelopeError) as excinfo:
        codec.decode(resp, VerifiedAddress)

    assert excinfo.value.raw_body is not None


def test_payload_mismatch_is_distinct_from_envelope_error(codec):
    resp = make_response(200, success_envelope({"line1": ["not", "a", "string"]}))

    with pytest.raises(MalformedPayloadError) as excinfo:
        codec.decode(resp, VerifiedAddress)

    err = excinfo.value
    assert not isinstance(err, MalformedEnvelopeError)
    assert err.target == "VerifiedAddress"
    assert err.errors
    assert "line1" in err.summary()


def test_null_data_with_target_is_payload_error(codec):
    resp = make_response(200, {"status": "success", "message": "ok"})

    with pytest.raises(MalformedPayloadError):
        codec.decode(resp, VerifiedAddress)


def test_decode_into_plain_types(codec):
    assert codec.decode(make_response(200, success_envelope([1, 2])), list[int]) == [1, 2]

    with pytest.raises(MalformedPayloadError):
        codec.decode(make_response(200, success_envelope(["x"])), list[int])


def test_parse_envelope_defaults():
    envelope = EnvelopeCodec().parse_envelope(make_response(200, {"status": "success"}))

    assert envelope == Envelope(status=ResponseStatus.SUCCESS, message="", data=None)
    assert envelope.is_success()


def test_null_message_is_still_a_service_error(codec):
    resp = make_response(500, {"status": "error", "message": None, "data": None})

    with pytest.raises(ServiceError) as excinfo:
        codec.decode(resp)

    assert excinfo.value.message == ""
    assert excinfo.value.status_code == 500


def test_nulls_in_data_decode(codec):
    data = {"line1": "X", "line2": None, "errors": None, "details": {"streetNumber": 12}}

    result = codec.decode(make_response(200, success_envelope(data)), VerifiedAddress)

    assert result.line2 == ""
    assert result.errors == {}
    assert result.details.street_number == "12"
