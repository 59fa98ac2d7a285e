"""
Decoding of the PostGrid response envelope.

Every endpoint answers with the same wrapper::

    {"status": "success" | "error", "message": "...", "data": {...}}

``EnvelopeCodec.decode`` turns an HTTP response into either the decoded
``data`` or one of the errors from ``errors.py``. The checks run in a
fixed order:

1. gateway timeout status (524), before the body is touched
2. envelope shape
3. service-reported error
4. payload shape (only when a target type is requested)
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

from .constants import HTTP_STATUS_GATEWAY_TIMEOUT, ResponseStatus
from .errors import (
    GatewayTimeoutError,
    MalformedEnvelopeError,
    MalformedPayloadError,
    ServiceError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Envelope(BaseModel):
    """Generic response wrapper. ``data`` is only meaningful on success."""
    status: ResponseStatus
    message: str = ""
    data: Any = None

    @field_validator("message", mode="before")
    @classmethod
    def _null_message(cls, value: Any) -> Any:
        return "" if value is None else value

    def is_success(self) -> bool:
        return self.status == ResponseStatus.SUCCESS


def _body_text(response: requests.Response) -> Optional[str]:
    try:
        return response.text
    except (requests.RequestException, UnicodeDecodeError) as e:
        logger.debug(f"Could not read response body as text: {e}")
        return None


class EnvelopeCodec:
    """
    Decoder for response envelopes.

    Stateless; one instance can be shared across threads.
    """

    def __init__(self, timeout_status: int = HTTP_STATUS_GATEWAY_TIMEOUT):
        self.timeout_status = timeout_status

    def parse_envelope(self, response: requests.Response) -> Envelope:
        """
        Parse the response body into an Envelope.

        Raises:
            GatewayTimeoutError: status code is the gateway timeout code
            MalformedEnvelopeError: body is not a valid envelope
        """
        status_code = response.status_code
        if status_code == self.timeout_status:
            logger.warning(f"PostGrid gateway timeout ({status_code}) for {response.url}")
            raise GatewayTimeoutError(status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raw = _body_text(response)
            logger.warning(f"Non-JSON response from PostGrid (status {status_code}): {raw!r:.200}")
            raise MalformedEnvelopeError(status_code, raw, reason=str(e)) from e

        try:
            return Envelope.model_validate(payload)
        except ValidationError as e:
            raw = _body_text(response)
            logger.warning(f"Unexpected envelope shape from PostGrid (status {status_code}): {raw!r:.200}")
            raise MalformedEnvelopeError(status_code, raw, reason=str(e)) from e

    def decode(self, response: requests.Response, target: Optional[Type[T]] = None) -> Optional[T]:
        """
        Decode a response into ``target``.

        Args:
            response: HTTP response from the transport
            target: Type to decode ``data`` into, or None to only check
                that the call succeeded

        Returns:
            Decoded ``data`` as ``target``, or None when no target is given

        Raises:
            GatewayTimeoutError, MalformedEnvelopeError, ServiceError,
            MalformedPayloadError
        """
        envelope = self.parse_envelope(response)

        if not envelope.is_success():
            logger.warning(
                f"PostGrid error (status {response.status_code}): {envelope.message}"
            )
            raise ServiceError(envelope.message, status_code=response.status_code)

        if target is None:
            return None

        return self.decode_data(envelope.data, target)

    def decode_data(self, data: Any, target: Type[T]) -> T:
        """Validate the ``data`` part of a successful envelope into ``target``."""
        name = getattr(target, "__name__", repr(target))
        try:
            return TypeAdapter(target).validate_python(data)
        except ValidationError as e:
            logger.warning(f"PostGrid data does not match {name}: {e.error_count()} errors")
            raise MalformedPayloadError(name, e.errors(), original=e) from e
