"""
PostGrid address verification client.

Wraps the Verify Address and Batch Verify Addresses endpoints of the
PostGrid Address Verification API.

Reference: https://avdocs.postgrid.com/
"""

from __future__ import annotations

import logging
from threading import Event
from typing import Any, Optional, Type, TypeVar, TYPE_CHECKING

import requests

from .constants import (
    API_KEY_HEADER,
    BATCH_VERIFY_PATH,
    DEFAULT_BURST,
    DEFAULT_QUERY_PARAMS,
    DEFAULT_RATE_LIMIT,
    VERIFY_PATH,
)
from .encoding import EncodingMode, JSONAddressEncoder, get_encoder
from .envelope import EnvelopeCodec
from .errors import CancelledError, TransportError
from .models import (
    BatchVerifyAddressesRequest,
    BatchVerifyAddressesResponse,
    VerifiedAddress,
    VerifyAddressRequest,
)
from .options import (
    ClientConfig,
    ClientOptions,
    Option,
    with_rate_limiter,
    with_timeout,
    with_verify_encoding,
)
from .throttling import TokenBucket

if TYPE_CHECKING:
    from .settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PostGridClient:
    """
    Client for the PostGrid Address Verification API.

    Safe to share between threads. The only shared mutable state is the
    rate limiter; HTTP calls themselves run concurrently.

    Usage:
        with PostGridClient(api_key, BASE_URL) as client:
            verified = client.verify_address(
                VerifyAddressRequest(Address.from_string("22-20 bay st, Toronto, ON"))
            )
    """

    def __init__(self, api_key: str, base_url: str, *options: Option):
        """
        Initialize the client.

        Args:
            api_key: PostGrid address verification API key
            base_url: Base URL for the API (see ``BASE_URL``)
            *options: Optional configuration entries, applied in order
        """
        opts = ClientOptions()
        for option in options:
            option(opts)

        owns_session = opts.session is None
        self.config = ClientConfig(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            session=opts.session if opts.session is not None else requests.Session(),
            rate_limiter=opts.rate_limiter or TokenBucket(DEFAULT_RATE_LIMIT, DEFAULT_BURST),
            timeout=opts.timeout,
            verify_encoding=opts.verify_encoding,
            owns_session=owns_session,
        )
        self.codec = EnvelopeCodec()
        self._batch_encoder = JSONAddressEncoder()

        logger.info(
            f"Initialized PostGridClient: {self.config.base_url}, "
            f"encoding={self.config.verify_encoding.value}, timeout={self.config.timeout}s"
        )

    @classmethod
    def from_settings(cls, settings: "Settings", *options: Option) -> "PostGridClient":
        """
        Build a client from Settings.

        Options passed here are applied after the ones derived from
        settings, so they take precedence.
        """
        return cls(
            settings.api_key.get_secret_value(),
            settings.base_url,
            with_rate_limiter(TokenBucket(settings.rate_limit, settings.burst)),
            with_timeout(settings.timeout),
            with_verify_encoding(settings.verify_encoding),
            *options,
        )

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self.config.owns_session:
            self.config.session.close()

    def __enter__(self) -> "PostGridClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def verify_address(
        self,
        request: VerifyAddressRequest,
        cancel: Optional[Event] = None,
    ) -> VerifiedAddress:
        """
        Verify a single address.

        https://avdocs.postgrid.com/#1061f2ea-00ee-4977-99da-a54872de28c2

        Args:
            request: The address to verify
            cancel: Optional event; setting it abandons the call

        Returns:
            The verified (and possibly corrected) address
        """
        encoder = get_encoder(self.config.verify_encoding)
        body = encoder.single_body(request.address)
        body_kwargs = {"data": body} if encoder.mode == EncodingMode.FORM else {"json": body}

        return self._send(
            VERIFY_PATH,
            VerifiedAddress,
            content_type=encoder.content_type,
            cancel=cancel,
            **body_kwargs,
        )

    def batch_verify_addresses(
        self,
        request: BatchVerifyAddressesRequest,
        cancel: Optional[Event] = None,
    ) -> BatchVerifyAddressesResponse:
        """
        Verify many addresses in one call.

        https://avdocs.postgrid.com/#94520412-5072-4f5a-a2e2-49981b66a347

        Results are returned in the same order as ``request.addresses``.
        Batches above ``MAX_BATCH_SIZE`` are sent as-is and left for the
        service to reject.
        """
        return self._send(
            BATCH_VERIFY_PATH,
            BatchVerifyAddressesResponse,
            content_type=self._batch_encoder.content_type,
            cancel=cancel,
            json=self._batch_encoder.batch_body(request.addresses),
        )

    def _send(
        self,
        path: str,
        target: Optional[Type[T]],
        content_type: str,
        cancel: Optional[Event] = None,
        **body: Any,
    ) -> Optional[T]:
        """
        Wait for the rate limiter, POST the request and decode the envelope.

        Raises:
            CancelledError: ``cancel`` was set while waiting or while the
                request was in flight. In the latter case the service may
                still have processed (and billed) the request.
            TransportError: the HTTP request failed
            GatewayTimeoutError, MalformedEnvelopeError, ServiceError,
            MalformedPayloadError: see EnvelopeCodec.decode
        """
        self.config.rate_limiter.wait(cancel)

        if cancel is not None and cancel.is_set():
            raise CancelledError("cancelled before request was issued")

        url = f"{self.config.base_url}{path}"
        headers = {
            API_KEY_HEADER: self.config.api_key,
            "Content-Type": content_type,
            "Accept": "application/json",
        }

        logger.debug(f"POST {url} ({content_type})")

        try:
            response = self.config.session.request(
                "POST",
                url,
                params=dict(DEFAULT_QUERY_PARAMS),
                headers=headers,
                timeout=self.config.timeout,
                **body,
            )
        except requests.RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise TransportError(f"request to {url} failed: {e}") from e

        logger.debug(f"POST {url} -> {response.status_code}")

        if cancel is not None and cancel.is_set():
            logger.warning(f"Call to {url} cancelled after request was sent; discarding response")
            raise CancelledError("cancelled while request was in flight")

        return self.codec.decode(response, target)
