"""
Client for the PostGrid address verification API.

- Models: Address, requests and verified results
- Encoding: form and JSON request bodies
- Throttling: token bucket rate limiting
- Envelope: response envelope decoding
- Client: the two verification operations
"""

from .constants import (
    BASE_URL,
    MAX_BATCH_SIZE,
    HTTP_STATUS_GATEWAY_TIMEOUT,
    ResponseStatus,
)

from .errors import (
    PostGridError,
    TransportError,
    CancelledError,
    GatewayTimeoutError,
    MalformedEnvelopeError,
    ServiceError,
    MalformedPayloadError,
)

from .models import (
    Address,
    VerifyAddressRequest,
    BatchVerifyAddressesRequest,
    GeocodeLocation,
    GeocodeResult,
    VerifiedAddressDetails,
    VerifiedAddress,
    VerifiedAddressResponse,
    BatchVerifyAddressesResponse,
)

from .encoding import (
    EncodingMode,
    AddressEncoder,
    FormAddressEncoder,
    JSONAddressEncoder,
    get_encoder,
)

from .base import RateLimiter

from .throttling import (
    TokenBucket,
    NoOpRateLimiter,
)

from .envelope import (
    Envelope,
    EnvelopeCodec,
)

from .options import (
    ClientConfig,
    Option,
    with_http_session,
    with_rate_limiter,
    with_timeout,
    with_verify_encoding,
)

from .client import PostGridClient

from .settings import Settings, get_settings

__all__ = [
    # Constants
    "BASE_URL",
    "MAX_BATCH_SIZE",
    "HTTP_STATUS_GATEWAY_TIMEOUT",
    "ResponseStatus",
    # Errors
    "PostGridError",
    "TransportError",
    "CancelledError",
    "GatewayTimeoutError",
    "MalformedEnvelopeError",
    "ServiceError",
    "MalformedPayloadError",
    # Models
    "Address",
    "VerifyAddressRequest",
    "BatchVerifyAddressesRequest",
    "GeocodeLocation",
    "GeocodeResult",
    "VerifiedAddressDetails",
    "VerifiedAddress",
    "VerifiedAddressResponse",
    "BatchVerifyAddressesResponse",
    # Encoding
    "EncodingMode",
    "AddressEncoder",
    "FormAddressEncoder",
    "JSONAddressEncoder",
    "get_encoder",
    # Throttling
    "RateLimiter",
    "TokenBucket",
    "NoOpRateLimiter",
    # Envelope
    "Envelope",
    "EnvelopeCodec",
    # Client
    "ClientConfig",
    "Option",
    "with_http_session",
    "with_rate_limiter",
    "with_timeout",
    "with_verify_encoding",
    "PostGridClient",
    # Settings
    "Settings",
    "get_settings",
]
