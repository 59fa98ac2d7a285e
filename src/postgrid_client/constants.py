"""
Shared constants for the PostGrid address verification API.
"""

from enum import StrEnum


BASE_URL = "https://api.postgrid.com/v1"

# Largest batch the service accepts. Not enforced by the client.
MAX_BATCH_SIZE = 2000

# PostGrid (via its CDN) answers 524 when the origin takes too long.
# The body of such a response is not an envelope.
HTTP_STATUS_GATEWAY_TIMEOUT = 524

VERIFY_PATH = "/addver/verifications"
BATCH_VERIFY_PATH = "/addver/verifications/batch"

# Attached to every verification call
DEFAULT_QUERY_PARAMS = {
    "includeDetails": "true",
    "geocode": "true",
}

API_KEY_HEADER = "x-api-key"

DEFAULT_RATE_LIMIT = 5.0  # requests per second
DEFAULT_BURST = 5
DEFAULT_TIMEOUT_S = 30.0


class ResponseStatus(StrEnum):
    """Value of the ``status`` field in a response envelope."""
    SUCCESS = "success"
    ERROR = "error"
