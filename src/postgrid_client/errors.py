"""
Error taxonomy for the PostGrid client.

Every failure surfaced by the client derives from ``PostGridError`` so
callers can catch broadly, or pick out the specific kinds they want to
retry (e.g. ``GatewayTimeoutError``).
"""

from typing import Any

from pydantic import ValidationError


class PostGridError(Exception):
    """Base class for all client errors."""


class TransportError(PostGridError):
    """The HTTP request could not be completed (connection, DNS, TLS, timeout)."""


class CancelledError(PostGridError):
    """The caller cancelled the call while it was waiting or in flight."""


class GatewayTimeoutError(PostGridError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"postgrid error: received postgrid timeout status {status_code}")


class MalformedEnvelopeError(PostGridError):
    """The response body is not a ``{status, message, data}`` envelope."""

    def __init__(self, status_code: int, raw_body: str | None, reason: str = ""):
        self.status_code = status_code
        self.raw_body = raw_body
        self.reason = reason
        msg = (
            f"error decoding response envelope from postgrid: {reason or 'invalid envelope'}, "
            f"received string response: {raw_body!r}, response status code {status_code}"
        )
        super().__init__(msg)


class ServiceError(PostGridError):
    """The service answered with ``status: error``."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(f"postgrid error: {message}")


class MalformedPayloadError(PostGridError):
    """The envelope succeeded but ``data`` does not fit the expected result type."""

    def __init__(self, target: str, errors: list[dict[str, Any]], original: ValidationError | None = None):
        self.target = target
        self.errors = errors
        self.original = original
        msg = f"Decoding postgrid data into '{target}' failed with {len(errors)} errors"

        super().__init__(msg)

    def summary(self, limit: int = 5) -> str:
        """Human-readable summary of the first few validation issues."""
        lines = []
        for err in self.errors[:limit]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            lines.append(f"- {loc}: {err.get('msg')} ({err.get('type')})")
        if len(self.errors) > limit:
            lines.append(f"... ({len(self.errors) - limit} more)")
        return "\n".join(lines)
