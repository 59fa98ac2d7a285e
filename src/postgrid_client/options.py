"""
Optional configuration entries for PostGridClient.

Each ``with_*`` function returns an Option: a callable that sets one value
on a mutable ``ClientOptions`` builder. The client applies options in the
order given, so a later option of the same kind overrides an earlier one,
then freezes the result into a ``ClientConfig``.

Example:
    client = PostGridClient(
        api_key,
        BASE_URL,
        with_rate_limiter(TokenBucket(rate=2, capacity=2)),
        with_timeout(10),
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from .base import RateLimiter
from .constants import DEFAULT_TIMEOUT_S
from .encoding import EncodingMode


@dataclass
class ClientOptions:
    """Mutable builder the options are applied to."""
    session: Optional[requests.Session] = None
    rate_limiter: Optional[RateLimiter] = None
    timeout: float = DEFAULT_TIMEOUT_S
    verify_encoding: EncodingMode = EncodingMode.FORM


Option = Callable[[ClientOptions], None]


@dataclass(frozen=True)
class ClientConfig:
    """Resolved, immutable client configuration."""
    api_key: str
    base_url: str
    session: requests.Session
    rate_limiter: RateLimiter
    timeout: float
    verify_encoding: EncodingMode
    owns_session: bool

    def __repr__(self) -> str:
        # keep the key out of logs and tracebacks
        return (
            f"ClientConfig(base_url={self.base_url!r}, rate_limiter={self.rate_limiter!r}, "
            f"timeout={self.timeout}, verify_encoding={self.verify_encoding.value!r})"
        )


def with_http_session(session: requests.Session) -> Option:
    """Use the given requests.Session as transport. The caller keeps ownership."""
    def apply(opts: ClientOptions) -> None:
        opts.session = session
    return apply


def with_rate_limiter(rate_limiter: RateLimiter) -> Option:
    """Replace the default 5 req/s token bucket."""
    def apply(opts: ClientOptions) -> None:
        opts.rate_limiter = rate_limiter
    return apply


def with_timeout(seconds: float) -> Option:
    """HTTP timeout passed to every transport call."""
    if seconds <= 0:
        raise ValueError("timeout must be > 0")

    def apply(opts: ClientOptions) -> None:
        opts.timeout = float(seconds)
    return apply


def with_verify_encoding(mode: EncodingMode | str) -> Option:
    """
    Body format for the single verify endpoint.

    Defaults to form encoding; newer API revisions also accept JSON. The
    batch endpoint is always JSON.
    """
    resolved = EncodingMode(mode)

    def apply(opts: ClientOptions) -> None:
        opts.verify_encoding = resolved
    return apply
