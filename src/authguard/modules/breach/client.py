"""k-anonymity client for the Pwned Passwords range API."""

from __future__ import annotations

import asyncio
import hashlib
import logging
from typing import TYPE_CHECKING

import httpx

from authguard.errors import TransientLookupFailure

if TYPE_CHECKING:
    from authguard.modules.monitor import SecurityMonitor
    from authguard.modules.policy import PolicySettings

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.pwnedpasswords.com/range"
DEFAULT_TIMEOUT = 5.0
MIN_CHECK_LENGTH = 8
PREFIX_LENGTH = 5
USER_AGENT = "authguard-breach-check"


def _utf8(text: str) -> bytes:
    # Round-trip through UTF-16 so lone surrogates decode to U+FFFD.
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace").encode("utf-8")


def hash_prefix_suffix(password: str) -> tuple[str, str]:
    """Return the (prefix, suffix) split of the password's upper-case SHA-1 hex.

    SHA-1 is what the range API indexes by. It is used here only as a lookup
    key, never for storing passwords. Lone surrogates hash as U+FFFD.
    """
    digest = hashlib.sha1(_utf8(password), usedforsecurity=False).hexdigest().upper()
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def parse_range_response(body: str) -> dict[str, int]:
    """Parse ``SUFFIX:COUNT`` lines into a suffix -> count mapping."""
    entries: dict[str, int] = {}
    for raw in body.splitlines():
        line = raw.strip()
        if not line:
            continue
        suffix, sep, count = line.partition(":")
        if not sep or not suffix:
            raise TransientLookupFailure(f"Malformed range line: {line[:60]!r}")
        try:
            entries[suffix.strip().upper()] = int(count.strip())
        except ValueError as exc:
            raise TransientLookupFailure(f"Malformed count in range line: {line[:60]!r}") from exc
    return entries


class BreachLookupClient:
    """Check passwords against a remote breach corpus without revealing them.

    Only the first five hex characters of the SHA-1 digest are sent. Any
    failure (network, timeout, bad status, unparsable body) makes
    :meth:`is_leaked` return False so an unavailable corpus never blocks
    sign-in or sign-up.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        enabled: bool = True,
        min_password_length: int = MIN_CHECK_LENGTH,
        client: httpx.AsyncClient | None = None,
        monitor: SecurityMonitor | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.enabled = enabled
        self.min_password_length = min_password_length
        self.client = client
        self.monitor = monitor

    @classmethod
    def from_settings(cls, settings: PolicySettings, **kwargs) -> BreachLookupClient:
        return cls(enabled=settings.leaked_password_check_enabled, **kwargs)

    def should_check(self, password: str) -> bool:
        return self.enabled and len(password) >= self.min_password_length

    async def is_leaked(self, password: str) -> bool:
        """Return True if the password appears in the breach corpus."""
        if not self.should_check(password):
            return False
        try:
            return await self.breach_count(password) > 0
        except TransientLookupFailure as exc:
            logger.warning("Breach lookup failed, treating password as not leaked: %s", exc)
            if self.monitor is not None:
                self.monitor.breach_lookup_failed(str(exc))
            return False

    async def breach_count(self, password: str) -> int:
        """Return how often the password appears in the corpus.

        Raises TransientLookupFailure when the corpus cannot be queried.
        """
        prefix, suffix = hash_prefix_suffix(password)
        try:
            async with asyncio.timeout(self.timeout):
                body = await self._fetch_range(prefix)
        except TimeoutError as exc:
            raise TransientLookupFailure(
                f"Range query timed out after {self.timeout:.1f}s"
            ) from exc
        return parse_range_response(body).get(suffix, 0)

    async def _fetch_range(self, prefix: str) -> str:
        url = f"{self.api_url}/{prefix}"
        headers = {"Add-Padding": "true", "User-Agent": USER_AGENT}
        try:
            if self.client is not None:
                response = await self.client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            raise TransientLookupFailure(f"Range query timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransientLookupFailure(f"Range query failed: {exc}") from exc

        if response.status_code != 200:
            raise TransientLookupFailure(f"Range query returned HTTP {response.status_code}")
        logger.debug("Range query for prefix %s returned %d bytes", prefix, len(response.content))
        return response.text
