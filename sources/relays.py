"""CORS relays used to reach APIs that refuse cross-origin requests.

Every relay exposes ``fetch(session, url) -> str`` and raises
:class:`RelayError` on any failure. :class:`RelayChain` tries relays in order
and returns the first body that comes back.
"""

import logging
from typing import List, Optional, Sequence

import requests

from config import RELAY_ENDPOINTS, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """A relay could not deliver the target body."""


def looks_like_html(body: str) -> bool:
    """Return True for an HTML page (error page, challenge) instead of JSON."""
    return body.lstrip().startswith("<")


class Relay:
    """Base relay: GET ``request_url(url)`` and return the body text."""

    name = "relay"

    def __init__(self, endpoint: str):
        self.endpoint = endpoint

    def request_url(self, url: str) -> str:
        return requests.Request("GET", self.endpoint, params={"url": url}).prepare().url

    def extract(self, response: requests.Response) -> str:
        return response.text

    def fetch(self, session: requests.Session, url: str) -> str:
        """Fetch ``url`` through the relay.

        Raises:
            RelayError: On transport failure, non-success status, an empty
                body or an HTML body.
        """
        try:
            response = session.get(self.request_url(url), timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RelayError(f"{self.name}: {e}") from e

        body = self.extract(response)
        if not body:
            raise RelayError(f"{self.name}: empty body")
        if looks_like_html(body):
            raise RelayError(f"{self.name}: HTML returned instead of JSON")
        return body


class EnvelopeRelay(Relay):
    """AllOrigins ``/get``: the body is wrapped as ``{"contents": "..."}``."""

    name = "allorigins"

    def extract(self, response: requests.Response) -> str:
        try:
            envelope = response.json()
        except ValueError as e:
            raise RelayError(f"{self.name}: envelope is not JSON") from e
        if not isinstance(envelope, dict):
            raise RelayError(f"{self.name}: unexpected envelope")
        contents = envelope.get("contents")
        if contents is not None and not isinstance(contents, str):
            raise RelayError(f"{self.name}: contents is not text")
        return contents or ""


class PassthroughRelay(Relay):
    """corsproxy.io: the target body is returned unchanged."""

    name = "corsproxy"


def default_relays() -> List[Relay]:
    return [
        EnvelopeRelay(RELAY_ENDPOINTS["allorigins"]),
        PassthroughRelay(RELAY_ENDPOINTS["corsproxy"]),
    ]


class RelayChain:
    """Ordered relay fallback."""

    def __init__(self, relays: Optional[Sequence[Relay]] = None):
        self.relays = list(relays) if relays is not None else default_relays()

    def fetch(self, session: requests.Session, url: str) -> Optional[str]:
        """Return the first body any relay delivers, or None if all fail."""
        for relay in self.relays:
            try:
                body = relay.fetch(session, url)
            except RelayError as e:
                logger.info("Relay failed: %s", e)
                continue
            logger.debug("Relay %s delivered %d bytes", relay.name, len(body))
            return body
        return None

