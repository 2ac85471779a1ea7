"""Upstream data sources."""

from .base import BaseSource
from .cryptopanic import CryptoPanicSource, mock_news_items
from .defillama import DefiLlamaSource
from .relays import EnvelopeRelay, PassthroughRelay, Relay, RelayChain, RelayError

__all__ = [
    "BaseSource",
    "CryptoPanicSource",
    "DefiLlamaSource",
    "EnvelopeRelay",
    "PassthroughRelay",
    "Relay",
    "RelayChain",
    "RelayError",
    "mock_news_items",
]
