"""Source for CryptoPanic news and social posts."""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from urllib.parse import urlencode

import requests

from .base import BaseSource
from .relays import RelayChain
from config import API_ENDPOINTS, NEWS_CURRENCIES, PLACEHOLDER_API_KEY, SAFE_NEWS_URL
from models.news import NewsItem, NewsSource

logger = logging.getLogger(__name__)

# (id, title, minutes ago, source title, domain, kind)
_MOCK_POSTS = [
    (
        1,
        "Ethena (USDE) achieves $3B TVL milestone as cross-chain support expands",
        0, "CoinTelegraph", "cointelegraph.com", "news",
    ),
    (
        2,
        "Poll: Which yield strategy are you using for USDC right now? #DeFi #Yield",
        10, "Reddit /r/DeFi", "reddit.com", "social",
    ),
    (
        3,
        "Sky Finance governance proposal to increase USD1 debt ceiling passes",
        60, "The Block", "theblock.co", "news",
    ),
    (
        4,
        "Massive inflow of $PYUSD detected on Solana DEXes. Yield farming season is back?",
        2, "Twitter / DeFi_Whale", "twitter.com", "social",
    ),
]


def mock_news_items(now: Optional[datetime] = None) -> List[NewsItem]:
    """Return the offline post set used without an API key or on failure."""
    now = now or datetime.now(timezone.utc)
    return [
        NewsItem(
            id=post_id,
            title=title,
            published_at=(now - timedelta(minutes=minutes)).isoformat(),
            url=SAFE_NEWS_URL,
            source=NewsSource(title=source_title, domain=domain),
            kind=kind,
        )
        for post_id, title, minutes, source_title, domain, kind in _MOCK_POSTS
    ]


def has_usable_key(api_key: Optional[str]) -> bool:
    return bool(api_key) and api_key != PLACEHOLDER_API_KEY


class CryptoPanicSource(BaseSource):
    """News and social posts from CryptoPanic.

    CryptoPanic rejects cross-origin calls, so requests go through a
    :class:`~sources.relays.RelayChain`. Without a usable key, or when every
    relay fails or the payload is unusable, the mock post set is returned.
    """

    name = "CryptoPanic"

    POSTS_URL = API_ENDPOINTS["cryptopanic_posts"]

    def __init__(
        self,
        api_key: Optional[str],
        news_filter: str = "all",
        relays: Optional[RelayChain] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(session=session)
        self.api_key = api_key
        self.news_filter = news_filter
        self.relays = relays or RelayChain()

    def build_url(self) -> str:
        """Return the posts endpoint URL for the current key and filter."""
        params = {"auth_token": self.api_key}
        if self.news_filter == "stablecoins":
            params["currencies"] = ",".join(NEWS_CURRENCIES)
        params["regions"] = "en"
        return f"{self.POSTS_URL}?{urlencode(params, safe=',')}"

    def fetch(self) -> List[NewsItem]:
        if not has_usable_key(self.api_key):
            logger.debug("No CryptoPanic key configured, serving offline posts")
            return self.fallback()
        return super().fetch()

    def fallback(self) -> List[NewsItem]:
        return mock_news_items()

    def _fetch_data(self) -> List[NewsItem]:
        body = self.relays.fetch(self.session, self.build_url())
        if body is None:
            raise RuntimeError("all relays failed")

        payload = json.loads(body)
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise ValueError("payload has no 'results' list")

        return [NewsItem.from_record(record) for record in results]
