"""Dashboard data loading and derived views.

Everything here except :func:`load_dashboard` is a pure function of the
loaded pools/posts and the current :class:`~models.view_state.ViewState`.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from config import PAGE_SIZE, SOCIAL_LIMIT
from models.news import NewsItem
from models.pool import Pool
from models.view_state import ViewState
from sources import CryptoPanicSource, DefiLlamaSource
from utils.risk import RiskAssessor

logger = logging.getLogger(__name__)


@dataclass
class DashboardData:
    """One completed load of both upstream sources."""

    pools: List[Pool]
    news: List[NewsItem]
    fetched_at: datetime


@dataclass
class MarketStats:
    """Headline numbers over all loaded pools."""

    avg_apy: float
    top_project: Optional[str]
    top_apy: float

    @property
    def formatted_avg_apy(self) -> str:
        return f"{self.avg_apy:.2f}%"

    @property
    def formatted_top(self) -> str:
        if self.top_project is None:
            return "N/A"
        return f"{self.top_project} ({self.top_apy:.2f}%)"


def load_dashboard(
    api_key: Optional[str],
    news_filter: str = "all",
    pool_source: Optional[DefiLlamaSource] = None,
    news_source: Optional[CryptoPanicSource] = None,
) -> DashboardData:
    """Fetch pools and posts concurrently and wait for both.

    Both sources degrade to their fallbacks instead of raising, so this
    always returns data.
    """
    pool_source = pool_source or DefiLlamaSource()
    news_source = news_source or CryptoPanicSource(api_key, news_filter=news_filter)

    with ThreadPoolExecutor(max_workers=2) as ex:
        pools_future = ex.submit(pool_source.fetch)
        news_future = ex.submit(news_source.fetch)
        pools = pools_future.result()
        news = news_future.result()

    logger.info("Loaded %d pools and %d posts", len(pools), len(news))
    return DashboardData(pools=pools, news=news, fetched_at=datetime.now(timezone.utc))


def filter_pools(
    pools: Sequence[Pool],
    search: str = "",
    stablecoin: Optional[str] = None,
) -> List[Pool]:
    """Filter pools by search text and stablecoin tag.

    Args:
        pools: Pools to filter.
        search: Case-insensitive substring of the project name or symbol.
        stablecoin: Ticker the symbol must contain, or None for all.

    Returns:
        Matching pools in their original order.
    """
    search_lower = search.lower()
    filtered = []
    for pool in pools:
        matches_search = (
            search_lower in pool.project.lower()
            or search_lower in pool.symbol.lower()
        )
        matches_stable = stablecoin is None or stablecoin in pool.symbol.upper()
        if matches_search and matches_stable:
            filtered.append(pool)
    return filtered


def sort_value(pool: Pool, key: str) -> float:
    """Return the value a pool sorts by; missing values count as 0."""
    if key == "safety":
        return RiskAssessor.safety_score(pool)
    return getattr(pool, key) or 0


def sort_pools(
    pools: Sequence[Pool],
    sort_key: str = "apy",
    descending: bool = True,
) -> List[Pool]:
    """Sort pools by apy, apy_mean_30d, tvl_usd or safety. Ties keep order."""
    return sorted(pools, key=lambda p: sort_value(p, sort_key), reverse=descending)


def derive_filtered_sorted(pools: Sequence[Pool], state: ViewState) -> List[Pool]:
    """Apply the state's filters, then its sort order."""
    filtered = filter_pools(pools, state.search, state.selected_stablecoin)
    return sort_pools(filtered, state.sort_key, state.descending)


def page_count(items: Sequence, size: int = PAGE_SIZE) -> int:
    return math.ceil(len(items) / size)


def paginate(items: Sequence, page: int, size: int = PAGE_SIZE) -> list:
    """Return the 1-based ``page`` of ``items``; out-of-range pages are empty."""
    if page < 1:
        return []
    start = (page - 1) * size
    return list(items[start:start + size])


def market_stats(pools: Sequence[Pool]) -> MarketStats:
    """Mean APY and top-APY pool over every loaded pool, ignoring filters."""
    if not pools:
        return MarketStats(avg_apy=0.0, top_project=None, top_apy=0.0)
    avg_apy = sum(p.apy for p in pools) / len(pools)
    top = max(pools, key=lambda p: p.apy)
    return MarketStats(avg_apy=avg_apy, top_project=top.project, top_apy=top.apy)


def split_news(
    items: Sequence[NewsItem],
    social_limit: int = SOCIAL_LIMIT,
) -> Tuple[List[NewsItem], List[NewsItem]]:
    """Partition posts into (news, social); social is capped to the first few."""
    news = [item for item in items if not item.is_social]
    social = [item for item in items if item.is_social]
    return news, social[:social_limit]
