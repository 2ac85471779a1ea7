import math
from datetime import datetime

import pytest

from dashboard import (
    derive_filtered_sorted,
    filter_pools,
    load_dashboard,
    market_stats,
    page_count,
    paginate,
    sort_pools,
    sort_value,
    split_news,
)
from fakes import make_pool
from models.view_state import SelectStablecoin, SetSearch, SortBy, ViewState, apply_event
from sources.cryptopanic import mock_news_items

POOLS = [
    make_pool(pool="a", project="aave-v3", symbol="USDC", tvl_usd=5e8, apy=4.0, apy_mean_30d=3.5, is_audit=True),
    make_pool(pool="b", project="curve-dex", symbol="USDC-USDT", tvl_usd=8e7, apy=6.5, apy_mean_30d=None, is_audit=True),
    make_pool(pool="c", project="obscure-farm", symbol="DAI", tvl_usd=2e7, apy=22.0, apy_mean_30d=18.0),
    make_pool(pool="d", project="morpho-blue", symbol="GHO", tvl_usd=3e7, apy=9.1, apy_mean_30d=8.0, is_audit=True),
]


def test_search_matches_project_or_symbol() -> None:
    assert [p.pool for p in filter_pools(POOLS, "CURVE")] == ["b"]
    assert [p.pool for p in filter_pools(POOLS, "usdt")] == ["b"]
    assert len(filter_pools(POOLS, "")) == len(POOLS)


def test_stablecoin_filter_and_search_combine() -> None:
    assert [p.pool for p in filter_pools(POOLS, "", "USDC")] == ["a", "b"]
    assert [p.pool for p in filter_pools(POOLS, "aave", "USDC")] == ["a"]
    assert filter_pools(POOLS, "aave", "DAI") == []


@pytest.mark.parametrize("key", ["apy", "apy_mean_30d", "tvl_usd", "safety"])
@pytest.mark.parametrize("descending", [True, False])
def test_sort_is_monotonic(key, descending) -> None:
    values = [sort_value(p, key) for p in sort_pools(POOLS, key, descending)]
    assert values == sorted(values, reverse=descending)


def test_missing_values_sort_as_zero() -> None:
    ordered = sort_pools(POOLS, "apy_mean_30d", descending=False)
    assert ordered[0].pool == "b"


def test_ties_keep_input_order() -> None:
    pools = [make_pool(pool=str(i), apy=5.0) for i in range(5)]
    assert [p.pool for p in sort_pools(pools, "apy", True)] == ["0", "1", "2", "3", "4"]
    assert [p.pool for p in sort_pools(pools, "apy", False)] == ["0", "1", "2", "3", "4"]


def test_derive_uses_state() -> None:
    state = apply_event(ViewState(), SelectStablecoin("USDC"))
    assert [p.pool for p in derive_filtered_sorted(POOLS, state)] == ["b", "a"]
    state = apply_event(state, SortBy("tvl_usd"))
    assert [p.pool for p in derive_filtered_sorted(POOLS, state)] == ["a", "b"]
    state = apply_event(state, SetSearch("zzz"))
    assert derive_filtered_sorted(POOLS, state) == []


def test_sort_by_safety_descending() -> None:
    state = apply_event(ViewState(), SortBy("safety"))
    assert [p.pool for p in derive_filtered_sorted(POOLS, state)][0] == "a"
    assert [p.pool for p in derive_filtered_sorted(POOLS, state)][-1] == "c"


@pytest.mark.parametrize("n", [0, 1, 29, 30, 31, 95])
def test_pages_cover_list_exactly_once(n) -> None:
    items = list(range(n))
    pages = page_count(items)
    assert pages == math.ceil(n / 30)
    joined = [x for page in range(1, pages + 1) for x in paginate(items, page)]
    assert joined == items


def test_last_page_partial_and_out_of_range_empty() -> None:
    items = list(range(65))
    assert len(paginate(items, 3)) == 5
    assert paginate(items, 4) == []
    assert paginate(items, 0) == []


def test_market_stats_ignore_filters() -> None:
    stats = market_stats(POOLS)
    assert stats.avg_apy == pytest.approx((4.0 + 6.5 + 22.0 + 9.1) / 4)
    assert stats.top_project == "obscure-farm"
    assert stats.formatted_top == "obscure-farm (22.00%)"
    assert stats.formatted_avg_apy == "10.40%"


def test_market_stats_empty() -> None:
    stats = market_stats([])
    assert stats.formatted_avg_apy == "0.00%"
    assert stats.formatted_top == "N/A"


def test_split_news_caps_social() -> None:
    items = mock_news_items()
    extra = [item for item in mock_news_items() if item.is_social] * 3
    news, social = split_news(items + extra)
    assert [i.id for i in news] == [1, 3]
    assert len(social) == 4
    assert all(i.is_social for i in social)


class StubSource:
    def __init__(self, items):
        self.items = items
        self.calls = 0

    def fetch(self):
        self.calls += 1
        return self.items


def test_load_dashboard_fetches_both_sources() -> None:
    pools = StubSource(POOLS)
    news = StubSource(mock_news_items())
    data = load_dashboard(None, pool_source=pools, news_source=news)
    assert data.pools == POOLS
    assert [i.id for i in data.news] == [1, 2, 3, 4]
    assert (pools.calls, news.calls) == (1, 1)
    assert isinstance(data.fetched_at, datetime)
