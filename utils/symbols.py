"""Stablecoin symbol classification and per-coin TVL aggregation."""

import re
from typing import Dict, Iterable, List, Optional

from config import MIN_TVL, STABLECOINS

_SEPARATORS = re.compile(r"[-/]")


def split_symbol(symbol: str) -> List[str]:
    """Split a pool symbol such as ``USDC-USDT`` into uppercased tokens."""
    return [token.upper().strip() for token in _SEPARATORS.split(symbol)]


def is_pure_stablecoin(symbol: str) -> bool:
    """Return True if every token of ``symbol`` is a known stablecoin."""
    return all(token in STABLECOINS for token in split_symbol(symbol))


def passes_inclusion(symbol: str, tvl_usd: Optional[float]) -> bool:
    """Return True if a pool belongs on the dashboard.

    A missing or non-numeric TVL never passes.
    """
    if isinstance(tvl_usd, bool) or not isinstance(tvl_usd, (int, float)):
        return False
    return is_pure_stablecoin(symbol) and tvl_usd >= MIN_TVL


def stablecoin_tvl(pools: Iterable) -> Dict[str, float]:
    """Sum pool TVL per stablecoin.

    A multi-token pool adds its full TVL to each of its tokens, so the totals
    overlap and do not add up to the overall TVL.
    """
    totals: Dict[str, float] = {}
    for pool in pools:
        for token in split_symbol(pool.symbol):
            if token in STABLECOINS:
                totals[token] = totals.get(token, 0.0) + pool.tvl_usd
    return totals


def sorted_stable_tags(pools: Iterable) -> List[str]:
    """Return stablecoin tickers ordered by aggregated TVL, largest first."""
    totals = stablecoin_tvl(pools)
    return sorted(totals, key=lambda coin: totals[coin], reverse=True)
