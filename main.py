#!/usr/bin/env python3
"""StableYield Sentinel CLI.

A terminal dashboard for pure-stablecoin DeFi yield pools from DefiLlama,
with heuristic safety scores and a CryptoPanic news feed.
"""

import sys
import time
from typing import Optional

import click
from rich.console import Console

from config import REFRESH_INTERVAL, get_api_key
from dashboard import (
    derive_filtered_sorted,
    load_dashboard,
    market_stats,
    page_count,
    paginate,
    split_news,
)
from models.view_state import (
    SORT_KEYS,
    ChangePage,
    SelectStablecoin,
    SetNewsFilter,
    SetSearch,
    SortBy,
    ViewState,
    apply_event,
)
from utils.display import DisplayFormatter
from utils.log import setup_logging
from utils.symbols import stablecoin_tvl, sorted_stable_tags

console = Console()


def build_state(
    search: str = "",
    stablecoin: Optional[str] = None,
    sort_by: str = "apy",
    ascending: bool = False,
    page: int = 1,
    news_filter: str = "all",
) -> ViewState:
    """Build the initial view state from command-line options."""
    state = ViewState()
    state = apply_event(state, SetNewsFilter(news_filter))
    state = apply_event(state, SetSearch(search))
    state = apply_event(state, SelectStablecoin(stablecoin))
    if sort_by != state.sort_key:
        state = apply_event(state, SortBy(sort_by))
    if ascending:
        state = apply_event(state, SortBy(sort_by))
    return apply_event(state, ChangePage(page))


def render(data, state: ViewState, formatter: DisplayFormatter,
           show_news: bool = True, show_summary: bool = True) -> None:
    """Render one snapshot of the dashboard as static output."""
    rows = derive_filtered_sorted(data.pools, state)
    total_pages = page_count(rows)

    if show_summary:
        stats = market_stats(data.pools)
        formatter.display_summary(
            stats.formatted_avg_apy,
            stats.formatted_top,
            sorted_stable_tags(data.pools),
        )

    if not data.pools:
        formatter.display_warning("No pools loaded from DefiLlama")
    elif state.page > max(total_pages, 1):
        formatter.display_warning(f"Page {state.page} is out of range (1-{max(total_pages, 1)})")
    else:
        formatter.display_pools(
            paginate(rows, state.page),
            page=state.page,
            total_pages=total_pages,
            total_count=len(rows),
            sort_key=state.sort_key,
            descending=state.descending,
        )

    if show_news:
        news, social = split_news(data.news)
        formatter.display_news(news, social)

    console.print(f"\n[dim]Updated {data.fetched_at:%Y-%m-%d %H:%M:%S} UTC[/dim]")


@click.command()
@click.option(
    "--search", "-q",
    default="",
    help="Filter by protocol name or asset symbol (substring, case-insensitive)",
)
@click.option(
    "--stablecoin", "-s",
    help="Only show pools whose symbol contains this ticker (e.g., USDC)",
)
@click.option(
    "--sort-by",
    type=click.Choice(SORT_KEYS, case_sensitive=False),
    default="apy",
    help="Sort pools by field (default: apy)",
)
@click.option(
    "--ascending", "--asc",
    is_flag=True,
    help="Sort in ascending order (default is descending)",
)
@click.option(
    "--page", "-p",
    type=click.IntRange(min=1),
    default=1,
    help="Page of results to show (30 pools per page)",
)
@click.option(
    "--news-filter",
    type=click.Choice(["all", "stablecoins"]),
    default="all",
    help="Restrict the news feed to stablecoin currencies",
)
@click.option(
    "--api-key",
    envvar="CRYPTOPANIC_API_KEY",
    help="CryptoPanic API key (without one, offline sample posts are shown)",
)
@click.option(
    "--no-news",
    is_flag=True,
    help="Hide the news section",
)
@click.option(
    "--no-summary",
    is_flag=True,
    help="Hide the market summary",
)
@click.option(
    "--list-stablecoins",
    is_flag=True,
    help="List stablecoins ranked by aggregated pool TVL and exit",
)
@click.option(
    "--explain-safety",
    is_flag=True,
    help="Explain the safety score and exit",
)
@click.option(
    "--watch", "-w",
    is_flag=True,
    help="Keep running and refresh every 5 minutes (static mode only)",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Log debug output",
)
@click.option(
    "--interactive/--no-interactive", "-i",
    default=True,
    help="Launch the interactive dashboard (default: enabled)",
)
def main(
    search: str,
    stablecoin: Optional[str],
    sort_by: str,
    ascending: bool,
    page: int,
    news_filter: str,
    api_key: Optional[str],
    no_news: bool,
    no_summary: bool,
    list_stablecoins: bool,
    explain_safety: bool,
    watch: bool,
    verbose: bool,
    interactive: bool,
):
    """StableYield Sentinel - Stablecoin yields with safety scores and news.

    Loads pure-stablecoin pools with at least $10M TVL from DefiLlama, scores
    them for safety and shows them next to CryptoPanic headlines.

    Examples:

        # Launch interactive dashboard (default)
        python main.py

        # Static table sorted by safety
        python main.py --no-interactive --sort-by safety

        # USDC pools matching "aave", second page
        python main.py --no-interactive -s USDC -q aave -p 2

        # Refresh the static view every 5 minutes
        python main.py --no-interactive --watch
    """
    formatter = DisplayFormatter(console)

    if explain_safety:
        formatter.display_methodology()
        return

    api_key = api_key or get_api_key()

    state = build_state(
        search=search,
        stablecoin=stablecoin,
        sort_by=sort_by.lower(),
        ascending=ascending,
        page=page,
        news_filter=news_filter,
    )

    if interactive and not list_stablecoins:
        try:
            from interactive import run_interactive
        except ImportError:
            console.print("[yellow]Interactive mode requires textual. Install with: pip install textual[/yellow]")
            console.print("[dim]Falling back to static display...[/dim]\n")
        else:
            run_interactive(api_key, state, verbose=verbose)
            return

    setup_logging(verbose)
    console.print("\n[bold]StableYield Sentinel[/bold]\n")

    if list_stablecoins:
        data = load_dashboard(api_key, state.news_filter)
        totals = stablecoin_tvl(data.pools)
        if not totals:
            formatter.display_error("No pools loaded from DefiLlama")
            sys.exit(1)
        console.print("[bold]Stablecoins by pool TVL:[/bold]\n")
        for coin in sorted_stable_tags(data.pools):
            console.print(f"  • {coin}: ${totals[coin] / 1_000_000:,.1f}M")
        console.print()
        return

    try:
        while True:
            data = load_dashboard(api_key, state.news_filter)
            if watch:
                console.clear()
            render(data, state, formatter, show_news=not no_news, show_summary=not no_summary)
            if not watch:
                break
            time.sleep(REFRESH_INTERVAL)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")

    console.print()


if __name__ == "__main__":
    main()
