"""Interactive TUI dashboard for stablecoin yields and news."""

import logging
from typing import List, Optional, Sequence

from rich.style import Style
from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.logging import TextualHandler
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Input, Static

from config import REFRESH_INTERVAL
from dashboard import (
    DashboardData,
    derive_filtered_sorted,
    load_dashboard,
    market_stats,
    page_count,
    paginate,
    split_news,
)
from models.news import NewsItem
from models.pool import Pool
from models.view_state import (
    CloseSafetyModal,
    Event,
    NextPage,
    OpenSafetyModal,
    PrevPage,
    SelectStablecoin,
    SetNewsFilter,
    SetSearch,
    SetTab,
    SortBy,
    ViewState,
    apply_event,
)
from utils.display import SORT_LABELS, apy_style, format_score, risk_style
from utils.log import setup_logging
from utils.risk import SAFETY_METHODOLOGY, RiskAssessor
from utils.symbols import sorted_stable_tags

logger = logging.getLogger(__name__)


def news_feed_text(news: Sequence[NewsItem], news_filter: str) -> Text:
    """Build the sidebar news feed, one clickable link per headline."""
    mode = "USD" if news_filter == "stablecoins" else "ALL"
    text = Text(f"\nNEWS FEED [{mode}]\n", style="bold")
    for item in news:
        text.append(f"{item.title}\n")
        text.append(f"  {item.source.title} · {item.published_date}\n", style="dim")
        text.append(f"  {item.url}\n", style=Style(color="cyan", link=item.url))
    return text


class HelpBar(Static):
    """Help bar showing keyboard shortcuts."""

    def compose(self) -> ComposeResult:
        yield Static(
            "[b cyan]/[/b cyan]=Search  [b cyan]G[/b cyan]=Next Coin  [b cyan]0[/b cyan]=All Coins | "
            "[b cyan]S[/b cyan]=APY  [b cyan]M[/b cyan]=30D  [b cyan]T[/b cyan]=TVL  [b cyan]K[/b cyan]=Safety | "
            "[b cyan]N[/b cyan]/[b cyan]P[/b cyan]=Page  [b cyan]U[/b cyan]=News Filter  [b cyan]V[/b cyan]=Intel | "
            "[b cyan]I[/b cyan]=Safety Info  [b cyan]R[/b cyan]=Refresh  [b cyan]Q[/b cyan]=Quit",
            id="help-text"
        )


class SafetyModal(ModalScreen):
    """Explains how the safety score is computed."""

    BINDINGS = [Binding("escape", "close", "Close")]

    def compose(self) -> ComposeResult:
        body = Text()
        body.append("Safety Scoring\n\n", style="bold green")
        for heading, text in SAFETY_METHODOLOGY:
            body.append(f"{heading}\n", style="bold")
            body.append(f"  {text}\n\n")
        with Vertical(id="safety-dialog"):
            yield Static(body, id="safety-body")
            yield Button("Understood", variant="success", id="safety-close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss()

    def action_close(self) -> None:
        self.dismiss()


class SentinelApp(App):
    """Stablecoin yield terminal with an intel sidebar."""

    TITLE = "StableYield Sentinel"
    SUB_TITLE = "Terminal Interface"

    CSS = """
    Screen {
        background: $surface;
    }

    #help-bar {
        height: 1;
        background: $primary-darken-2;
        color: $text;
        dock: top;
    }

    #help-text {
        text-align: center;
    }

    #stats-bar {
        height: 1;
        background: $primary;
        color: $text;
        padding: 0 1;
    }

    #search {
        height: 3;
        border: solid white;
        background: #000033;
    }

    #search:focus {
        border: solid cyan;
    }

    #tags {
        height: auto;
        padding: 0 1;
    }

    #yields-pane {
        width: 3fr;
    }

    #intel-pane {
        width: 1fr;
        min-width: 36;
        border-left: solid $primary;
        padding: 0 1;
    }

    #page-info {
        height: 1;
        color: $text-muted;
        padding: 0 1;
    }

    #link-display {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
        dock: bottom;
    }

    DataTable {
        height: 1fr;
    }

    DataTable > .datatable--header {
        background: $primary;
        color: $text;
    }

    SafetyModal {
        align: center middle;
    }

    #safety-dialog {
        width: 70;
        height: auto;
        border: thick $success;
        background: $surface;
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "reload", "Refresh"),
        Binding("slash", "focus_search", "Search"),
        Binding("escape", "clear_filters", "Clear"),
        Binding("s", "sort('apy')", "Sort APY"),
        Binding("m", "sort('apy_mean_30d')", "Sort 30D"),
        Binding("t", "sort('tvl_usd')", "Sort TVL"),
        Binding("k", "sort('safety')", "Sort Safety"),
        Binding("g", "next_coin", "Next Coin"),
        Binding("0", "all_coins", "All Coins"),
        Binding("n", "next_page", "Next Page"),
        Binding("p", "prev_page", "Prev Page"),
        Binding("u", "toggle_news_filter", "News Filter"),
        Binding("v", "toggle_tab", "Intel"),
        Binding("i", "safety_info", "Safety Info"),
        Binding("l", "show_link", "Show Link"),
    ]

    def __init__(self, api_key: Optional[str], state: Optional[ViewState] = None):
        super().__init__()
        self.api_key = api_key
        self.view_state = state or ViewState()
        self.dashboard_data: Optional[DashboardData] = None
        self.is_loading = False
        self.page_rows: List[Pool] = []
        self.selected_pool: Optional[Pool] = None
        self._refresh_timer = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield HelpBar(id="help-bar")
        yield Static("", id="stats-bar")
        with Horizontal(id="main"):
            with Vertical(id="yields-pane"):
                yield Input(placeholder="Filter protocol or asset...", id="search")
                yield Static("", id="tags")
                yield DataTable(id="pool-table")
                yield Static("", id="page-info")
            with VerticalScroll(id="intel-pane"):
                yield Static("", id="social")
                yield Static("", id="news")
        yield Static("", id="link-display")
        yield Footer()

    def on_mount(self) -> None:
        """Set up the table and start polling."""
        table = self.query_one("#pool-table", DataTable)
        table.add_column("Protocol", key="project", width=20)
        table.add_column("Chain", key="chain", width=12)
        table.add_column("Asset", key="symbol", width=18)
        table.add_column(SORT_LABELS["apy"], key="apy", width=12)
        table.add_column(SORT_LABELS["apy_mean_30d"], key="apy_mean_30d", width=10)
        table.add_column(SORT_LABELS["tvl_usd"], key="tvl_usd", width=10)
        table.add_column(SORT_LABELS["safety"], key="safety", width=8)
        table.add_column("Risk", key="risk", width=10)
        table.add_column("Audit", key="audit", width=6)
        table.cursor_type = "row"
        table.zebra_stripes = True

        self.search_input.value = self.view_state.search
        self._draw_state()
        self.load_data()
        self._refresh_timer = self.set_interval(REFRESH_INTERVAL, self.load_data)

    def on_unmount(self) -> None:
        if self._refresh_timer is not None:
            self._refresh_timer.stop()

    @property
    def search_input(self) -> Input:
        return self.query_one("#search", Input)

    @work(thread=True)
    def load_data(self) -> None:
        """Fetch pools and posts off the UI thread.

        Overlapping loads are not cancelled; whichever finishes last wins.
        """
        self.call_from_thread(self._set_loading, True)
        logger.debug("Loading dashboard (news filter: %s)", self.view_state.news_filter)
        data = load_dashboard(self.api_key, self.view_state.news_filter)
        self.call_from_thread(self._apply_data, data)

    def _set_loading(self, loading: bool) -> None:
        self.is_loading = loading
        self._draw_stats()

    def _apply_data(self, data: DashboardData) -> None:
        self.dashboard_data = data
        self.is_loading = False
        self._draw_state()

    def apply_view_event(self, event: Event) -> None:
        """Apply a view event and redraw."""
        previous = self.view_state
        self.view_state = apply_event(self.view_state, event)
        if self.view_state.news_filter != previous.news_filter:
            self.load_data()
        self._draw_state()

    # Drawing

    @property
    def pools(self) -> List[Pool]:
        return self.dashboard_data.pools if self.dashboard_data else []

    def _draw_state(self) -> None:
        self._draw_stats()
        self._draw_tags()
        self._draw_table()
        self._draw_intel()
        show_yields = self.view_state.active_tab == "yields"
        self.query_one("#yields-pane").display = show_yields

    def _draw_stats(self) -> None:
        stats = market_stats(self.pools)
        status = "[yellow]SYNCING...[/yellow]" if self.is_loading else "[green]LIVE[/green]"
        updated = f"{self.dashboard_data.fetched_at:%H:%M:%S} UTC" if self.dashboard_data else "--"
        self.query_one("#stats-bar", Static).update(
            f"MARKET APY: [b]{stats.formatted_avg_apy}[/b] | "
            f"TOP ALPHA: [b]{stats.formatted_top}[/b] | "
            f"Updated: {updated} | {status}"
        )

    def _draw_tags(self) -> None:
        selected = self.view_state.selected_stablecoin
        tags = Text()
        tags.append(" ALL ", style="bold black on green" if selected is None else "dim")
        for coin in sorted_stable_tags(self.pools):
            tags.append(" ")
            tags.append(f" {coin} ", style="bold white on blue" if coin == selected else "")
        self.query_one("#tags", Static).update(tags)

    def _draw_table(self) -> None:
        table = self.query_one("#pool-table", DataTable)
        table.clear()

        rows = derive_filtered_sorted(self.pools, self.view_state)
        total_pages = page_count(rows)
        self.page_rows = paginate(rows, self.view_state.page)

        for pool in self.page_rows:
            table.add_row(
                pool.project,
                pool.chain,
                pool.symbol,
                Text(pool.formatted_apy, style=apy_style(pool.apy)),
                pool.formatted_apy_mean_30d,
                pool.formatted_tvl,
                format_score(RiskAssessor.safety_score(pool)),
                Text(pool.risk_label, style=risk_style(pool.risk_label)),
                Text("yes", style="green") if pool.is_audit else Text("no", style="yellow"),
            )

        direction = "high to low" if self.view_state.descending else "low to high"
        self.query_one("#page-info", Static).update(
            f"Page {self.view_state.page}/{max(total_pages, 1)} | {len(rows)} POOLS DETECTED | "
            f"Sorted by {SORT_LABELS[self.view_state.sort_key]} ({direction})"
        )

    def _draw_intel(self) -> None:
        news, social = split_news(self.dashboard_data.news if self.dashboard_data else [])

        social_text = Text("SOCIAL PULSE\n", style="bold magenta")
        for post in social:
            social_text.append(f"{post.source.title}\n", style="magenta")
            social_text.append(f"  {post.title}\n")
        self.query_one("#social", Static).update(social_text)

        self.query_one("#news", Static).update(news_feed_text(news, self.view_state.news_filter))

    # Events

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.value != self.view_state.search:
            self.apply_view_event(SetSearch(event.value))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        row_idx = event.cursor_row
        if 0 <= row_idx < len(self.page_rows):
            self.selected_pool = self.page_rows[row_idx]

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.on_data_table_row_highlighted(event)
        self.action_show_link()

    # Actions

    def action_reload(self) -> None:
        self.load_data()
        self.notify("Refreshing data...")

    def action_focus_search(self) -> None:
        self.search_input.focus()

    def action_clear_filters(self) -> None:
        self.search_input.value = ""
        self.apply_view_event(SetSearch(""))
        self.apply_view_event(SelectStablecoin(None))
        self.query_one("#pool-table", DataTable).focus()

    def action_sort(self, key: str) -> None:
        self.apply_view_event(SortBy(key))
        direction = "(high to low)" if self.view_state.descending else "(low to high)"
        self.notify(f"Sorted by {SORT_LABELS[key]} {direction}")

    def action_next_coin(self) -> None:
        tags = sorted_stable_tags(self.pools)
        if not tags:
            return
        current = self.view_state.selected_stablecoin
        if current not in tags:
            self.apply_view_event(SelectStablecoin(tags[0]))
        elif current == tags[-1]:
            self.apply_view_event(SelectStablecoin(None))
        else:
            self.apply_view_event(SelectStablecoin(tags[tags.index(current) + 1]))

    def action_all_coins(self) -> None:
        self.apply_view_event(SelectStablecoin(None))

    def action_next_page(self) -> None:
        rows = derive_filtered_sorted(self.pools, self.view_state)
        self.apply_view_event(NextPage(page_count(rows)))

    def action_prev_page(self) -> None:
        self.apply_view_event(PrevPage())

    def action_toggle_news_filter(self) -> None:
        mode = "all" if self.view_state.news_filter == "stablecoins" else "stablecoins"
        self.apply_view_event(SetNewsFilter(mode))
        self.notify(f"News filter: {mode}")

    def action_toggle_tab(self) -> None:
        tab = "yields" if self.view_state.active_tab == "intel" else "intel"
        self.apply_view_event(SetTab(tab))

    def action_safety_info(self) -> None:
        self.apply_view_event(OpenSafetyModal())
        self.push_screen(SafetyModal(), callback=lambda _: self.apply_view_event(CloseSafetyModal()))

    def action_show_link(self) -> None:
        if self.selected_pool:
            self.query_one("#link-display", Static).update(
                f"[b]{self.selected_pool.project}[/b] {self.selected_pool.symbol}: "
                f"{self.selected_pool.source_url}"
            )
        else:
            self.notify("No row selected")


def run_interactive(api_key: Optional[str], state: Optional[ViewState] = None,
                    verbose: bool = False) -> None:
    """Run the interactive dashboard.

    Args:
        api_key: CryptoPanic API key, or None for offline posts.
        state: Initial view state.
        verbose: Log debug output to the textual console.
    """
    setup_logging(verbose, handler=TextualHandler())
    app = SentinelApp(api_key, state)
    app.run()
