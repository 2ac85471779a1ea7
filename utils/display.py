"""Display formatting utilities using rich library."""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from models.news import NewsItem
from models.pool import Pool
from utils.risk import SAFETY_METHODOLOGY, RiskAssessor

SORT_LABELS = {
    "apy": "Current APY",
    "apy_mean_30d": "30D AVG",
    "tvl_usd": "TVL",
    "safety": "Safety",
}


def apy_style(apy: float) -> str:
    return "red" if apy > 15 else "green"


def risk_style(label: str) -> str:
    return {"ROBUST": "green", "MODERATE": "yellow"}.get(label, "red")


def format_score(score: float) -> str:
    if score == float("-inf"):
        return "-inf"
    return f"{score:.1f}"


class DisplayFormatter:
    """Formats pools and posts for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the display formatter."""
        self.console = console or Console()

    def create_pool_table(
        self,
        pools: Sequence[Pool],
        title: str = "Stablecoin Yield Pools",
        sort_key: Optional[str] = None,
        descending: bool = True,
    ) -> Table:
        """Create a rich table from pools.

        Args:
            pools: Pools for the current page.
            title: Table title.
            sort_key: Active sort key, marked in the header.
            descending: Direction of the active sort.

        Returns:
            Rich Table object.
        """
        table = Table(
            title=title,
            show_header=True,
            header_style="bold",
            border_style="dim",
        )

        def header(key: str) -> str:
            label = SORT_LABELS[key]
            if key == sort_key:
                return f"{label} {'v' if descending else '^'}"
            return label

        table.add_column("Protocol", style="cyan")
        table.add_column("Chain", style="blue")
        table.add_column("Asset", style="green")
        table.add_column(header("apy"), justify="right", style="bold")
        table.add_column(header("apy_mean_30d"), justify="right")
        table.add_column(header("tvl_usd"), justify="right")
        table.add_column(header("safety"), justify="right")
        table.add_column("Risk", justify="center")
        table.add_column("Audit", justify="center")

        for pool in pools:
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

        return table

    def display_pools(
        self,
        pools: Sequence[Pool],
        page: int,
        total_pages: int,
        total_count: int,
        sort_key: Optional[str] = None,
        descending: bool = True,
    ) -> None:
        """Display one page of pools with a pagination caption."""
        if not pools:
            self.console.print("[yellow]No pools found.[/yellow]")
            return

        table = self.create_pool_table(pools, sort_key=sort_key, descending=descending)
        table.caption = f"Page {page}/{max(total_pages, 1)} | {total_count} POOLS DETECTED"
        self.console.print(table)

    def display_summary(self, avg_apy: str, top: str, tags: List[str]) -> None:
        """Display market stats and the stablecoin tags ordered by TVL."""
        summary = Text()
        summary.append("  MARKET APY: ", style="dim")
        summary.append(f"{avg_apy}\n", style="green")
        summary.append("  TOP ALPHA: ", style="dim")
        summary.append(f"{top}\n", style="blue")
        if tags:
            summary.append("  Stablecoins by TVL: ", style="dim")
            summary.append(" ".join(tags))

        panel = Panel(summary, title="Market", border_style="dim")
        self.console.print(panel)

    def display_news(self, news: Sequence[NewsItem], social: Sequence[NewsItem]) -> None:
        """Display social chatter and news headlines."""
        if social:
            self.console.print("\n[bold magenta]Social Pulse[/bold magenta]")
            for post in social:
                self.console.print(f"  [magenta]{post.source.title}[/magenta]: {post.title}")

        self.console.print("\n[bold]News[/bold]")
        if not news:
            self.console.print("  [dim]No headlines.[/dim]")
        for item in news:
            self.console.print(
                f"  {item.title} [dim]({item.source.title}, {item.published_date})[/dim]\n"
                f"    [link={item.url}]{item.url}[/link]"
            )

    def display_methodology(self) -> None:
        """Display how the safety score is built."""
        text = Text()
        for heading, body in SAFETY_METHODOLOGY:
            text.append(f"{heading}\n", style="bold")
            text.append(f"  {body}\n\n")
        text.append(
            "score = audit_bonus * 0.5 + min(log10(tvl / 1M) * 15, 60) - min(apy * 1.5, 40)",
            style="dim",
        )
        self.console.print(Panel(text, title="Safety Scoring", border_style="green"))

    def display_error(self, message: str) -> None:
        """Display an error message.

        Args:
            message: Error message to display.
        """
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def display_warning(self, message: str) -> None:
        """Display a warning message.

        Args:
            message: Warning message to display.
        """
        self.console.print(f"[yellow]Warning:[/yellow] {message}")
