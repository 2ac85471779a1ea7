"""Dashboard view state and the events that change it.

All user interaction goes through :func:`apply_event`, which returns a new
:class:`ViewState`. Any change to the search text, the stablecoin filter or
the sort order sends the table back to page 1.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

SORT_KEYS = ("apy", "apy_mean_30d", "tvl_usd", "safety")
NEWS_FILTERS = ("all", "stablecoins")
TABS = ("yields", "intel")


@dataclass(frozen=True)
class ViewState:
    """Transient UI state for the pool table and intel sidebar."""

    search: str = ""
    selected_stablecoin: Optional[str] = None
    sort_key: str = "apy"
    sort_direction: str = "desc"
    page: int = 1
    active_tab: str = "yields"
    news_filter: str = "all"
    safety_modal_open: bool = False

    @property
    def descending(self) -> bool:
        return self.sort_direction == "desc"


@dataclass(frozen=True)
class SetSearch:
    text: str


@dataclass(frozen=True)
class SelectStablecoin:
    ticker: Optional[str]


@dataclass(frozen=True)
class SortBy:
    key: str


@dataclass(frozen=True)
class ChangePage:
    page: int


@dataclass(frozen=True)
class NextPage:
    total_pages: int


@dataclass(frozen=True)
class PrevPage:
    pass


@dataclass(frozen=True)
class SetNewsFilter:
    mode: str


@dataclass(frozen=True)
class SetTab:
    tab: str


@dataclass(frozen=True)
class OpenSafetyModal:
    pass


@dataclass(frozen=True)
class CloseSafetyModal:
    pass


Event = Union[
    SetSearch, SelectStablecoin, SortBy, ChangePage, NextPage, PrevPage,
    SetNewsFilter, SetTab, OpenSafetyModal, CloseSafetyModal,
]


def next_sort_direction(state: ViewState, key: str) -> str:
    """Flip direction when re-selecting the active key; new keys start descending."""
    if state.sort_key == key and state.sort_direction == "desc":
        return "asc"
    return "desc"


def apply_event(state: ViewState, event: Event) -> ViewState:
    """Return the state that results from applying ``event`` to ``state``.

    Raises:
        ValueError: For an unknown sort key, news filter, tab or event.
    """
    if isinstance(event, SetSearch):
        return replace(state, search=event.text, page=1)

    if isinstance(event, SelectStablecoin):
        ticker = event.ticker.upper() if event.ticker else None
        return replace(state, selected_stablecoin=ticker, page=1)

    if isinstance(event, SortBy):
        if event.key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {event.key}")
        return replace(
            state,
            sort_key=event.key,
            sort_direction=next_sort_direction(state, event.key),
            page=1,
        )

    if isinstance(event, ChangePage):
        return replace(state, page=max(1, event.page))

    if isinstance(event, NextPage):
        return replace(state, page=min(max(event.total_pages, 1), state.page + 1))

    if isinstance(event, PrevPage):
        return replace(state, page=max(1, state.page - 1))

    if isinstance(event, SetNewsFilter):
        if event.mode not in NEWS_FILTERS:
            raise ValueError(f"Unknown news filter: {event.mode}")
        return replace(state, news_filter=event.mode)

    if isinstance(event, SetTab):
        if event.tab not in TABS:
            raise ValueError(f"Unknown tab: {event.tab}")
        return replace(state, active_tab=event.tab)

    if isinstance(event, OpenSafetyModal):
        return replace(state, safety_modal_open=True)

    if isinstance(event, CloseSafetyModal):
        return replace(state, safety_modal_open=False)

    raise ValueError(f"Unknown event: {event!r}")
