import pytest

from models.view_state import (
    ChangePage,
    CloseSafetyModal,
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


def test_defaults() -> None:
    state = ViewState()
    assert (state.sort_key, state.sort_direction, state.page) == ("apy", "desc", 1)
    assert state.selected_stablecoin is None
    assert state.news_filter == "all"


def test_same_key_toggles_and_returns_to_descending() -> None:
    state = apply_event(ViewState(), SortBy("apy"))
    assert state.sort_direction == "asc"
    state = apply_event(state, SortBy("apy"))
    assert state.sort_direction == "desc"


def test_new_key_starts_descending() -> None:
    state = apply_event(ViewState(), SortBy("apy"))
    state = apply_event(state, SortBy("tvl_usd"))
    assert (state.sort_key, state.sort_direction) == ("tvl_usd", "desc")


@pytest.mark.parametrize(
    "event",
    [SetSearch("aave"), SelectStablecoin("USDC"), SelectStablecoin(None), SortBy("safety")],
)
def test_filter_and_sort_changes_reset_page(event) -> None:
    state = apply_event(ViewState(), ChangePage(4))
    assert apply_event(state, event).page == 1


def test_other_events_keep_page() -> None:
    state = apply_event(ViewState(), ChangePage(3))
    for event in (SetNewsFilter("stablecoins"), SetTab("intel"), OpenSafetyModal(), CloseSafetyModal()):
        assert apply_event(state, event).page == 3


def test_page_navigation_clamps() -> None:
    state = ViewState()
    assert apply_event(state, PrevPage()).page == 1
    state = apply_event(state, NextPage(total_pages=2))
    assert state.page == 2
    assert apply_event(state, NextPage(total_pages=2)).page == 2
    assert apply_event(state, NextPage(total_pages=0)).page == 1
    assert apply_event(state, ChangePage(0)).page == 1


def test_stablecoin_selection_uppercased() -> None:
    assert apply_event(ViewState(), SelectStablecoin("usdc")).selected_stablecoin == "USDC"


def test_state_is_not_mutated() -> None:
    state = ViewState()
    apply_event(state, SetSearch("x"))
    assert state.search == ""


def test_modal_and_tab() -> None:
    state = apply_event(ViewState(), OpenSafetyModal())
    assert state.safety_modal_open
    assert not apply_event(state, CloseSafetyModal()).safety_modal_open
    assert apply_event(state, SetTab("intel")).active_tab == "intel"


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError):
        apply_event(ViewState(), SortBy("chain"))
    with pytest.raises(ValueError):
        apply_event(ViewState(), SetNewsFilter("memes"))
    with pytest.raises(ValueError):
        apply_event(ViewState(), SetTab("settings"))
    with pytest.raises(ValueError):
        apply_event(ViewState(), "refresh")
