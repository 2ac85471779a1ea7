"""Data models."""

from .pool import Pool
from .news import NewsItem, NewsSource
from .view_state import ViewState, apply_event

__all__ = ["Pool", "NewsItem", "NewsSource", "ViewState", "apply_event"]
