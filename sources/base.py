"""Base source class with common functionality."""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import requests

from config import DEFAULT_HEADERS, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class BaseSource(ABC):
    """Abstract base class for upstream data sources.

    :meth:`fetch` never raises: any failure while fetching or parsing is
    logged and replaced by :meth:`fallback`.
    """

    name: str = ""

    def __init__(self, session: Optional[requests.Session] = None):
        """Initialize the source.

        Args:
            session: HTTP session to use. A new one is created if omitted.
        """
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def _make_request(self, url: str) -> requests.Response:
        """Make a GET request with the session headers and fail on non-success status.

        Args:
            url: URL to request.

        Returns:
            Response object.

        Raises:
            requests.RequestException: If the request fails.
        """
        response = self.session.get(url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response

    def fetch(self) -> List[Any]:
        """Fetch items, degrading to the fallback on any failure."""
        try:
            return self._fetch_data()
        except Exception as e:
            logger.warning("%s fetch failed, using fallback: %s", self.name, e)
            return self.fallback()

    def fallback(self) -> List[Any]:
        """Return the items used when fetching fails."""
        return []

    @abstractmethod
    def _fetch_data(self) -> List[Any]:
        """Fetch data from the source. Must be implemented by subclasses."""
        pass
