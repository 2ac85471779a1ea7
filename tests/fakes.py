"""Network stand-ins shared by the tests."""

import json
from typing import List, Optional

import requests

from models.pool import Pool


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Replays queued responses and records requested URLs.

    Queue entries may be a FakeResponse or an exception to raise.
    """

    def __init__(self, responses: Optional[list] = None):
        self.responses = list(responses or [])
        self.calls: List[str] = []
        self.request_kwargs: List[dict] = []
        self.headers = {}

    def get(self, url, **kwargs):
        self.calls.append(url)
        self.request_kwargs.append(kwargs)
        if not self.responses:
            raise AssertionError(f"unexpected request to {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def json_response(payload, status_code: int = 200) -> FakeResponse:
    return FakeResponse(json.dumps(payload), status_code)


def make_pool(
    pool: str = "p1",
    project: str = "aave-v3",
    symbol: str = "USDC",
    tvl_usd: float = 50_000_000,
    apy: float = 5.0,
    apy_mean_30d: Optional[float] = None,
    is_audit: bool = False,
    chain: str = "Ethereum",
) -> Pool:
    return Pool(
        pool=pool,
        project=project,
        chain=chain,
        symbol=symbol,
        tvl_usd=tvl_usd,
        apy=apy,
        apy_mean_30d=apy_mean_30d,
        is_audit=is_audit,
    )
