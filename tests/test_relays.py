import json

import pytest
import requests

from fakes import FakeResponse, FakeSession, json_response
from sources.relays import (
    EnvelopeRelay,
    PassthroughRelay,
    Relay,
    RelayChain,
    RelayError,
    looks_like_html,
)

TARGET = "https://cryptopanic.com/api/v1/posts/?auth_token=k"
BODY = json.dumps({"results": []})


def test_looks_like_html() -> None:
    assert looks_like_html("<!DOCTYPE html><html>")
    assert looks_like_html("  \n<html>")
    assert not looks_like_html('{"results": []}')


def test_envelope_relay_unwraps_contents() -> None:
    session = FakeSession([json_response({"contents": BODY})])
    relay = EnvelopeRelay("https://api.allorigins.win/get")
    assert relay.fetch(session, TARGET) == BODY
    assert session.calls[0].startswith("https://api.allorigins.win/get?url=https%3A%2F%2Fcryptopanic.com")


@pytest.mark.parametrize(
    "response",
    [
        json_response({"contents": "<!DOCTYPE html><p>blocked</p>"}),
        json_response({"contents": ""}),
        json_response({"contents": None}),
        json_response({"status": "error"}),
        FakeResponse("not json"),
        json_response({"contents": BODY}, status_code=502),
    ],
)
def test_envelope_relay_failures(response) -> None:
    relay = EnvelopeRelay("https://api.allorigins.win/get")
    with pytest.raises(RelayError):
        relay.fetch(FakeSession([response]), TARGET)


def test_transport_error_becomes_relay_error() -> None:
    relay = PassthroughRelay("https://corsproxy.io/")
    session = FakeSession([requests.ConnectionError("refused")])
    with pytest.raises(RelayError):
        relay.fetch(session, TARGET)


def test_passthrough_relay_rejects_html() -> None:
    relay = PassthroughRelay("https://corsproxy.io/")
    with pytest.raises(RelayError):
        relay.fetch(FakeSession([FakeResponse("<html>403</html>")]), TARGET)


class RecordingRelay(Relay):
    def __init__(self, name, body=None):
        super().__init__("https://relay.invalid/")
        self.name = name
        self.body = body
        self.calls = 0

    def fetch(self, session, url):
        self.calls += 1
        if self.body is None:
            raise RelayError(f"{self.name}: down")
        return self.body


def test_chain_falls_through_to_next_relay() -> None:
    first = RecordingRelay("a")
    second = RecordingRelay("b", BODY)
    third = RecordingRelay("c", "unused")
    chain = RelayChain([first, second, third])
    assert chain.fetch(FakeSession(), TARGET) == BODY
    assert (first.calls, second.calls, third.calls) == (1, 1, 0)


def test_chain_exhausted_returns_none() -> None:
    chain = RelayChain([RecordingRelay("a"), RecordingRelay("b")])
    assert chain.fetch(FakeSession(), TARGET) is None


def test_default_chain_order() -> None:
    relays = RelayChain().relays
    assert [r.name for r in relays] == ["allorigins", "corsproxy"]
