# tests/test_events.py
"""Tests for payload parsing and event dispatch."""

import pytest

from slack_relay.errors import MalformedPayloadError
from slack_relay.slack.events import RequestState, SlackEventDispatcher, parse_payload


@pytest.fixture
def dispatcher() -> SlackEventDispatcher:
    return SlackEventDispatcher()


class TestParsePayload:
    def test_valid_object(self):
        assert parse_payload(b'{"type": "url_verification"}') == {"type": "url_verification"}

    @pytest.mark.parametrize("body", [b"", b"not json", b"{", b"[1, 2]", b'"text"', b"null", b"{}", b"\xff\xfe"])
    def test_malformed_bodies_rejected(self, body):
        with pytest.raises(MalformedPayloadError):
            parse_payload(body)


class TestSlackEventDispatcher:
    def test_url_verification_echoes_challenge(self, dispatcher):
        result = dispatcher.dispatch({"type": "url_verification", "challenge": "abc123"})
        assert result.state == RequestState.HANDSHAKE
        assert result.status_code == 200
        assert result.body == "abc123"

    @pytest.mark.parametrize(
        "challenge",
        ["abc123", "  padded  ", "3eZbrw1aBm2rZgRNFdxV2595E9CY3gmdALWMmHkvFXO7tYXAYM8P", "ünïcødé/+=", ""],
    )
    def test_challenge_echoed_verbatim_regardless_of_other_fields(self, dispatcher, challenge):
        payload = {
            "type": "url_verification",
            "challenge": challenge,
            "token": "Jhj5dZrVaK7ZwHHjRyZWjbDl",
            "event": {"type": "app_mention", "text": "ignored", "channel": "C1"},
        }
        assert dispatcher.dispatch(payload).body == challenge

    @pytest.mark.parametrize("event", ["junk", 42, ["a", "b"], None])
    def test_challenge_echoed_when_event_field_is_not_an_object(self, dispatcher, event):
        payload = {"type": "url_verification", "challenge": "abc123", "event": event}
        result = dispatcher.dispatch(payload)
        assert result.state == RequestState.HANDSHAKE
        assert result.body == "abc123"

    def test_missing_challenge_echoes_empty_body(self, dispatcher):
        result = dispatcher.dispatch({"type": "url_verification"})
        assert result.state == RequestState.HANDSHAKE
        assert result.body == ""

    def test_app_mention_routed_for_processing(self, dispatcher):
        payload = {
            "type": "event_callback",
            "event": {"type": "app_mention", "text": "<@U1> hello", "channel": "C1", "ts": "1.2"},
        }
        result = dispatcher.dispatch(payload)
        assert result.state == RequestState.MENTION_PROCESSING
        assert result.body == "OK"
        assert result.mention is not None
        assert result.mention.text == "<@U1> hello"
        assert result.mention.channel == "C1"
        assert result.mention.ts == "1.2"

    def test_app_mention_from_bot_ignored(self, dispatcher):
        payload = {
            "type": "event_callback",
            "event": {"type": "app_mention", "text": "hello", "channel": "C1", "bot_id": "B1"},
        }
        result = dispatcher.dispatch(payload)
        assert result.state == RequestState.IGNORED
        assert result.mention is None
        assert result.body == "OK"

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "event_callback", "event": {"type": "message", "text": "hi", "channel": "C1"}},
            {"type": "event_callback"},
            {"type": "event_callback", "event": "not-an-object"},
            {"type": "app_rate_limited"},
            {"type": 42},
            {"token": "no type at all"},
        ],
    )
    def test_other_payloads_acknowledged_without_action(self, dispatcher, payload):
        result = dispatcher.dispatch(payload)
        assert result.state == RequestState.IGNORED
        assert result.status_code == 200
        assert result.body == "OK"
        assert result.mention is None

    def test_null_text_and_channel_coerced_to_empty(self, dispatcher):
        payload = {"type": "event_callback", "event": {"type": "app_mention", "text": None, "channel": None}}
        result = dispatcher.dispatch(payload)
        assert result.mention is not None
        assert result.mention.text == ""
        assert result.mention.channel == ""
