from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from slack_relay.errors import MalformedPayloadError
from slack_relay.models import InboundEvent, InnerEvent
from slack_relay.slack.event_types import (
    EVENT_APP_MENTION,
    EVENT_CALLBACK,
    EVENT_URL_VERIFICATION,
)

logger = logging.getLogger("slack_relay")

ACK_BODY = "OK"


class RequestState(str, Enum):
    RECEIVED = "received"
    VERIFIED = "verified"
    HANDSHAKE = "handshake"
    IGNORED = "ignored"
    MENTION_PROCESSING = "mention_processing"
    RESPONDED = "responded"
    REJECTED = "rejected"


@dataclass(frozen=True)
class DispatchResult:
    state: RequestState
    status_code: int = 200
    body: str = ACK_BODY
    mention: InnerEvent | None = None


def parse_payload(body: bytes) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise MalformedPayloadError("body is not valid JSON") from exc
    if not isinstance(data, dict) or not data:
        raise MalformedPayloadError("body is not a JSON object")
    return data


def _inner_event(raw: Any) -> InnerEvent:
    if not isinstance(raw, dict):
        return InnerEvent()
    bot_id = raw.get("bot_id")
    return InnerEvent(
        type=str(raw.get("type", "") or ""),
        text=str(raw.get("text", "") or ""),
        channel=str(raw.get("channel", "") or ""),
        bot_id=str(bot_id) if bot_id is not None else None,
        user=str(raw.get("user", "") or "") or None,
        ts=str(raw.get("ts", "") or "") or None,
        thread_ts=str(raw.get("thread_ts", "") or "") or None,
    )


def _challenge_text(challenge: Any) -> str:
    if challenge is None:
        return ""
    if isinstance(challenge, str):
        return challenge
    return json.dumps(challenge)


class SlackEventDispatcher:
    """Routes a verified Slack payload to handshake, mention or ignore."""

    def dispatch(self, payload: dict[str, Any]) -> DispatchResult:
        try:
            inbound = InboundEvent.model_validate(payload)
        except ValidationError:
            logger.info("Ignoring Slack payload with unexpected shape")
            return DispatchResult(state=RequestState.IGNORED)

        if inbound.type == EVENT_URL_VERIFICATION:
            return DispatchResult(
                state=RequestState.HANDSHAKE,
                body=_challenge_text(inbound.challenge),
            )

        if inbound.type == EVENT_CALLBACK:
            event = _inner_event(inbound.event)
            if event.type == EVENT_APP_MENTION:
                if event.is_self_originated:
                    logger.debug("Skipping app_mention from bot_id=%s", event.bot_id)
                    return DispatchResult(state=RequestState.IGNORED)
                return DispatchResult(state=RequestState.MENTION_PROCESSING, mention=event)
            logger.debug("No handler for callback event type=%s", event.type)
            return DispatchResult(state=RequestState.IGNORED)

        logger.info("No handler for Slack payload type=%s", inbound.type)
        return DispatchResult(state=RequestState.IGNORED)
