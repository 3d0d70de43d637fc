from __future__ import annotations

import logging

from slack_relay.agents.invoker import AgentInvoker
from slack_relay.config import BotConfig
from slack_relay.errors import AgentNotFoundError, DeliveryError
from slack_relay.models import InnerEvent
from slack_relay.slack.client import SlackClient

logger = logging.getLogger("slack_relay")

AGENT_NOT_FOUND_TEXT = "Error: I seem to have lost my brain (Agent not found)."


class MentionWorkflow:
    def __init__(
        self,
        invoker: AgentInvoker,
        slack_client: SlackClient,
        reply_in_thread: bool = False,
    ) -> None:
        self.invoker = invoker
        self.slack_client = slack_client
        self.reply_in_thread = reply_in_thread

    def process(self, event: InnerEvent, config: BotConfig) -> None:
        result = self.invoker.invoke(config.agent_id, event.text)

        if isinstance(result.error, AgentNotFoundError):
            # The operator sees the misconfiguration in the same channel.
            self._send(AGENT_NOT_FOUND_TEXT, event, config)
            return
        if result.error is not None:
            logger.error("Mention in channel=%s got no answer: %s", event.channel, result.error)
            return
        if not result.text:
            logger.info("Agent '%s' returned an empty answer for channel=%s", config.agent_id, event.channel)
            return

        self._send(result.text, event, config)

    def _send(self, text: str, event: InnerEvent, config: BotConfig) -> None:
        thread_ts = (event.thread_ts or event.ts) if self.reply_in_thread else None
        try:
            self.slack_client.send_message(
                text,
                event.channel,
                display_name=config.bot_name,
                thread_ts=thread_ts,
            )
        except DeliveryError:
            logger.exception("Failed to deliver reply to channel=%s", event.channel)
