from __future__ import annotations

from typing import Any

from slack_relay.agents.chat.graph import build_chat_graph
from slack_relay.agents.chat.nodes import build_chat_model
from slack_relay.config import Settings


class GraphChatAgent:
    """Single-turn chat agent backed by the check_message -> call_model graph."""

    def __init__(self, llm: Any, system_prompt: str) -> None:
        self.graph = build_chat_graph(llm)
        self.system_prompt = system_prompt
        self._text = ""

    @classmethod
    def from_settings(cls, source: Settings) -> GraphChatAgent:
        return cls(build_chat_model(source), source.llm_system_prompt)

    def submit_text(self, text: str) -> None:
        self._text = text

    def get_answer(self) -> str:
        state = {
            "incoming_text": self._text,
            "system_prompt": self.system_prompt,
            "should_reply": False,
            "reply_text": "",
        }
        result = self.graph.invoke(state)
        if not result.get("should_reply"):
            return ""
        return str(result.get("reply_text", "")).strip()
