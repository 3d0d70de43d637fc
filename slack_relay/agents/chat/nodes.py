import re
from typing import Any, Callable

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from slack_relay.agents.chat.state import ChatState
from slack_relay.config import Settings

_USER_MENTION = re.compile(r"<@[A-Z0-9]+(?:\|[^>]*)?>")


def build_chat_model(source: Settings) -> ChatOpenAI:
    return ChatOpenAI(
        api_key=source.llm_api_key,
        model=source.llm_model,
        base_url=source.llm_base_url,
        temperature=0.2,
        timeout=source.agent_timeout_seconds,
    )


def check_message_node(state: ChatState) -> ChatState:
    # Slack keeps the "<@U123>" mention token in the text; the model does not need it.
    text = _USER_MENTION.sub("", state.get("incoming_text") or "").strip()
    state["incoming_text"] = text
    state["should_reply"] = bool(text)
    return state


def make_call_model_node(llm: Any) -> Callable[[ChatState], ChatState]:
    def call_model_node(state: ChatState) -> ChatState:
        chat_messages = [
            SystemMessage(content=state.get("system_prompt", "")),
            HumanMessage(content=state.get("incoming_text", "")),
        ]
        response = llm.invoke(chat_messages)
        state["reply_text"] = str(response.content)
        return state

    return call_model_node
