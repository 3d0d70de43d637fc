from typing import Any

from langgraph.graph import END, START, StateGraph

from slack_relay.agents.chat.nodes import check_message_node, make_call_model_node
from slack_relay.agents.chat.state import ChatState


def _route_after_check(state: ChatState) -> str:
    return "call_model" if state.get("should_reply") else "end"


def build_chat_graph(llm: Any):
    graph = StateGraph(ChatState)

    graph.add_node("check_message", check_message_node)
    graph.add_node("call_model", make_call_model_node(llm))

    graph.add_edge(START, "check_message")
    graph.add_conditional_edges(
        "check_message",
        _route_after_check,
        {
            "call_model": "call_model",
            "end": END,
        },
    )
    graph.add_edge("call_model", END)

    return graph.compile()
