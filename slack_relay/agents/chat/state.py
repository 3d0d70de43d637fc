from typing import TypedDict


class ChatState(TypedDict):
    incoming_text: str
    system_prompt: str
    should_reply: bool
    reply_text: str
