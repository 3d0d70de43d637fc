from __future__ import annotations

from typing import Protocol


class AgentHandle(Protocol):
    def submit_text(self, text: str) -> None:
        ...

    def get_answer(self) -> str:
        ...


class AgentResolver(Protocol):
    def exists(self, agent_id: str) -> bool:
        ...

    def create(self, agent_id: str) -> AgentHandle:
        ...
