from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from slack_relay.agents.types import AgentHandle
from slack_relay.errors import AgentNotFoundError

logger = logging.getLogger("slack_relay")

AgentFactory = Callable[[], AgentHandle]


@dataclass(frozen=True)
class AgentDefinition:
    agent_id: str
    label: str
    factory: AgentFactory


class AgentRegistry:
    """Resolves agents by string id. Each ``create`` call builds a fresh handle."""

    def __init__(self) -> None:
        self._definitions: dict[str, AgentDefinition] = {}

    def register(self, agent_id: str, factory: AgentFactory, label: str = "") -> None:
        if agent_id in self._definitions:
            logger.warning("Replacing registered agent '%s'", agent_id)
        self._definitions[agent_id] = AgentDefinition(agent_id, label or agent_id, factory)

    def exists(self, agent_id: str) -> bool:
        return agent_id in self._definitions

    def create(self, agent_id: str) -> AgentHandle:
        definition = self._definitions.get(agent_id)
        if definition is None:
            raise AgentNotFoundError(agent_id)
        return definition.factory()

    def definitions(self) -> dict[str, str]:
        return {agent_id: d.label for agent_id, d in self._definitions.items()}
