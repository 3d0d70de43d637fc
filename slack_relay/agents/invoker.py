from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass

from slack_relay.agents.types import AgentResolver
from slack_relay.errors import AgentInvocationError, AgentNotFoundError, SlackRelayError

logger = logging.getLogger("slack_relay")


@dataclass(frozen=True)
class AgentResult:
    text: str = ""
    error: SlackRelayError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AgentInvoker:
    """Runs one mention through the configured agent.

    ``invoke`` never raises: an unknown agent id or any failure inside the
    agent comes back as ``AgentResult.error`` so the webhook always ends in 200.
    """

    def __init__(
        self,
        resolver: AgentResolver,
        timeout_seconds: float = 15.0,
    ) -> None:
        self.resolver = resolver
        self.timeout_seconds = timeout_seconds

    def invoke(self, agent_id: str, text: str) -> AgentResult:
        try:
            if not self.resolver.exists(agent_id):
                logger.error("AI agent '%s' not found.", agent_id)
                return AgentResult(error=AgentNotFoundError(agent_id))
            answer = self._run_with_timeout(agent_id, text)
        except FutureTimeoutError:
            logger.error("AI agent '%s' timed out after %.1fs", agent_id, self.timeout_seconds)
            return AgentResult(error=AgentInvocationError(f"agent '{agent_id}' timed out"))
        except AgentNotFoundError as exc:
            logger.error("AI agent '%s' not found.", agent_id)
            return AgentResult(error=exc)
        except Exception as exc:
            logger.exception("Error processing AI request with agent '%s'", agent_id)
            return AgentResult(error=AgentInvocationError(str(exc)))
        return AgentResult(text=answer)

    def _run_agent(self, agent_id: str, text: str) -> str:
        agent = self.resolver.create(agent_id)
        agent.submit_text(text)
        return str(agent.get_answer() or "")

    def _run_with_timeout(self, agent_id: str, text: str) -> str:
        # One worker per call: a hung agent thread must not hold a slot other mentions need.
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"agent-{agent_id}")
        future = executor.submit(self._run_agent, agent_id, text)
        try:
            return future.result(timeout=self.timeout_seconds)
        finally:
            future.cancel()
            executor.shutdown(wait=False)
