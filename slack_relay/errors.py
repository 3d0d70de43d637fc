class SlackRelayError(Exception):
    """Base class for every failure raised inside the relay."""


class AuthenticationError(SlackRelayError):
    """Missing, stale or forged request signature. Answered with HTTP 403."""


class MalformedPayloadError(SlackRelayError):
    """Request body is not a usable JSON object. Answered with HTTP 400."""


class AgentNotFoundError(SlackRelayError):
    def __init__(self, agent_id: str) -> None:
        super().__init__(f"AI agent '{agent_id}' not found")
        self.agent_id = agent_id


class AgentInvocationError(SlackRelayError):
    """The agent raised or timed out while producing an answer."""


class DeliveryError(SlackRelayError):
    """Posting a chat message back to Slack failed."""
