import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from slack_relay.agents.chat.agent import GraphChatAgent
from slack_relay.agents.invoker import AgentInvoker
from slack_relay.agents.registry import AgentRegistry
from slack_relay.config import DEFAULT_AGENT_ID, BotConfig, Settings, settings
from slack_relay.errors import AuthenticationError, MalformedPayloadError
from slack_relay.processing.async_webhook import AsyncWebhookProcessor
from slack_relay.slack.client import SlackClient
from slack_relay.slack.event_types import (
    FALLBACK_HEADER_SIGNATURE,
    FALLBACK_HEADER_TIMESTAMP,
    HEADER_RETRY_NUM,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
)
from slack_relay.slack.events import RequestState, SlackEventDispatcher, parse_payload
from slack_relay.slack.signature import SignatureVerifier
from slack_relay.workflows.mention.workflow import MentionWorkflow

logger = logging.getLogger("slack_relay")


def build_default_registry(source: Settings) -> AgentRegistry:
    registry = AgentRegistry()
    registry.register(
        DEFAULT_AGENT_ID,
        lambda: GraphChatAgent.from_settings(source),
        label="Default chat agent",
    )
    return registry


def create_app(
    source: Settings = settings,
    registry: AgentRegistry | None = None,
    slack_client: SlackClient | None = None,
    webhook_processor: AsyncWebhookProcessor | None = None,
) -> FastAPI:
    registry = registry or build_default_registry(source)
    invoker = AgentInvoker(registry, timeout_seconds=source.agent_timeout_seconds)
    if webhook_processor is None:
        mention_workflow = MentionWorkflow(
            invoker,
            slack_client or SlackClient(source),
            reply_in_thread=source.reply_in_thread,
        )
        webhook_processor = AsyncWebhookProcessor(
            mention_workflow=mention_workflow,
            worker_count=source.webhook_worker_count,
            max_queue_size=source.webhook_queue_maxsize,
        )
    dispatcher = SlackEventDispatcher()

    if not registry.exists(source.slack_agent_id):
        logger.warning(
            "Configured agent '%s' is not registered. Available: %s",
            source.slack_agent_id,
            ", ".join(registry.definitions()) or "none",
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await webhook_processor.start()
        try:
            yield
        finally:
            await webhook_processor.stop()

    app = FastAPI(title="Slack Agent Relay", version="0.1.0", lifespan=lifespan)

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(source.webhook_path)
    async def slack_events(request: Request):
        config = BotConfig.from_settings(source)
        body = await request.body()
        headers = request.headers
        logger.debug("Slack request %s", RequestState.RECEIVED.value)

        # Authenticity must be settled before anything reads the payload.
        verifier = SignatureVerifier(config.signing_secret)
        try:
            verifier.authenticate(
                body,
                headers.get(HEADER_TIMESTAMP) or headers.get(FALLBACK_HEADER_TIMESTAMP),
                headers.get(HEADER_SIGNATURE) or headers.get(FALLBACK_HEADER_SIGNATURE),
            )
        except AuthenticationError as exc:
            logger.warning("Slack request %s: %s", RequestState.REJECTED.value, exc)
            return PlainTextResponse("Invalid signature", status_code=403)
        logger.debug("Slack request %s", RequestState.VERIFIED.value)

        try:
            payload = parse_payload(body)
        except MalformedPayloadError as exc:
            logger.warning("Slack request %s: %s", RequestState.REJECTED.value, exc)
            return PlainTextResponse("Invalid JSON", status_code=400)

        result = dispatcher.dispatch(payload)
        if result.state == RequestState.MENTION_PROCESSING and result.mention is not None:
            retry_num = headers.get(HEADER_RETRY_NUM)
            if source.ignore_slack_retries and retry_num:
                logger.info("Acknowledging Slack retry #%s without reprocessing", retry_num)
            elif not webhook_processor.enqueue(result.mention, config):
                logger.error("app_mention accepted but dropped from queue. channel=%s", result.mention.channel)

        logger.debug("Slack request %s -> %s", result.state.value, RequestState.RESPONDED.value)
        return PlainTextResponse(result.body, status_code=result.status_code)

    return app


logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

app = create_app()
