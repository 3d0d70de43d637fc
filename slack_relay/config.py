from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AGENT_ID = "default_agent"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    slack_signing_secret: str = ""
    slack_agent_id: str = DEFAULT_AGENT_ID
    slack_bot_name: str | None = None
    slack_bot_token: str = ""
    slack_webhook_url: str = ""
    slack_api_base_url: str = "https://slack.com"
    slack_post_message_path: str = "/api/chat.postMessage"

    agent_timeout_seconds: float = 15.0
    reply_in_thread: bool = False
    ignore_slack_retries: bool = True

    llm_api_key: str = ""
    llm_model: str = "gpt-4o-mini"
    llm_base_url: str | None = None
    llm_system_prompt: str = "You are a concise and helpful Slack assistant."

    webhook_path: str = "/slack/events"
    webhook_worker_count: int = 2
    webhook_queue_maxsize: int = 1000
    log_level: str = "INFO"


class BotConfig(BaseModel):
    """Read-only view of the bot settings, built once per webhook request."""

    model_config = ConfigDict(frozen=True)

    signing_secret: str = ""
    agent_id: str = DEFAULT_AGENT_ID
    bot_name: str | None = None

    @classmethod
    def from_settings(cls, source: Settings) -> "BotConfig":
        return cls(
            signing_secret=source.slack_signing_secret,
            agent_id=source.slack_agent_id.strip() or DEFAULT_AGENT_ID,
            bot_name=source.slack_bot_name or None,
        )


settings = Settings()
