from typing import Any

import requests

from slack_relay.config import Settings
from slack_relay.errors import DeliveryError


class SlackClient:
    """Posts chat messages with the bot token, or an incoming webhook when no token is set."""

    def __init__(self, source: Settings) -> None:
        self.bot_token = source.slack_bot_token
        self.webhook_url = source.slack_webhook_url
        self.post_message_url = (
            f"{source.slack_api_base_url.rstrip('/')}"
            f"{source.slack_post_message_path}"
        )

    def send_message(
        self,
        text: str,
        channel: str,
        display_name: str | None = None,
        thread_ts: str | None = None,
    ) -> dict[str, Any]:
        if self.bot_token:
            payload: dict[str, Any] = {"channel": channel, "text": text}
            if display_name:
                payload["username"] = display_name
            if thread_ts:
                payload["thread_ts"] = thread_ts
            headers = {
                "Authorization": f"Bearer {self.bot_token}",
                "Content-Type": "application/json; charset=utf-8",
            }
            data = self._post(self.post_message_url, payload, headers)
            if not data.get("ok", False):
                raise DeliveryError(f"chat.postMessage failed: {data.get('error', 'unknown_error')}")
            return data

        if self.webhook_url:
            payload = {"text": text, "channel": channel}
            if display_name:
                payload["username"] = display_name
            if thread_ts:
                payload["thread_ts"] = thread_ts
            return self._post(self.webhook_url, payload, {"Content-Type": "application/json"})

        raise DeliveryError("no Slack bot token or webhook URL configured")

    def _post(self, url: str, payload: dict[str, Any], headers: dict[str, str]) -> dict[str, Any]:
        try:
            response = requests.post(url, json=payload, headers=headers, timeout=15)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DeliveryError(f"Slack request failed: {exc}") from exc

        # Incoming webhooks answer with a plain "ok" body, not JSON.
        try:
            return response.json() if response.content else {"ok": True}
        except ValueError:
            return {"ok": True}
