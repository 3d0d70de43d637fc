from typing import Any

from pydantic import BaseModel, ConfigDict


class InnerEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = ""
    text: str = ""
    channel: str = ""
    bot_id: str | None = None
    user: str | None = None
    ts: str | None = None
    thread_ts: str | None = None

    @property
    def is_self_originated(self) -> bool:
        return self.bot_id is not None


class InboundEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    challenge: Any = None
    event: Any = None
