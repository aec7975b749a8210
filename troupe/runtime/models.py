"""Message models shared by the runtime, the front-end service and the chat bridge."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class IncomingMessage(BaseModel):
    """A user message addressed to one agent.

    Field names on the wire are camelCase (`userId`, `userName`, `roomId`).
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Message text")
    user_id: str = Field(default="user", alias="userId")
    user_name: str = Field(default="User", alias="userName")
    room_id: str | None = Field(default=None, alias="roomId")


class ResponseContent(BaseModel):
    """One reply from an agent. Engines may attach extra fields (action, attachments)."""

    model_config = ConfigDict(extra="allow")

    text: str = Field(..., description="Reply text")
    action: str | None = Field(default=None)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
