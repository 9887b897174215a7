"""Contratos de entrada do webhook LINE (eventos decodificados).

União fechada de eventos discriminada pelo campo `type`. Tipos de evento
desconhecidos falham na decodificação, nunca no despacho.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Base: aceita camelCase do fio e snake_case no código."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


# --- Source ---------------------------------------------------------------


class UserSource(_WireModel):
    type: Literal["user"] = "user"
    user_id: str = Field(alias="userId")


class GroupSource(_WireModel):
    type: Literal["group"] = "group"
    group_id: str = Field(alias="groupId")
    user_id: str | None = Field(default=None, alias="userId")


class RoomSource(_WireModel):
    type: Literal["room"] = "room"
    room_id: str = Field(alias="roomId")
    user_id: str | None = Field(default=None, alias="userId")


Source = Annotated[UserSource | GroupSource | RoomSource, Field(discriminator="type")]


# --- Conteúdo de mensagem -------------------------------------------------


class ContentProvider(_WireModel):
    """Origem do binário de uma imagem (servidores LINE ou URL externa)."""

    type: Literal["line", "external"]
    original_content_url: str | None = Field(default=None, alias="originalContentUrl")


class TextContent(_WireModel):
    type: Literal["text"] = "text"
    text: str


class StickerContent(_WireModel):
    type: Literal["sticker"] = "sticker"
    package_id: str = Field(alias="packageId")
    sticker_id: str = Field(alias="stickerId")


class ImageContent(_WireModel):
    type: Literal["image"] = "image"
    content_provider: ContentProvider = Field(alias="contentProvider")


MessageContent = Annotated[
    TextContent | StickerContent | ImageContent,
    Field(discriminator="type"),
]


# --- Eventos --------------------------------------------------------------


class _EventBase(_WireModel):
    timestamp: int
    source: Source
    mode: str


class MessageEvent(_EventBase):
    type: Literal["message"] = "message"
    reply_token: str = Field(alias="replyToken")
    message: MessageContent


class FollowEvent(_EventBase):
    type: Literal["follow"] = "follow"
    reply_token: str = Field(alias="replyToken")


class UnfollowEvent(_EventBase):
    """Sem reply token: não há como responder."""

    type: Literal["unfollow"] = "unfollow"


class JoinEvent(_EventBase):
    type: Literal["join"] = "join"
    reply_token: str = Field(alias="replyToken")


class LeaveEvent(_EventBase):
    """Sem reply token: não há como responder."""

    type: Literal["leave"] = "leave"


class PostbackData(_WireModel):
    data: str


class PostbackEvent(_EventBase):
    type: Literal["postback"] = "postback"
    reply_token: str = Field(alias="replyToken")
    postback: PostbackData


InboundEvent = Annotated[
    MessageEvent | FollowEvent | UnfollowEvent | JoinEvent | LeaveEvent | PostbackEvent,
    Field(discriminator="type"),
]


class WebhookBatch(_WireModel):
    """Corpo do POST /webhook: eventos na ordem de chegada."""

    destination: str
    events: list[InboundEvent] = Field(default_factory=list)


def source_user_id(source: UserSource | GroupSource | RoomSource) -> str | None:
    """Retorna o userId da origem, quando presente."""
    return source.user_id
