"""Contratos de saída: mensagens enviadas ao Messaging API.

Serialização com os nomes camelCase do fio via
`model_dump(by_alias=True, exclude_none=True)`.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.constants.line import MAX_BUTTON_ACTIONS


class _OutgoingModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_wire(self) -> dict[str, Any]:
        """Dict pronto para o corpo JSON da API."""
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Ações de template ----------------------------------------------------


class MessageAction(_OutgoingModel):
    type: Literal["message"] = "message"
    label: str
    text: str


class PostbackAction(_OutgoingModel):
    type: Literal["postback"] = "postback"
    label: str
    data: str
    display_text: str | None = Field(default=None, alias="displayText")


class UriAction(_OutgoingModel):
    type: Literal["uri"] = "uri"
    label: str
    uri: str


Action = Annotated[MessageAction | PostbackAction | UriAction, Field(discriminator="type")]


class ButtonsTemplate(_OutgoingModel):
    """Layout "buttons": texto + lista ordenada de ações."""

    type: Literal["buttons"] = "buttons"
    text: str
    actions: list[Action] = Field(min_length=1, max_length=MAX_BUTTON_ACTIONS)
    title: str | None = None
    thumbnail_image_url: str | None = Field(default=None, alias="thumbnailImageUrl")
    image_aspect_ratio: str | None = Field(default=None, alias="imageAspectRatio")
    image_size: str | None = Field(default=None, alias="imageSize")
    image_background_color: str | None = Field(default=None, alias="imageBackgroundColor")


# --- Mensagens --------------------------------------------------------------


class TextMessage(_OutgoingModel):
    type: Literal["text"] = "text"
    text: str


class StickerMessage(_OutgoingModel):
    type: Literal["sticker"] = "sticker"
    package_id: str = Field(alias="packageId")
    sticker_id: str = Field(alias="stickerId")


class TemplateMessage(_OutgoingModel):
    type: Literal["template"] = "template"
    alt_text: str = Field(alias="altText")
    template: ButtonsTemplate


OutgoingMessage = Annotated[
    TextMessage | StickerMessage | TemplateMessage,
    Field(discriminator="type"),
]


def text_message(text: str) -> TextMessage:
    """Atalho para mensagem de texto."""
    return TextMessage(text=text)


def sticker_message(package_id: str, sticker_id: str) -> StickerMessage:
    """Atalho para figurinha."""
    return StickerMessage(package_id=package_id, sticker_id=sticker_id)
