"""Builders de corpo de requisição para o Messaging API."""

from api.payload_builders.line.messages import (
    build_multicast_payload,
    build_push_payload,
    build_reply_payload,
    serialize_messages,
)

__all__ = [
    "build_multicast_payload",
    "build_push_payload",
    "build_reply_payload",
    "serialize_messages",
]
