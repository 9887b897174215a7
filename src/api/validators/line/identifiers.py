"""Validação estrutural de identificadores emitidos pelo LINE."""

from __future__ import annotations

import re

from api.validators.line.limits import (
    MAX_REPLY_TOKEN_LENGTH,
    MIN_REPLY_TOKEN_LENGTH,
    USER_ID_LENGTH,
    USER_ID_PREFIX,
)
from app.protocols.validator import ValidationError

_REPLY_TOKEN_CHARS = re.compile(r"^[A-Za-z0-9_-]+$")
_HEX_CHARS = re.compile(r"^[0-9A-Fa-f]+$")


def validate_reply_token(reply_token: str) -> None:
    """Valida reply token: não vazio, 10..100 chars, [A-Za-z0-9_-].

    Raises:
        ValidationError: code em {"empty", "invalid_length", "invalid_characters"}
    """
    if not reply_token:
        raise ValidationError("empty", "Reply token is empty")

    length = len(reply_token)
    if not MIN_REPLY_TOKEN_LENGTH <= length <= MAX_REPLY_TOKEN_LENGTH:
        raise ValidationError(
            "invalid_length",
            f"Reply token length {length} outside "
            f"[{MIN_REPLY_TOKEN_LENGTH}, {MAX_REPLY_TOKEN_LENGTH}]",
        )

    if not _REPLY_TOKEN_CHARS.match(reply_token):
        raise ValidationError("invalid_characters", "Reply token contains invalid characters")


def validate_user_id(user_id: str) -> None:
    """Valida user id: "U" seguido de 32 dígitos hexadecimais.

    Raises:
        ValidationError: code em {"empty", "invalid_characters"}
    """
    if not user_id:
        raise ValidationError("empty", "User id is empty")

    if (
        len(user_id) != USER_ID_LENGTH
        or not user_id.startswith(USER_ID_PREFIX)
        or not _HEX_CHARS.match(user_id[1:])
    ):
        raise ValidationError("invalid_characters", "User id format is invalid")
