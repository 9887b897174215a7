"""Mascaramento de dados sensíveis para logs."""

from __future__ import annotations


def mask_token(token: str) -> str:
    """Mascara tokens/secrets: 4 primeiros chars + "****"."""
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}...****"


def mask_user_id(user_id: str | None) -> str:
    """Mascara user id mantendo 3 chars de cada ponta."""
    if not user_id:
        return "unknown"
    if len(user_id) <= 6:
        return "*" * len(user_id)
    return f"{user_id[:3]}...{user_id[-3:]}"
