"""Limites de validação do canal LINE."""

from __future__ import annotations

# Texto recebido
MAX_TEXT_LENGTH = 1000
DEFAULT_FORBIDDEN_WORDS = frozenset({"spam", "lixo", "propaganda"})
ALLOWED_CONTROL_CHARS = frozenset({"\n", "\r", "\t"})

# Reply token
MIN_REPLY_TOKEN_LENGTH = 10
MAX_REPLY_TOKEN_LENGTH = 100

# User id: "U" + 32 hex
USER_ID_LENGTH = 33
USER_ID_PREFIX = "U"
