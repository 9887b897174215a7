"""Política de conteúdo para texto recebido."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from api.validators.line.limits import (
    ALLOWED_CONTROL_CHARS,
    DEFAULT_FORBIDDEN_WORDS,
    MAX_TEXT_LENGTH,
)
from app.protocols.validator import ValidationError


class TextContentValidator:
    """Valida tamanho, palavras proibidas e caracteres de controle.

    Ordem das checagens: vazio, tamanho máximo, tamanho mínimo,
    palavras proibidas (substring, sem diferenciar caixa), controle.
    """

    def __init__(
        self,
        max_length: int = MAX_TEXT_LENGTH,
        min_length: int = 0,
        forbidden_words: Iterable[str] = DEFAULT_FORBIDDEN_WORDS,
        allow_empty: bool = True,
    ) -> None:
        self.max_length = max_length
        self.min_length = min_length
        self.forbidden_words = frozenset(word.lower() for word in forbidden_words)
        self.allow_empty = allow_empty

    def validate(self, text: str) -> None:
        """Valida o texto.

        Raises:
            ValidationError: code em {"empty", "too_long", "too_short",
                "forbidden", "invalid_characters"}
        """
        if not text:
            if self.allow_empty:
                return
            raise ValidationError("empty", "Input is empty")

        length = len(text)
        if length > self.max_length:
            raise ValidationError("too_long", f"Input too long: {length} > {self.max_length}")

        if length < self.min_length:
            raise ValidationError("too_short", f"Input too short: {length} < {self.min_length}")

        lowered = text.lower()
        if any(word in lowered for word in self.forbidden_words):
            raise ValidationError("forbidden", "Contains forbidden content")

        if any(_is_disallowed_control(ch) for ch in text):
            raise ValidationError("invalid_characters", "Contains invalid characters")


def _is_disallowed_control(ch: str) -> bool:
    return unicodedata.category(ch) == "Cc" and ch not in ALLOWED_CONTROL_CHARS
