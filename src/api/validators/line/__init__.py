"""Validadores do canal LINE.

Uso:
    from api.validators.line import TextContentValidator, validate_reply_token

    TextContentValidator().validate(text)
    validate_reply_token(event.reply_token)
"""

from api.validators.line.identifiers import validate_reply_token, validate_user_id
from api.validators.line.masking import mask_token, mask_user_id
from api.validators.line.text import TextContentValidator

__all__ = [
    "TextContentValidator",
    "mask_token",
    "mask_user_id",
    "validate_reply_token",
    "validate_user_id",
]
