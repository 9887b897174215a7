"""Limites do Messaging API do LINE."""

from __future__ import annotations

MAX_MESSAGES_PER_REQUEST = 5
MAX_BUTTON_ACTIONS = 4
MAX_MULTICAST_RECIPIENTS = 500
