"""Agregador de settings do serviço de webhook LINE.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Channel-specific settings
from config.settings.line import (
    LINE_API_BASE_URL,
    LineSettings,
    get_line_settings,
)

# Rate limit
from config.settings.rate_limit import (
    RateLimitSettings,
    get_rate_limit_settings,
)

__all__ = [
    # Constants
    "LINE_API_BASE_URL",
    # Base
    "BaseSettings",
    "Environment",
    # Channels
    "LineSettings",
    # Rate limit
    "RateLimitSettings",
    "get_base_settings",
    "get_line_settings",
    "get_rate_limit_settings",
]
