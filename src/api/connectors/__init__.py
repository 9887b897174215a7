"""Connectors por canal — adapters de borda para APIs externas.

Estrutura:
- line/: LINE Messaging API (webhook + envio)
"""

__all__: list[str] = []
