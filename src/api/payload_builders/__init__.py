"""Payload builders por canal — construção de payloads para APIs externas.

Estrutura:
- line/: Messaging API (reply, push, multicast)
"""

__all__: list[str] = []
