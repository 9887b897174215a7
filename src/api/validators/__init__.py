"""Validators por canal — validação de conteúdo e identificadores.

Estrutura:
- line/: texto recebido, reply token, user id, mascaramento de PII
"""

__all__: list[str] = []
