"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook, health)
- Leitura inicial da request (headers, corpo cru, endereço do chamador)
- Delegação para o IngestionPipeline
- Respostas HTTP apropriadas

Estrutura:
- routes/line/: webhook do LINE (POST /webhook)
- routes/health/: liveness (GET /health)

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
