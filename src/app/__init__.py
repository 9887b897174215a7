"""App — orquestração do webhook LINE.

Subpastas:
- bootstrap/: composition root (inicialização, contexto, adapters)
- coordinators/: pipeline de ingestão (assinatura → rate limit → decodificação → despacho)
- services/: despacho de eventos e respostas fixas
- infra/: implementações concretas (rate limiter em memória)
- protocols/: contratos dos colaboradores
- domain/: eventos recebidos e mensagens enviadas
- observability/: correlation_id e métricas via logs
- constants/: constantes da aplicação

Padrão: app executa; api adapta; config configura; utils apoia.
"""
