"""API — camada de borda do webhook LINE.

Responsabilidades:
- Receber o POST do LINE e validar a assinatura sobre o corpo cru
- Decodificar o lote de eventos para modelos internos
- Construir payloads e chamar o Messaging API
- Aplicar validações e limites da API

Subpastas:
- connectors/: assinatura, decodificação e cliente HTTP do LINE
- payload_builders/: construção de payloads para o Messaging API
- validators/: validação de conteúdo e identificadores
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: regras de despacho nem orquestração do pipeline.
"""
