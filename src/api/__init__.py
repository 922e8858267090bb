"""API: camada de borda HTTP.

Responsabilidades:
- Receber requests de clientes e do agregador bancário (webhooks)
- Validar assinaturas e payloads
- Converter payloads externos em modelos de domínio
- Mapear exceções de domínio/infra para respostas HTTP

Subpastas:
- connectors/: adapters por agregador (Casso)
- routes/: endpoints HTTP (pedidos, webhook, realtime, health)

NÃO PODE conter: regras de conciliação, acesso direto ao store.
"""
