"""App: núcleo do serviço (domínio, casos de uso e infraestrutura).

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos puros (pedido, código, QR, eventos)
- use_cases/: casos de uso (criação, consulta, conciliação)
- infra/: implementações concretas de IO (stores, notificações, crypto)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; utils apoia.
"""
