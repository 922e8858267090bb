"""Connectors: adapters de borda para agregadores externos.

Estrutura:
- casso/: webhook de transações bancárias (assinatura + payload)
"""

__all__: list[str] = []
