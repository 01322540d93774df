"""Connectors — adapters de borda para APIs externas.

Estrutura:
- http_base.py: cliente HTTP compartilhado (timeouts, retry idempotente)
- tallbob/: provedor SMS/MMS Tall Bob
- highlevel/: CRM HighLevel (contatos, conversas, campanhas)

Cada sistema externo tem seu próprio connector, isolando domínios de falha.
"""

__all__: list[str] = []
