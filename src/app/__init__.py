"""App — coração do sistema: orquestração, casos de uso e wiring.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: motor de sincronização SMS/MMS ↔ CRM
- services/: resolução de contatos e política de locations
- protocols/: contratos/interfaces e modelos internos
- observability/: correlação e métricas via logs estruturados

Padrão: app executa; api adapta; config configura; utils apoia.
"""
