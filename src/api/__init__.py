"""API — camada de borda e adapters externos.

Responsabilidades:
- Receber requests (envio, webhooks do provedor)
- Validar e normalizar payloads para modelos internos
- Falar com o provedor SMS/MMS e com o CRM

Subpastas:
- connectors/: gateways HTTP (Tall Bob, HighLevel)
- normalizers/: telefones e webhooks → modelos internos
- validators/: validação do corpo de envio
- routes/: endpoints HTTP (envio, webhooks, health, admin)

NÃO PODE conter: orquestração de use cases.
"""
