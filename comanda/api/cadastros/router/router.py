from fastapi import APIRouter

from comanda.api.cadastros.router.client import router_mesas as router_mesas_client

api_cadastros = APIRouter(
    tags=["API - Cadastros"]
)

# Routers para clientes (QR code da mesa, sem autenticação)
api_cadastros.include_router(router_mesas_client)
