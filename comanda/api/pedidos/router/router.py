from fastapi import APIRouter

from comanda.api.pedidos.router.admin import router_pedidos_admin
from comanda.api.pedidos.router.client import router_pedidos_client

api_pedidos = APIRouter(
    tags=["API - Pedidos"]
)

api_pedidos.include_router(router_pedidos_client)
api_pedidos.include_router(router_pedidos_admin)
