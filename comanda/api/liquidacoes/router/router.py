from fastapi import APIRouter

from comanda.api.liquidacoes.router.admin import router_liquidacoes_admin

api_liquidacoes = APIRouter(
    tags=["API - Liquidações"]
)

api_liquidacoes.include_router(router_liquidacoes_admin)
