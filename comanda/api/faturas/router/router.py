from fastapi import APIRouter

from comanda.api.faturas.router.admin import router_faturas_admin

api_faturas = APIRouter(
    tags=["API - Faturas"]
)

api_faturas.include_router(router_faturas_admin)
