from .router_liquidacoes_admin import router as router_liquidacoes_admin

__all__ = ["router_liquidacoes_admin"]
