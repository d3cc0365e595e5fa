from .router_faturas_admin import router as router_faturas_admin

__all__ = ["router_faturas_admin"]
