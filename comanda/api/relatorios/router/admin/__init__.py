from .router_fechamento import router

__all__ = ["router"]
