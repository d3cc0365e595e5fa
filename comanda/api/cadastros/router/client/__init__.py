from .router_mesas import router as router_mesas

__all__ = ["router_mesas"]
