from fastapi import APIRouter

from .admin import router as admin_router

# Router principal que agrupa os routers de relatórios
router = APIRouter(
    tags=["API - Relatórios"]
)

router.include_router(admin_router)
