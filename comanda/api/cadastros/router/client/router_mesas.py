from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from comanda.api.cadastros.schemas.schema_mesa import MesaPublicaOut
from comanda.api.cadastros.services.service_mesas import MesaService
from comanda.database.db_connection import get_db

router = APIRouter(
    prefix="/api/mesas/client",
    tags=["Client - Mesas"],
)


def get_mesa_service(db: Session = Depends(get_db)) -> MesaService:
    return MesaService(db)


@router.get("/{slug}/{token}", response_model=MesaPublicaOut)
def resolver_mesa(
    slug: str = Path(..., description="Slug impresso no QR code"),
    token: str = Path(..., description="Token da mesa"),
    svc: MesaService = Depends(get_mesa_service),
):
    """Resolve o QR code para a mesa ativa. Mesa inativa responde 404."""
    return svc.resolver_publica(slug, token)
