from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_

from comanda.api.cadastros.models.model_mesa import MesaModel


class MesaRepository:
    """Repository para operações com mesas."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id_sucursal(self, mesa_id: int, sucursal_id: int) -> Optional[MesaModel]:
        """Busca uma mesa por ID restrita à sucursal do operador."""
        return (
            self.db.query(MesaModel)
            .filter(
                and_(
                    MesaModel.id == mesa_id,
                    MesaModel.sucursal_id == sucursal_id,
                )
            )
            .first()
        )

    def get_ativa_by_slug_token(self, slug: str, token: str) -> Optional[MesaModel]:
        """Resolve o QR code (slug + token) para a mesa ativa, se houver."""
        return (
            self.db.query(MesaModel)
            .filter(
                and_(
                    MesaModel.slug == slug,
                    MesaModel.token == token,
                    MesaModel.ativa.is_(True),
                )
            )
            .first()
        )
