from typing import Optional
from sqlalchemy.orm import Session, selectinload

from comanda.api.faturas.models.model_fatura import FaturaModel, EstadoFatura


class FaturaRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, fatura: FaturaModel) -> FaturaModel:
        self.db.add(fatura)
        self.db.flush()
        return fatura

    def get_by_id_sucursal(self, fatura_id: int, sucursal_id: int) -> Optional[FaturaModel]:
        return (
            self.db.query(FaturaModel)
            .filter(FaturaModel.id == fatura_id, FaturaModel.sucursal_id == sucursal_id)
            .first()
        )

    def list_pendentes(self, sucursal_id: int) -> list[FaturaModel]:
        return (
            self.db.query(FaturaModel)
            .options(selectinload(FaturaModel.mesa))
            .filter(
                FaturaModel.sucursal_id == sucursal_id,
                FaturaModel.estado == EstadoFatura.PENDENTE.value,
            )
            .order_by(FaturaModel.created_at.desc(), FaturaModel.id.desc())
            .all()
        )

    def get_mais_recente_by_identificacao(self, identificacao: str, sucursal_id: int) -> Optional[FaturaModel]:
        return (
            self.db.query(FaturaModel)
            .filter(
                FaturaModel.identificacao == identificacao,
                FaturaModel.sucursal_id == sucursal_id,
            )
            .order_by(FaturaModel.created_at.desc(), FaturaModel.id.desc())
            .first()
        )
