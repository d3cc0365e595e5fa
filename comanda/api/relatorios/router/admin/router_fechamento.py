from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from comanda.api.relatorios.repositories.repo_fechamento import FechamentoRepository
from comanda.api.relatorios.schemas.schema_fechamento import FechamentoDiarioOut
from comanda.api.relatorios.services.service_fechamento_diario import FechamentoDiarioService
from comanda.core.admin_dependencies import get_contexto
from comanda.core.contexto import ContextoSessao
from comanda.database.db_connection import get_db

router = APIRouter(
    prefix="/api/relatorios/admin",
    tags=["Admin - Relatórios - Fechamento Diário"],
)


@router.get("/fechamento-diario", response_model=FechamentoDiarioOut)
def fechamento_diario(
    data: date = Query(..., description="Dia local de referência (YYYY-MM-DD)"),
    timezone: Optional[str] = Query(None, description="Fuso IANA; padrão é o da sucursal"),
    contexto: ContextoSessao = Depends(get_contexto),
    db: Session = Depends(get_db),
):
    repository = FechamentoRepository(db)
    service = FechamentoDiarioService(repository)
    return service.fechamento_diario(data=data, timezone=timezone, sucursal_id=contexto.sucursal_id)
