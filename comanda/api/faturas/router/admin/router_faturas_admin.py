from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from comanda.api.faturas.schemas.schema_fatura import DadosFaturamentoOut, FaturaOut
from comanda.api.faturas.services.service_faturas import FaturaService
from comanda.core.admin_dependencies import get_contexto
from comanda.core.contexto import ContextoSessao
from comanda.database.db_connection import get_db

router = APIRouter(
    prefix="/api/faturas/admin",
    tags=["Admin - Faturas"],
)


def get_fatura_service(db: Session = Depends(get_db)) -> FaturaService:
    return FaturaService(db)


@router.get("/pendentes", response_model=List[FaturaOut])
def listar_pendentes(
    contexto: ContextoSessao = Depends(get_contexto),
    svc: FaturaService = Depends(get_fatura_service),
):
    return svc.listar_pendentes(contexto)


@router.post("/{fatura_id}/emitir", response_model=FaturaOut)
def marcar_emitida(
    fatura_id: int = Path(..., description="ID da fatura"),
    contexto: ContextoSessao = Depends(get_contexto),
    svc: FaturaService = Depends(get_fatura_service),
):
    """PENDENTE -> EMITIDA. Fatura já emitida é devolvida sem alteração."""
    return svc.marcar_emitida(fatura_id, contexto)


@router.get("/dados/{identificacao}", response_model=DadosFaturamentoOut)
def buscar_dados_faturamento(
    identificacao: str = Path(..., description="Cédula ou RUC"),
    contexto: ContextoSessao = Depends(get_contexto),
    svc: FaturaService = Depends(get_fatura_service),
):
    return svc.buscar_dados_faturamento(identificacao, contexto)
