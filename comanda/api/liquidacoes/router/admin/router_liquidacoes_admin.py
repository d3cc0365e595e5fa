"""
Router de liquidação de mesas (caixa).
"""
from typing import List

from fastapi import APIRouter, Depends, Path

from comanda.api.liquidacoes.schemas.schema_liquidacao import (
    ItemPendenteOut,
    LiquidacaoRequest,
    LiquidacaoResultado,
    MesaPendenteOut,
)
from comanda.api.liquidacoes.services.dependencies import get_liquidacao_service
from comanda.api.liquidacoes.services.service_liquidacao import LiquidacaoService
from comanda.core.admin_dependencies import get_contexto
from comanda.core.contexto import ContextoSessao

router = APIRouter(
    prefix="/api/liquidacoes/admin",
    tags=["Admin - Liquidações"],
)


@router.get("/mesas", response_model=List[MesaPendenteOut])
def listar_mesas_pendentes(
    contexto: ContextoSessao = Depends(get_contexto),
    svc: LiquidacaoService = Depends(get_liquidacao_service),
):
    """Mesas com pedidos prontos ainda não liquidados."""
    return svc.listar_mesas_pendentes(contexto)


@router.get("/mesas/{mesa_id}/itens", response_model=List[ItemPendenteOut])
def listar_itens_pendentes(
    mesa_id: int = Path(..., description="ID da mesa"),
    contexto: ContextoSessao = Depends(get_contexto),
    svc: LiquidacaoService = Depends(get_liquidacao_service),
):
    return svc.listar_itens_pendentes(mesa_id, contexto)


@router.post("/mesas/{mesa_id}/confirmar", response_model=LiquidacaoResultado)
def confirmar_liquidacao(
    payload: LiquidacaoRequest,
    mesa_id: int = Path(..., description="ID da mesa"),
    contexto: ContextoSessao = Depends(get_contexto),
    svc: LiquidacaoService = Depends(get_liquidacao_service),
):
    """
    Confirma a liquidação das linhas selecionadas.

    - 422: seleção vazia, linha sem método, música selecionada, fatura inválida
    - 404: linha já paga ou fora da mesa (tela desatualizada)
    - 409: linha alterada por outro operador; nada foi gravado
    """
    return svc.confirmar_liquidacao(mesa_id, payload, contexto)
