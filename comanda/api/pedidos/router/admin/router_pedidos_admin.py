"""
Router de pedidos para o operador (cozinha/bar).
"""
from typing import List

from fastapi import APIRouter, Depends, Path

from comanda.api.pedidos.schemas.schema_pedido import AvancoStatusOut, PedidoOut
from comanda.api.pedidos.services.dependencies import get_pedido_status_service
from comanda.api.pedidos.services.service_pedido_status import PedidoStatusService
from comanda.core.admin_dependencies import get_contexto
from comanda.core.contexto import ContextoSessao

router = APIRouter(
    prefix="/api/pedidos/admin",
    tags=["Admin - Pedidos"],
)


@router.get("/ativos", response_model=List[PedidoOut])
def listar_ativos(
    contexto: ContextoSessao = Depends(get_contexto),
    svc: PedidoStatusService = Depends(get_pedido_status_service),
):
    """Pedidos PENDENTE/PREPARANDO da sucursal, mais antigos primeiro."""
    return svc.listar_ativos(contexto)


@router.post("/{pedido_id}/avancar", response_model=AvancoStatusOut)
def avancar_status(
    pedido_id: int = Path(..., description="ID do pedido"),
    contexto: ContextoSessao = Depends(get_contexto),
    svc: PedidoStatusService = Depends(get_pedido_status_service),
):
    """
    PENDENTE -> PREPARANDO -> PRONTO.

    Sem próximo estado, responde 200 com `avancou=false`.
    """
    return svc.avancar_status(pedido_id, contexto)


@router.post("/{pedido_id}/cancelar", response_model=AvancoStatusOut)
def cancelar_pedido(
    pedido_id: int = Path(..., description="ID do pedido"),
    contexto: ContextoSessao = Depends(get_contexto),
    svc: PedidoStatusService = Depends(get_pedido_status_service),
):
    return svc.cancelar(pedido_id, contexto)
