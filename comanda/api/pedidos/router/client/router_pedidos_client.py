from fastapi import APIRouter, Depends, Path, status

from comanda.api.pedidos.schemas.schema_pedido import PedidoCreateRequest, PedidoOut
from comanda.api.pedidos.services.dependencies import get_pedido_service
from comanda.api.pedidos.services.service_pedidos import PedidoService

router = APIRouter(
    prefix="/api/pedidos/client",
    tags=["Client - Pedidos"],
)


@router.post("/{slug}/{token}", response_model=PedidoOut, status_code=status.HTTP_201_CREATED)
def enviar_carrinho(
    payload: PedidoCreateRequest,
    slug: str = Path(..., description="Slug da mesa"),
    token: str = Path(..., description="Token da mesa"),
    svc: PedidoService = Depends(get_pedido_service),
):
    """Envia o carrinho da mesa como um novo pedido PENDENTE."""
    return svc.criar_pedido(slug, token, payload)
