from .schema_pedido import (
    PedidoItemIn,
    PedidoCreateRequest,
    PedidoItemOut,
    PedidoOut,
    AvancoStatusOut,
)

__all__ = [
    "PedidoItemIn",
    "PedidoCreateRequest",
    "PedidoItemOut",
    "PedidoOut",
    "AvancoStatusOut",
]
