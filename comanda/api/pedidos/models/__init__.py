"""
Models do domínio Pedidos.
"""
from .model_pedido import PedidoModel, StatusPedido, TipoPedido
from .model_pedido_item import PedidoItemModel, EstadoItem

__all__ = [
    "PedidoModel",
    "StatusPedido",
    "TipoPedido",
    "PedidoItemModel",
    "EstadoItem",
]
