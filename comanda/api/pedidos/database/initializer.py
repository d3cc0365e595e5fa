"""
Inicializador do domínio Pedidos.
"""
import logging

from comanda.database.domain.base import DomainInitializer
from comanda.database.domain.registry import register_domain

from comanda.api.pedidos.models.model_pedido import PedidoModel  # noqa: F401
from comanda.api.pedidos.models.model_pedido_item import PedidoItemModel  # noqa: F401

logger = logging.getLogger(__name__)


class PedidosInitializer(DomainInitializer):
    """Inicializador do domínio Pedidos."""

    def get_domain_name(self) -> str:
        return "pedidos"

    def get_schema_name(self) -> str:
        return "pedidos"


_pedidos_initializer = PedidosInitializer()
register_domain(_pedidos_initializer)
