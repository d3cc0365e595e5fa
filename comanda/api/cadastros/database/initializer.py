"""
Inicializador do domínio Cadastros.
Responsável por criar as tabelas de local, sucursal, mesa e item.
"""
import logging

from comanda.database.domain.base import DomainInitializer
from comanda.database.domain.registry import register_domain

# Importar models do domínio
from comanda.api.cadastros.models.model_local import LocalModel  # noqa: F401
from comanda.api.cadastros.models.model_sucursal import SucursalModel  # noqa: F401
from comanda.api.cadastros.models.model_mesa import MesaModel  # noqa: F401
from comanda.api.cadastros.models.model_item import ItemModel, ItemSucursalModel  # noqa: F401

logger = logging.getLogger(__name__)


class CadastrosInitializer(DomainInitializer):
    """Inicializador do domínio Cadastros."""

    def get_domain_name(self) -> str:
        return "cadastros"

    def get_schema_name(self) -> str:
        return "cadastros"


# Registra o inicializador
_cadastros_initializer = CadastrosInitializer()
register_domain(_cadastros_initializer)
