"""
Ponto de entrada da inicialização do banco.

Importar os inicializadores garante que os models estejam no metadata e
que cada domínio esteja registrado, na ordem das dependências de FK.
"""
import logging

from comanda.api.cadastros.database.initializer import CadastrosInitializer  # noqa: F401
from comanda.api.pedidos.database.initializer import PedidosInitializer  # noqa: F401
from comanda.api.liquidacoes.database.initializer import LiquidacoesInitializer  # noqa: F401
from comanda.database.domain.orchestrator import DatabaseOrchestrator

logger = logging.getLogger(__name__)


def inicializar_banco(engine=None) -> None:
    from comanda.database.db_connection import engine as engine_padrao

    DatabaseOrchestrator(engine or engine_padrao).initialize()


if __name__ == "__main__":
    inicializar_banco()
