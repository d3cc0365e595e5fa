"""
Orquestrador de inicialização do banco de dados.
"""
import logging

from comanda.database.infrastructure.schemas import criar_schemas
from .registry import get_registry

logger = logging.getLogger(__name__)


class DatabaseOrchestrator:
    """
    Fluxo:
    1. Schemas (somente Postgres)
    2. Tabelas de cada domínio registrado, na ordem de registro
    """

    def __init__(self, engine):
        self.engine = engine
        self.registry = get_registry()

    def inicializar_dominios(self) -> None:
        initializers = self.registry.get_all()
        if not initializers:
            logger.warning("Nenhum domínio registrado para inicialização.")
            return

        logger.info(f"Inicializando {len(initializers)} domínio(s)...")
        for initializer in initializers:
            initializer.initialize(self.engine)

    def initialize(self) -> None:
        logger.info("Iniciando processo de inicialização do banco de dados...")
        criar_schemas(self.engine)
        self.inicializar_dominios()
        logger.info("Banco inicializado com sucesso.")
