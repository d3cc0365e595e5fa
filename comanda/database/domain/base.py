"""
Classe base abstrata para inicializadores de domínio.
"""
from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class DomainInitializer(ABC):
    """
    Classe base para inicializadores de domínio.

    Cada domínio cria uma subclasse e se registra no registry ao ser importado.
    """

    @abstractmethod
    def get_domain_name(self) -> str:
        """Nome do domínio (para logging e identificação)."""

    @abstractmethod
    def get_schema_name(self) -> str:
        """Schema do banco onde ficam as tabelas do domínio."""

    def initialize_tables(self, engine) -> None:
        """
        Cria as tabelas do domínio em ordem topológica.
        """
        from comanda.database.db_connection import Base

        schema_name = self.get_schema_name()
        tables_to_create = [
            t for t in Base.metadata.sorted_tables
            if t.schema == schema_name
        ]

        if not tables_to_create:
            logger.warning(f"Nenhuma tabela encontrada para o schema '{schema_name}'. Verifique se os models foram importados.")
            return

        logger.info(f"Criando {len(tables_to_create)} tabela(s) do domínio {self.get_domain_name()}...")
        for table in tables_to_create:
            table.create(engine, checkfirst=True)
            logger.info(f"  Tabela {table.schema}.{table.name} criada/verificada")

    def initialize_data(self, engine) -> None:
        """Popula dados iniciais do domínio (opcional)."""

    def initialize(self, engine) -> None:
        logger.info(f"Inicializando domínio {self.get_domain_name()}...")
        try:
            self.initialize_tables(engine)
            self.initialize_data(engine)
            logger.info(f"Domínio {self.get_domain_name()} inicializado com sucesso.")
        except Exception as e:
            logger.error(f"Erro ao inicializar domínio {self.get_domain_name()}: {e}", exc_info=True)
            raise
