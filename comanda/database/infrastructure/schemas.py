"""Criação dos schemas do PostgreSQL."""
import logging
from sqlalchemy import text, quoted_name

from comanda.database.db_connection import SCHEMAS_DOMINIO, is_postgres

logger = logging.getLogger(__name__)


def criar_schemas(engine) -> None:
    """Cria os schemas de cada domínio. Bancos sem schema (SQLite) são ignorados."""
    if not is_postgres(engine):
        logger.info("Banco sem suporte a schemas; usando tabelas no schema padrão.")
        return
    with engine.begin() as conn:
        for schema in SCHEMAS_DOMINIO:
            logger.info(f"Criando/verificando schema: {schema}")
            conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS {quoted_name(schema, quote=True)}'))
    logger.info("Todos os schemas verificados/criados.")
