# comanda/database/db_connection.py

import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from comanda.config.settings import DATABASE_URL, DB_CONFIG, DB_SSL_MODE
from comanda.core.rls_context import get_rls_sucursal_id, get_rls_user_id

# Base única para todos os models
Base = declarative_base()

logger = logging.getLogger(__name__)

# Schemas do Postgres achatados quando o banco não suporta schemas (SQLite)
SCHEMAS_DOMINIO = ("cadastros", "pedidos", "liquidacoes")


def montar_url() -> str:
    if DATABASE_URL:
        return DATABASE_URL

    # Validação mínima de config
    missing = [k for k in ('database', 'user', 'password', 'host', 'port') if not DB_CONFIG.get(k)]
    if missing:
        raise RuntimeError(f"Configuração do banco inválida, faltando variáveis: {', '.join(missing)}")

    # Monta a URL de conexão (com SSL opcional via query)
    ssl_query = f"?sslmode={DB_SSL_MODE}" if DB_SSL_MODE else ""
    return (
        f"postgresql://{DB_CONFIG['user']}:{DB_CONFIG['password']}"
        f"@{DB_CONFIG['host']}:{DB_CONFIG['port']}/{DB_CONFIG['database']}{ssl_query}"
    )


def criar_engine(url: str):
    """Cria o engine. Postgres grava timestamps em UTC; SQLite perde os schemas."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            execution_options={"schema_translate_map": {s: None for s in SCHEMAS_DOMINIO}},
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={"options": "-c timezone=UTC"},
    )


engine = criar_engine(montar_url())

# Configura o sessionmaker
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def is_postgres(bind=None) -> bool:
    return (bind or engine).dialect.name == "postgresql"


def aplicar_contexto_rls(db) -> None:
    """
    Injeta o contexto do request na sessão para políticas RLS como:
        sucursal_id = current_setting('app.sucursal_id')::int
    """
    if not is_postgres(db.get_bind()):
        return
    user_id = get_rls_user_id()
    sucursal_id = get_rls_sucursal_id()
    try:
        db.execute(
            text("SELECT set_config('app.user_id', :v, true)"),
            {"v": str(user_id) if user_id is not None else ""},
        )
        db.execute(
            text("SELECT set_config('app.sucursal_id', :v, true)"),
            {"v": str(sucursal_id) if sucursal_id is not None else ""},
        )
    except Exception as e:
        # Não deve bloquear a API caso o banco não aceite set_config por algum motivo.
        logger.warning("Falha ao aplicar contexto RLS (set_config): %s", e)


# Dependency para FastAPI
def get_db():
    db = SessionLocal()
    try:
        aplicar_contexto_rls(db)
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
