# comanda/core/admin_dependencies.py

from typing import Iterator

from fastapi import Depends, HTTPException, status, Request
from jose import JWTError
from sqlalchemy.orm import Session

from comanda.core.contexto import ContextoSessao
from comanda.core.rls_context import limpar_rls_context, set_rls_context
from comanda.core.security import decode_access_token
from comanda.database.db_connection import get_db, aplicar_contexto_rls
from comanda.utils.logger import logger

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Não autenticado",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_contexto(
    request: Request,
    db: Session = Depends(get_db),
) -> Iterator[ContextoSessao]:
    """
    Monta o contexto do operador a partir do header Authorization (Bearer <token>).

    O token é emitido pela camada de autenticação e carrega `sub` (id do
    operador) e `sucursal_id`. A sessão do banco recebe o mesmo escopo (RLS).
    O contexto RLS vale até o fim do request.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        logger.warning("[AUTH] Cabeçalho Authorization ausente ou malformado.")
        raise credentials_exception

    access_token = auth_header.replace("Bearer ", "")

    try:
        payload = decode_access_token(access_token)
        raw_sub = payload.get("sub")
        raw_sucursal = payload.get("sucursal_id")
        if raw_sub is None or raw_sucursal is None:
            raise credentials_exception
        contexto = ContextoSessao(
            usuario_id=int(raw_sub),
            sucursal_id=int(raw_sucursal),
            username=payload.get("username"),
        )
    except (JWTError, TypeError, ValueError) as e:
        logger.error(f"[AUTH] Erro ao decodificar JWT: {e}")
        raise credentials_exception

    set_rls_context(contexto.usuario_id, contexto.sucursal_id)
    try:
        aplicar_contexto_rls(db)
        yield contexto
    finally:
        limpar_rls_context()
