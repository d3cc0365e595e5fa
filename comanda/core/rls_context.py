from __future__ import annotations

from contextvars import ContextVar
from typing import Optional

# Contexto por request (thread/task-local) para RLS no Postgres.
_rls_user_id: ContextVar[Optional[int]] = ContextVar("rls_user_id", default=None)
_rls_sucursal_id: ContextVar[Optional[int]] = ContextVar("rls_sucursal_id", default=None)


def set_rls_context(user_id: Optional[int], sucursal_id: Optional[int]) -> None:
    """Define o contexto RLS do request atual."""
    _rls_user_id.set(user_id)
    _rls_sucursal_id.set(sucursal_id)


def limpar_rls_context() -> None:
    """Fim do request: a sessão seguinte não herda o escopo anterior."""
    _rls_user_id.set(None)
    _rls_sucursal_id.set(None)


def get_rls_user_id() -> Optional[int]:
    return _rls_user_id.get()


def get_rls_sucursal_id() -> Optional[int]:
    return _rls_sucursal_id.get()
