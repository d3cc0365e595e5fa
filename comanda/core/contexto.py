from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ContextoSessao:
    """
    Identidade do operador e escopo da sucursal do request.

    É passado explicitamente para os services (liquidação, status, relatórios)
    em vez de ler estado global da sessão.
    """

    usuario_id: int
    sucursal_id: int
    username: Optional[str] = None
