"""
Feed de mudanças: avisa assinantes (telas de cozinha, caixa) que uma
entidade mudou. Publicado pelos services somente depois do commit.
"""
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import logging
import threading

from comanda.utils.database_utils import now_trimmed

logger = logging.getLogger(__name__)


class TipoEntidade(str, Enum):
    PEDIDO = "PEDIDO"
    PEDIDO_ITEM = "PEDIDO_ITEM"
    PAGAMENTO = "PAGAMENTO"
    FATURA = "FATURA"


@dataclass
class EventoMudanca:
    tipo: TipoEntidade
    acao: str
    sucursal_id: Optional[int]
    ids: List[int] = field(default_factory=list)
    dados: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=now_trimmed)


Callback = Callable[[EventoMudanca], None]


class ChangeFeed:
    """Registro local de assinantes por tipo de entidade."""

    def __init__(self):
        self._assinantes: Dict[TipoEntidade, List[Callback]] = {}
        self._lock = threading.Lock()

    def on_change(self, tipo: TipoEntidade, callback: Callback) -> Callable[[], None]:
        """Registra o callback e devolve a função que cancela a assinatura."""
        with self._lock:
            self._assinantes.setdefault(tipo, []).append(callback)
        logger.debug(f"[ChangeFeed] Assinante registrado para {tipo.value}")

        def cancelar() -> None:
            with self._lock:
                try:
                    self._assinantes.get(tipo, []).remove(callback)
                except ValueError:
                    logger.debug(f"[ChangeFeed] Assinante já removido de {tipo.value}")

        return cancelar

    def publicar(self, evento: EventoMudanca) -> None:
        with self._lock:
            callbacks = list(self._assinantes.get(evento.tipo, []))
        if not callbacks:
            return
        for callback in callbacks:
            try:
                callback(evento)
            except Exception as e:
                # Assinante com erro não derruba quem publicou
                logger.error(f"[ChangeFeed] Erro no assinante de {evento.tipo.value} ({evento.acao}): {e}")

    def limpar(self) -> None:
        with self._lock:
            self._assinantes.clear()


# Instância global do feed
change_feed = ChangeFeed()


def on_change(tipo: TipoEntidade, callback: Callback) -> Callable[[], None]:
    return change_feed.on_change(tipo, callback)


def publicar(evento: EventoMudanca) -> None:
    change_feed.publicar(evento)
