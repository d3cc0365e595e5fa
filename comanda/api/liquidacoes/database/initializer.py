"""
Inicializador do domínio Liquidações (pagamentos e faturas).
"""
import logging

from comanda.database.domain.base import DomainInitializer
from comanda.database.domain.registry import register_domain

from comanda.api.liquidacoes.models.model_pagamento import PagamentoModel  # noqa: F401
from comanda.api.faturas.models.model_fatura import FaturaModel  # noqa: F401

logger = logging.getLogger(__name__)


class LiquidacoesInitializer(DomainInitializer):
    """Inicializador do domínio Liquidações."""

    def get_domain_name(self) -> str:
        return "liquidacoes"

    def get_schema_name(self) -> str:
        return "liquidacoes"


_liquidacoes_initializer = LiquidacoesInitializer()
register_domain(_liquidacoes_initializer)
