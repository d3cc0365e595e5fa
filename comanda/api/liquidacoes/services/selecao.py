"""
Seleção de liquidação em memória.

Representa o estado da tela do caixa enquanto ele escolhe quantidades e
métodos. Nada aqui toca o banco: descartar o objeto não tem efeito algum.
"""
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from comanda.api.faturas.schemas.schema_fatura import DadosFatura
from comanda.api.liquidacoes.models.model_pagamento import MetodoPagamento
from comanda.api.liquidacoes.schemas.schema_liquidacao import (
    ItemPendenteOut,
    LiquidacaoItemIn,
    LiquidacaoRequest,
)
from comanda.core.exceptions import NaoEncontradoError, ValidacaoError


def normalizar_quantidade(valor: Any, maximo: int) -> int:
    """
    Arredonda para baixo e limita a [0, maximo]. Entrada não numérica vale 0.
    """
    if isinstance(valor, bool):
        return 0
    if isinstance(valor, int):
        return max(0, min(maximo, valor))
    try:
        numero = float(valor)
    except (TypeError, ValueError, OverflowError):
        return 0
    if math.isnan(numero):
        return 0
    if math.isinf(numero):
        return maximo if numero > 0 else 0
    return max(0, min(maximo, math.floor(numero)))


def _to_metodo(metodo: Union[str, MetodoPagamento]) -> MetodoPagamento:
    if isinstance(metodo, MetodoPagamento):
        return metodo
    try:
        return MetodoPagamento(str(metodo).upper())
    except ValueError:
        raise ValidacaoError(f"Método de pagamento inválido: {metodo}")


@dataclass
class LinhaSelecao:
    item: ItemPendenteOut
    quantidade_selecionada: int = 0
    metodo: Optional[MetodoPagamento] = None

    @property
    def subtotal(self) -> Decimal:
        return self.item.preco_unitario * self.quantidade_selecionada


class SelecaoLiquidacao:
    def __init__(self, mesa_id: int, itens: List[ItemPendenteOut]):
        self.mesa_id = mesa_id
        self._linhas: Dict[int, LinhaSelecao] = {
            i.pedido_item_id: LinhaSelecao(item=i) for i in itens
        }

    @property
    def linhas(self) -> List[LinhaSelecao]:
        return list(self._linhas.values())

    def _linha(self, pedido_item_id: int) -> LinhaSelecao:
        linha = self._linhas.get(pedido_item_id)
        if linha is None:
            raise NaoEncontradoError(f"Linha {pedido_item_id} não está na lista de pendentes")
        return linha

    def selecionar_quantidade(self, pedido_item_id: int, quantidade: Any) -> int:
        """Define a quantidade selecionada da linha e devolve o valor aplicado."""
        linha = self._linha(pedido_item_id)
        if not linha.item.pagavel:
            linha.quantidade_selecionada = 0
        else:
            linha.quantidade_selecionada = normalizar_quantidade(quantidade, linha.item.quantidade)
        return linha.quantidade_selecionada

    def selecionar_tudo(self) -> None:
        for linha in self._linhas.values():
            if linha.item.pagavel:
                linha.quantidade_selecionada = linha.item.quantidade

    def limpar_selecao(self) -> None:
        for linha in self._linhas.values():
            linha.quantidade_selecionada = 0
            linha.metodo = None

    def atribuir_metodo(self, metodo: Union[str, MetodoPagamento]) -> None:
        """Aplica o método a todas as linhas com quantidade selecionada > 0."""
        valor = _to_metodo(metodo)
        for linha in self._linhas.values():
            if linha.quantidade_selecionada > 0:
                linha.metodo = valor

    @property
    def total_selecionado(self) -> Decimal:
        return sum((linha.subtotal for linha in self._linhas.values()), Decimal("0"))

    @property
    def unidades_selecionadas(self) -> int:
        return sum(linha.quantidade_selecionada for linha in self._linhas.values())

    def resumo_por_metodo(self) -> Dict[str, Decimal]:
        resumo: Dict[str, Decimal] = {}
        for linha in self._linhas.values():
            if linha.quantidade_selecionada > 0 and linha.metodo is not None:
                chave = linha.metodo.value
                resumo[chave] = resumo.get(chave, Decimal("0")) + linha.subtotal
        return resumo

    def para_request(self, fatura: Optional[DadosFatura] = None) -> LiquidacaoRequest:
        return LiquidacaoRequest(
            itens=[
                LiquidacaoItemIn(
                    pedido_item_id=linha.item.pedido_item_id,
                    quantidade=linha.quantidade_selecionada,
                    quantidade_lida=linha.item.quantidade,
                    metodo=linha.metodo,
                )
                for linha in self._linhas.values()
                if linha.quantidade_selecionada > 0
            ],
            fatura=fatura,
        )
