from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from comanda.api.faturas.schemas.schema_fatura import DadosFatura
from comanda.api.liquidacoes.models.model_pagamento import MetodoPagamento


class MesaPendenteOut(BaseModel):
    """Mesa com pedidos PRONTO aguardando liquidação."""
    mesa_id: int
    mesa_nome: Optional[str] = None
    total: Decimal
    quantidade_pedidos: int
    pedido_ids: List[int] = Field(default_factory=list)


class ItemPendenteOut(BaseModel):
    """
    Linha não paga de um pedido pronto. `pagavel=False` para músicas, que
    aparecem na conta mas nunca entram na seleção.
    """
    pedido_item_id: int
    pedido_id: int
    item_id: int
    nome: str
    tipo: str
    preco_unitario: Decimal
    quantidade: int
    quantidade_selecionada: int = 0
    nota: Optional[str] = None
    pagavel: bool = True


class LiquidacaoItemIn(BaseModel):
    pedido_item_id: int
    quantidade: int = Field(..., ge=0, description="Unidades a liquidar nesta linha")
    quantidade_lida: int = Field(..., ge=1, description="Quantidade da linha quando foi listada")
    metodo: Optional[MetodoPagamento] = None


class LiquidacaoRequest(BaseModel):
    itens: List[LiquidacaoItemIn] = Field(default_factory=list)
    fatura: Optional[DadosFatura] = None


class TotalPorMetodo(BaseModel):
    metodo: str
    total: Decimal


class LiquidacaoResultado(BaseModel):
    mesa_id: int
    total: Decimal
    por_metodo: List[TotalPorMetodo]
    unidades: int
    pagamento_ids: List[int]
    fatura_ids: List[int] = Field(default_factory=list)
    pedidos_liquidados: List[int] = Field(default_factory=list)
