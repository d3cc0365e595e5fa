from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class MusicaFechamento(BaseModel):
    item_id: int
    nome: str
    artista: Optional[str] = None
    quantidade: int


class MusicasFechamento(BaseModel):
    total: int = 0
    listado: List[MusicaFechamento] = Field(default_factory=list)


class ReceitaMetodoOut(BaseModel):
    metodo: str
    total: Decimal


class ReceitasFechamento(BaseModel):
    por_metodo: List[ReceitaMetodoOut] = Field(default_factory=list)
    total: Decimal = Decimal("0")


class ItemFechamento(BaseModel):
    item_id: int
    nome: str
    tipo: str
    quantidade: int
    preco_unitario: Decimal
    subtotal: Decimal


class PedidoFechamento(BaseModel):
    id: int
    mesa_id: int
    mesa_nome: Optional[str] = None
    tipo: str
    status: str
    status_descricao: str
    total: Decimal
    liquidado: bool
    created_at: datetime
    itens: List[ItemFechamento] = Field(default_factory=list)


class FechamentoDiarioOut(BaseModel):
    data: date
    timezone: str
    inicio_utc: datetime
    fim_utc: datetime
    sucursal_id: int
    musicas: MusicasFechamento
    receitas: ReceitasFechamento
    pedidos: List[PedidoFechamento] = Field(default_factory=list)
