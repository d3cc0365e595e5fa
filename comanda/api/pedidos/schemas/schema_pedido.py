from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class PedidoItemIn(BaseModel):
    item_id: int
    quantidade: int = Field(..., ge=1)
    nota: Optional[str] = Field(None, max_length=255)


class PedidoCreateRequest(BaseModel):
    """Carrinho enviado pela mesa (QR code)."""
    itens: List[PedidoItemIn] = Field(default_factory=list)
    observacoes: Optional[str] = Field(None, max_length=500)


class PedidoItemOut(BaseModel):
    id: int
    item_id: int
    nome: Optional[str] = None
    tipo: Optional[str] = None
    quantidade: int
    nota: Optional[str] = None
    estado: str

    model_config = ConfigDict(from_attributes=True)


class PedidoOut(BaseModel):
    id: int
    mesa_id: int
    mesa_nome: Optional[str] = None
    sucursal_id: int
    tipo: str
    status: str
    status_descricao: str
    total: Decimal
    liquidado: bool
    observacoes: Optional[str] = None
    created_at: datetime
    itens: List[PedidoItemOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class AvancoStatusOut(BaseModel):
    """
    Resultado do avanço de status. `avancou=False` indica que o pedido não
    tem próximo estado (PRONTO, CANCELADO ou já liquidado); não é erro.
    """
    pedido_id: int
    status_anterior: str
    status: str
    avancou: bool
    liquidado: bool = False
