from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DadosFatura(BaseModel):
    """Dados de faturamento informados na liquidação."""
    nome: str = Field(..., max_length=160)
    identificacao: str = Field(..., description="Cédula (10 dígitos) ou RUC (13 dígitos)")
    email: Optional[str] = Field(None, max_length=160)
    telefone: Optional[str] = Field(None, max_length=40)
    endereco: Optional[str] = Field(None, max_length=255)


class DadosFaturamentoOut(DadosFatura):
    """Dados da fatura mais recente para a identificação (pré-preenchimento)."""
    ultima_fatura_id: int

    model_config = ConfigDict(from_attributes=True)


class FaturaOut(BaseModel):
    id: int
    pedido_id: int
    mesa_id: int
    mesa_nome: Optional[str] = None
    nome: str
    identificacao: str
    email: Optional[str] = None
    telefone: Optional[str] = None
    endereco: Optional[str] = None
    valor: Decimal
    metodo_pagamento: str
    estado: str
    created_at: datetime
    emitida_em: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
