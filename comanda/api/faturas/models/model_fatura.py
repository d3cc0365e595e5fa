from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, Index, Enum as SAEnum
from sqlalchemy.orm import relationship
import enum

from comanda.database.db_connection import Base
from comanda.api.liquidacoes.models.model_pagamento import MetodoPagamentoEnum
from comanda.utils.database_utils import now_trimmed


class EstadoFatura(enum.Enum):
    PENDENTE = "PENDENTE"
    EMITIDA = "EMITIDA"


EstadoFaturaEnum = SAEnum(
    "PENDENTE", "EMITIDA",
    name="fatura_estado_enum",
    native_enum=False,
)


class FaturaModel(Base):
    """
    Solicitação de fatura gerada na liquidação: uma por (método, pedido).
    A emissão fiscal em si acontece fora do sistema; aqui só se marca EMITIDA.
    """

    __tablename__ = "faturas"
    __table_args__ = (
        Index("idx_faturas_sucursal_estado", "sucursal_id", "estado"),
        Index("idx_faturas_identificacao", "identificacao"),
        {"schema": "liquidacoes"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.pedidos.id", ondelete="RESTRICT"), nullable=False)
    mesa_id = Column(Integer, ForeignKey("cadastros.mesas.id", ondelete="RESTRICT"), nullable=False)
    mesa = relationship("MesaModel", lazy="select")
    sucursal_id = Column(Integer, ForeignKey("cadastros.sucursais.id", ondelete="RESTRICT"), nullable=False)

    # Dados de faturamento
    nome = Column(String(160), nullable=False)
    identificacao = Column(String(13), nullable=False)
    email = Column(String(160), nullable=True)
    telefone = Column(String(40), nullable=True)
    endereco = Column(String(255), nullable=True)

    valor = Column(Numeric(18, 2), nullable=False)
    metodo_pagamento = Column(MetodoPagamentoEnum, nullable=False)
    estado = Column(EstadoFaturaEnum, nullable=False, default=EstadoFatura.PENDENTE.value)

    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)
    emitida_em = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Fatura(id={self.id}, pedido_id={self.pedido_id}, metodo={self.metodo_pagamento}, estado={self.estado})>"
