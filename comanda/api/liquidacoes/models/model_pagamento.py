from sqlalchemy import Column, Integer, DateTime, ForeignKey, Numeric, Index, Enum as SAEnum
import enum

from comanda.database.db_connection import Base
from comanda.utils.database_utils import now_trimmed


class MetodoPagamento(enum.Enum):
    DINHEIRO = "DINHEIRO"
    CARTAO = "CARTAO"
    TRANSFERENCIA = "TRANSFERENCIA"


MetodoPagamentoEnum = SAEnum(
    "DINHEIRO", "CARTAO", "TRANSFERENCIA",
    name="metodo_pagamento_enum",
    native_enum=False,
)


class PagamentoModel(Base):
    """Um registro por método de pagamento em cada liquidação confirmada."""

    __tablename__ = "pagamentos"
    __table_args__ = (
        Index("idx_pagamentos_sucursal_created", "sucursal_id", "created_at"),
        Index("idx_pagamentos_mesa", "mesa_id"),
        {"schema": "liquidacoes"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sucursal_id = Column(Integer, ForeignKey("cadastros.sucursais.id", ondelete="RESTRICT"), nullable=False)
    mesa_id = Column(Integer, ForeignKey("cadastros.mesas.id", ondelete="RESTRICT"), nullable=False)
    # Operador que confirmou (id vindo do token)
    usuario_id = Column(Integer, nullable=True)
    total = Column(Numeric(18, 2), nullable=False)
    metodo = Column(MetodoPagamentoEnum, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)

    def __repr__(self):
        return f"<Pagamento(id={self.id}, mesa_id={self.mesa_id}, metodo={self.metodo}, total={self.total})>"
