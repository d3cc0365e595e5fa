from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Numeric, Index, CheckConstraint, Enum as SAEnum
)
from sqlalchemy.orm import relationship
import enum

from comanda.database.db_connection import Base
from comanda.utils.database_utils import now_trimmed


class EstadoItem(enum.Enum):
    """Estado de pagamento da linha. PENDENTE e PREPARANDO contam como não pagos."""
    PENDENTE = "PENDENTE"
    PREPARANDO = "PREPARANDO"
    PAGO = "PAGO"


ESTADOS_NAO_PAGOS = (EstadoItem.PENDENTE.value, EstadoItem.PREPARANDO.value)

EstadoItemEnum = SAEnum(
    "PENDENTE", "PREPARANDO", "PAGO",
    name="pedido_item_estado_enum",
    native_enum=False,
)


class PedidoItemModel(Base):
    """
    Linha do pedido.

    Uma liquidação parcial divide a linha: a original fica com o restante não
    pago e um fragmento PAGO é inserido com a quantidade liquidada.
    """
    __tablename__ = "pedido_itens"
    __table_args__ = (
        CheckConstraint("quantidade > 0", name="ck_pedido_itens_quantidade_positiva"),
        Index("idx_pedido_itens_pedido", "pedido_id"),
        Index("idx_pedido_itens_pedido_estado", "pedido_id", "estado"),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    pedido_id = Column(Integer, ForeignKey("pedidos.pedidos.id", ondelete="CASCADE"), nullable=False)
    pedido = relationship("PedidoModel", back_populates="itens")

    item_id = Column(Integer, ForeignKey("cadastros.itens.id", ondelete="RESTRICT"), nullable=False)
    item = relationship("ItemModel", lazy="select")

    quantidade = Column(Integer, nullable=False)
    nota = Column(String(255), nullable=True)
    estado = Column(EstadoItemEnum, nullable=False, default=EstadoItem.PENDENTE.value)
    # Valor já pago nesta linha (0 enquanto não paga)
    valor_pago = Column(Numeric(18, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)

    @property
    def pago(self) -> bool:
        return self.estado == EstadoItem.PAGO.value

    def __repr__(self):
        return f"<PedidoItem(id={self.id}, pedido_id={self.pedido_id}, item_id={self.item_id}, qtd={self.quantidade}, estado={self.estado})>"
