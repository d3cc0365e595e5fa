from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Numeric, Boolean, Index, Enum as SAEnum
)
from sqlalchemy.orm import relationship
import enum

from comanda.database.db_connection import Base
from comanda.utils.database_utils import now_trimmed


class StatusPedido(enum.Enum):
    """Ciclo de vida do pedido na cozinha/bar.

    - PENDENTE: recebido
    - PREPARANDO: em preparo
    - PRONTO: entregue na mesa, aguardando liquidação
    - CANCELADO: descartado antes de ficar pronto
    """
    PENDENTE = "PENDENTE"
    PREPARANDO = "PREPARANDO"
    PRONTO = "PRONTO"
    CANCELADO = "CANCELADO"


class TipoPedido(enum.Enum):
    """Composição do pedido: só produtos, só músicas ou ambos."""
    PRODUTOS = "PRODUTOS"
    MUSICAS = "MUSICAS"
    MISTO = "MISTO"


# Próximo estado do ciclo de vida; ausente = não avança
PROXIMO_STATUS = {
    StatusPedido.PENDENTE.value: StatusPedido.PREPARANDO.value,
    StatusPedido.PREPARANDO.value: StatusPedido.PRONTO.value,
}

STATUS_DESCRICAO = {
    StatusPedido.PENDENTE.value: "Pendente",
    StatusPedido.PREPARANDO.value: "Preparando",
    StatusPedido.PRONTO.value: "Pronto",
    StatusPedido.CANCELADO.value: "Cancelado",
}

StatusPedidoEnum = SAEnum(
    "PENDENTE", "PREPARANDO", "PRONTO", "CANCELADO",
    name="pedido_status_enum",
    native_enum=False,
)

TipoPedidoEnum = SAEnum(
    "PRODUTOS", "MUSICAS", "MISTO",
    name="pedido_tipo_enum",
    native_enum=False,
)


class PedidoModel(Base):
    """
    Pedido enviado por uma mesa.

    `liquidado` só vai de False para True: é marcado quando nenhuma linha
    cobrável fica sem pagamento.
    """
    __tablename__ = "pedidos"
    __table_args__ = (
        Index("idx_pedidos_sucursal_status", "sucursal_id", "status"),
        Index("idx_pedidos_mesa_status_liquidado", "mesa_id", "status", "liquidado"),
        Index("idx_pedidos_sucursal_created", "sucursal_id", "created_at"),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    sucursal_id = Column(Integer, ForeignKey("cadastros.sucursais.id", ondelete="RESTRICT"), nullable=False)

    mesa_id = Column(Integer, ForeignKey("cadastros.mesas.id", ondelete="RESTRICT"), nullable=False)
    mesa = relationship("MesaModel", back_populates="pedidos", lazy="select")

    tipo = Column(TipoPedidoEnum, nullable=False, default=TipoPedido.PRODUTOS.value)
    status = Column(StatusPedidoEnum, nullable=False, default=StatusPedido.PENDENTE.value)

    # Soma dos subtotais cobráveis na criação (músicas = 0)
    total = Column(Numeric(18, 2), nullable=False, default=0)
    liquidado = Column(Boolean, nullable=False, default=False)
    observacoes = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_trimmed, onupdate=now_trimmed, nullable=False)

    itens = relationship(
        "PedidoItemModel",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoItemModel.id",
    )

    @property
    def status_descricao(self) -> str:
        return STATUS_DESCRICAO.get(self.status, self.status)

    def __repr__(self):
        return f"<Pedido(id={self.id}, mesa_id={self.mesa_id}, status={self.status}, liquidado={self.liquidado})>"
