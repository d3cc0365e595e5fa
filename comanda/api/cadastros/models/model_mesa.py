from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from comanda.database.db_connection import Base
from comanda.utils.database_utils import now_trimmed


class MesaModel(Base):
    """
    Mesa física. O QR code leva slug + token; o par resolve no máximo uma
    mesa ativa.
    """

    __tablename__ = "mesas"
    __table_args__ = (
        UniqueConstraint("slug", "token", name="uq_mesas_slug_token"),
        Index("idx_mesas_sucursal", "sucursal_id"),
        {"schema": "cadastros"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    sucursal_id = Column(Integer, ForeignKey("cadastros.sucursais.id", ondelete="RESTRICT"), nullable=False)
    sucursal = relationship("SucursalModel", back_populates="mesas")

    nome = Column(String(60), nullable=False)
    slug = Column(String(80), nullable=False)
    token = Column(String(64), nullable=False)
    ativa = Column(Boolean, nullable=False, default=True)
    # Gerenciado pela camada de autenticação; o core nunca lê
    pin_hash = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)

    pedidos = relationship("PedidoModel", back_populates="mesa")
