from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from comanda.database.db_connection import Base
from comanda.utils.database_utils import now_trimmed


class SucursalModel(Base):
    __tablename__ = "sucursais"
    __table_args__ = (
        Index("idx_sucursais_local", "local_id"),
        {"schema": "cadastros"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    local_id = Column(Integer, ForeignKey("cadastros.locais.id", ondelete="RESTRICT"), nullable=False)
    local = relationship("LocalModel", back_populates="sucursais")

    nome = Column(String(120), nullable=False)
    # Fuso IANA usado no fechamento diário (ex.: America/Guayaquil)
    timezone = Column(String(64), nullable=True)
    ativa = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)

    mesas = relationship("MesaModel", back_populates="sucursal")
