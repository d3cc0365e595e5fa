from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from comanda.database.db_connection import Base
from comanda.utils.database_utils import now_trimmed


class LocalModel(Base):
    """Estabelecimento (tenant). Agrupa sucursais e o cardápio."""

    __tablename__ = "locais"
    __table_args__ = {"schema": "cadastros"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(120), nullable=False)
    ativo = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)

    sucursais = relationship("SucursalModel", back_populates="local")
