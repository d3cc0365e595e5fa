from decimal import Decimal
import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    Index,
    Enum as SAEnum,
)
from sqlalchemy.orm import relationship

from comanda.database.db_connection import Base
from comanda.utils.database_utils import now_trimmed


class TipoItem(str, enum.Enum):
    """PRODUTO é cobrável; MUSICA (pedido de música) nunca é cobrada."""

    PRODUTO = "PRODUTO"
    MUSICA = "MUSICA"


TipoItemEnum = SAEnum(
    "PRODUTO", "MUSICA",
    name="tipo_item_enum",
    native_enum=False,
)


class ItemModel(Base):
    __tablename__ = "itens"
    __table_args__ = (
        Index("idx_itens_local", "local_id"),
        {"schema": "cadastros"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    local_id = Column(Integer, ForeignKey("cadastros.locais.id", ondelete="RESTRICT"), nullable=False)

    nome = Column(String(160), nullable=False)
    categoria = Column(String(80), nullable=True)
    tipo = Column(TipoItemEnum, nullable=False, default=TipoItem.PRODUTO.value)
    preco = Column(Numeric(18, 2), nullable=True)
    artista = Column(String(160), nullable=True)
    ativo = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)

    disponibilidades = relationship("ItemSucursalModel", back_populates="item", cascade="all, delete-orphan")

    @property
    def cobravel(self) -> bool:
        return self.tipo == TipoItem.PRODUTO.value

    @property
    def preco_efetivo(self) -> Decimal:
        """Preço usado nas contas: música sempre vale zero."""
        if not self.cobravel:
            return Decimal("0")
        return Decimal(str(self.preco or 0))


class ItemSucursalModel(Base):
    """Disponibilidade do item por sucursal. Sem registro = disponível."""

    __tablename__ = "itens_sucursal"
    __table_args__ = (
        UniqueConstraint("item_id", "sucursal_id", name="uq_itens_sucursal_item_sucursal"),
        {"schema": "cadastros"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(Integer, ForeignKey("cadastros.itens.id", ondelete="CASCADE"), nullable=False)
    sucursal_id = Column(Integer, ForeignKey("cadastros.sucursais.id", ondelete="CASCADE"), nullable=False)
    disponivel = Column(Boolean, nullable=False, default=True)

    item = relationship("ItemModel", back_populates="disponibilidades")
