from typing import Optional
from sqlalchemy.orm import Session

from comanda.api.cadastros.models.model_item import ItemModel, ItemSucursalModel


class ItemRepository:
    """Repository de leitura do cardápio."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, item_id: int) -> Optional[ItemModel]:
        return self.db.query(ItemModel).filter_by(id=item_id).first()

    def list_by_ids(self, item_ids: list[int]) -> list[ItemModel]:
        if not item_ids:
            return []
        return self.db.query(ItemModel).filter(ItemModel.id.in_(set(item_ids))).all()

    def disponivel_na_sucursal(self, item_id: int, sucursal_id: int) -> bool:
        """Sem registro de disponibilidade, o item vale para todas as sucursais do local."""
        registro = (
            self.db.query(ItemSucursalModel)
            .filter_by(item_id=item_id, sucursal_id=sucursal_id)
            .first()
        )
        if registro is None:
            return True
        return bool(registro.disponivel)
