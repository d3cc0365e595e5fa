from typing import Optional
from sqlalchemy.orm import Session

from comanda.api.cadastros.contracts.item_contract import IItemContract, ItemDTO
from comanda.api.cadastros.repositories.repo_itens import ItemRepository
from comanda.api.cadastros.models.model_item import ItemModel


class ItemAdapter(IItemContract):
    """Implementação do contrato de itens baseada no repositório de cadastros."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ItemRepository(db)

    def _to_dto(self, i: ItemModel) -> ItemDTO:
        return ItemDTO(
            id=i.id,
            local_id=i.local_id,
            nome=i.nome,
            tipo=i.tipo,
            preco=i.preco_efetivo,
            categoria=i.categoria,
            artista=i.artista,
            ativo=bool(i.ativo),
        )

    def obter_item(self, item_id: int) -> Optional[ItemDTO]:
        i = self.repo.get_by_id(item_id)
        if not i:
            return None
        return self._to_dto(i)

    def obter_itens(self, item_ids: list[int]) -> dict[int, ItemDTO]:
        return {i.id: self._to_dto(i) for i in self.repo.list_by_ids(item_ids)}

    def disponivel_na_sucursal(self, item_id: int, sucursal_id: int) -> bool:
        return self.repo.disponivel_na_sucursal(item_id, sucursal_id)
