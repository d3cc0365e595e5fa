from abc import ABC, abstractmethod
from typing import Optional
from decimal import Decimal

from pydantic import BaseModel


class ItemDTO(BaseModel):
    """DTO de item do cardápio (produto ou música)."""
    id: int
    local_id: int
    nome: str
    tipo: str
    preco: Decimal = Decimal("0")
    categoria: Optional[str] = None
    artista: Optional[str] = None
    ativo: bool = True

    @property
    def cobravel(self) -> bool:
        return self.tipo == "PRODUTO"


class IItemContract(ABC):
    """Contrato para acesso ao cardápio do contexto Cadastros."""

    @abstractmethod
    def obter_item(self, item_id: int) -> Optional[ItemDTO]:
        raise NotImplementedError

    @abstractmethod
    def obter_itens(self, item_ids: list[int]) -> dict[int, ItemDTO]:
        raise NotImplementedError

    @abstractmethod
    def disponivel_na_sucursal(self, item_id: int, sucursal_id: int) -> bool:
        raise NotImplementedError
