from fastapi import Depends
from sqlalchemy.orm import Session

from comanda.database.db_connection import get_db
from comanda.api.cadastros.contracts.item_contract import IItemContract
from comanda.api.cadastros.adapters.item_adapter import ItemAdapter


def get_item_contract(db: Session = Depends(get_db)) -> IItemContract:
    return ItemAdapter(db)
