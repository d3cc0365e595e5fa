from fastapi import Depends
from sqlalchemy.orm import Session

from comanda.database.db_connection import get_db
from comanda.api.cadastros.contracts.item_contract import IItemContract
from comanda.api.cadastros.contracts.dependencies import get_item_contract
from comanda.api.liquidacoes.services.service_liquidacao import LiquidacaoService


def get_liquidacao_service(
    db: Session = Depends(get_db),
    item_contract: IItemContract = Depends(get_item_contract),
) -> LiquidacaoService:
    return LiquidacaoService(db, item_contract=item_contract)
