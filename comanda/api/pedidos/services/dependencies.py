from fastapi import Depends
from sqlalchemy.orm import Session

from comanda.database.db_connection import get_db
from comanda.api.cadastros.contracts.item_contract import IItemContract
from comanda.api.cadastros.contracts.dependencies import get_item_contract
from comanda.api.pedidos.services.service_pedidos import PedidoService
from comanda.api.pedidos.services.service_pedido_status import PedidoStatusService


def get_pedido_service(
    db: Session = Depends(get_db),
    item_contract: IItemContract = Depends(get_item_contract),
) -> PedidoService:
    return PedidoService(db, item_contract=item_contract)


def get_pedido_status_service(db: Session = Depends(get_db)) -> PedidoStatusService:
    return PedidoStatusService(db)
