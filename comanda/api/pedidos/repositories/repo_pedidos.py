from typing import Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import and_

from comanda.api.cadastros.models.model_item import ItemModel, TipoItem
from comanda.api.pedidos.models.model_pedido import PedidoModel, StatusPedido
from comanda.api.pedidos.models.model_pedido_item import PedidoItemModel, ESTADOS_NAO_PAGOS


class PedidoRepository:
    """Repository de pedidos e linhas de pedido."""

    def __init__(self, db: Session):
        self.db = db

    # -------------------- Leitura --------------------
    def get_by_id_sucursal(self, pedido_id: int, sucursal_id: int) -> Optional[PedidoModel]:
        return (
            self.db.query(PedidoModel)
            .filter(and_(PedidoModel.id == pedido_id, PedidoModel.sucursal_id == sucursal_id))
            .first()
        )

    def list_ativos(self, sucursal_id: int) -> list[PedidoModel]:
        """Pedidos em PENDENTE/PREPARANDO, mais antigos primeiro (fila da cozinha)."""
        return (
            self.db.query(PedidoModel)
            .options(selectinload(PedidoModel.itens).selectinload(PedidoItemModel.item))
            .filter(
                PedidoModel.sucursal_id == sucursal_id,
                PedidoModel.status.in_([StatusPedido.PENDENTE.value, StatusPedido.PREPARANDO.value]),
            )
            .order_by(PedidoModel.created_at, PedidoModel.id)
            .all()
        )

    def list_pendentes_liquidacao_by_mesa(self, mesa_id: int) -> list[PedidoModel]:
        """Pedidos PRONTO ainda não liquidados da mesa, em ordem de criação."""
        return (
            self.db.query(PedidoModel)
            .filter(
                PedidoModel.mesa_id == mesa_id,
                PedidoModel.status == StatusPedido.PRONTO.value,
                PedidoModel.liquidado.is_(False),
            )
            .order_by(PedidoModel.created_at, PedidoModel.id)
            .all()
        )

    def list_pendentes_liquidacao_by_sucursal(self, sucursal_id: int) -> list[PedidoModel]:
        return (
            self.db.query(PedidoModel)
            .options(selectinload(PedidoModel.mesa))
            .filter(
                PedidoModel.sucursal_id == sucursal_id,
                PedidoModel.status == StatusPedido.PRONTO.value,
                PedidoModel.liquidado.is_(False),
            )
            .order_by(PedidoModel.mesa_id, PedidoModel.created_at, PedidoModel.id)
            .all()
        )

    def list_itens_nao_pagos(self, pedido_ids: list[int]) -> list[PedidoItemModel]:
        if not pedido_ids:
            return []
        return (
            self.db.query(PedidoItemModel)
            .filter(
                PedidoItemModel.pedido_id.in_(pedido_ids),
                PedidoItemModel.estado.in_(ESTADOS_NAO_PAGOS),
            )
            .order_by(PedidoItemModel.id)
            .all()
        )

    def list_itens_by_ids(self, pedido_item_ids: list[int]) -> list[PedidoItemModel]:
        if not pedido_item_ids:
            return []
        return (
            self.db.query(PedidoItemModel)
            .options(selectinload(PedidoItemModel.pedido))
            .filter(PedidoItemModel.id.in_(pedido_item_ids))
            .all()
        )

    def possui_itens_cobraveis_nao_pagos(self, pedido_id: int) -> bool:
        """True se ainda existe linha de produto não paga no pedido. Músicas não contam."""
        return (
            self.db.query(PedidoItemModel.id)
            .join(ItemModel, ItemModel.id == PedidoItemModel.item_id)
            .filter(
                PedidoItemModel.pedido_id == pedido_id,
                PedidoItemModel.estado.in_(ESTADOS_NAO_PAGOS),
                ItemModel.tipo == TipoItem.PRODUTO.value,
            )
            .first()
            is not None
        )

    # -------------------- Escrita --------------------
    def add(self, pedido: PedidoModel) -> PedidoModel:
        self.db.add(pedido)
        self.db.flush()
        return pedido

    def atualizar_status_condicional(
        self,
        pedido_id: int,
        status_lido: str,
        novo_status: str,
    ) -> int:
        """
        Troca o status só se ele ainda for o lido e o pedido não estiver liquidado.
        Retorna o número de linhas afetadas (0 = outro operador chegou antes).
        """
        return (
            self.db.query(PedidoModel)
            .filter(
                PedidoModel.id == pedido_id,
                PedidoModel.status == status_lido,
                PedidoModel.liquidado.is_(False),
            )
            .update({PedidoModel.status: novo_status}, synchronize_session=False)
        )

    def marcar_liquidado(self, pedido_id: int) -> int:
        return (
            self.db.query(PedidoModel)
            .filter(PedidoModel.id == pedido_id, PedidoModel.liquidado.is_(False))
            .update({PedidoModel.liquidado: True}, synchronize_session=False)
        )
