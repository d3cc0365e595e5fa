from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from comanda.api.cadastros.models.model_item import ItemModel, TipoItem
from comanda.api.cadastros.models.model_sucursal import SucursalModel
from comanda.api.liquidacoes.models.model_pagamento import PagamentoModel
from comanda.api.pedidos.models.model_pedido import PedidoModel, StatusPedido
from comanda.api.pedidos.models.model_pedido_item import PedidoItemModel


@dataclass
class MusicaAgregada:
    item_id: int
    nome: str
    artista: Optional[str]
    quantidade: int


@dataclass
class ReceitaMetodo:
    metodo: str
    total: Decimal


class FechamentoRepository:
    """Consultas do fechamento diário. Intervalos são [inicio, fim) em UTC."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_sucursal(self, sucursal_id: int) -> Optional[SucursalModel]:
        return self.db.query(SucursalModel).filter_by(id=sucursal_id).first()

    def pedidos_do_periodo(self, sucursal_id: int, inicio: datetime, fim: datetime) -> List[PedidoModel]:
        return (
            self.db.query(PedidoModel)
            .options(
                selectinload(PedidoModel.mesa),
                selectinload(PedidoModel.itens).selectinload(PedidoItemModel.item),
            )
            .filter(
                PedidoModel.sucursal_id == sucursal_id,
                PedidoModel.created_at >= inicio,
                PedidoModel.created_at < fim,
            )
            .order_by(PedidoModel.created_at.desc(), PedidoModel.id.desc())
            .all()
        )

    def receitas_por_metodo(self, sucursal_id: int, inicio: datetime, fim: datetime) -> List[ReceitaMetodo]:
        rows = (
            self.db.query(PagamentoModel.metodo, func.coalesce(func.sum(PagamentoModel.total), 0))
            .filter(
                PagamentoModel.sucursal_id == sucursal_id,
                PagamentoModel.created_at >= inicio,
                PagamentoModel.created_at < fim,
            )
            .group_by(PagamentoModel.metodo)
            .order_by(PagamentoModel.metodo)
            .all()
        )
        return [ReceitaMetodo(metodo=metodo, total=Decimal(str(total))) for metodo, total in rows]

    def musicas_do_periodo(self, sucursal_id: int, inicio: datetime, fim: datetime) -> List[MusicaAgregada]:
        """Músicas pedidas no dia (pedidos cancelados não contam)."""
        quantidade = func.sum(PedidoItemModel.quantidade)
        rows = (
            self.db.query(ItemModel.id, ItemModel.nome, ItemModel.artista, quantidade)
            .join(PedidoItemModel, PedidoItemModel.item_id == ItemModel.id)
            .join(PedidoModel, PedidoModel.id == PedidoItemModel.pedido_id)
            .filter(
                ItemModel.tipo == TipoItem.MUSICA.value,
                PedidoModel.sucursal_id == sucursal_id,
                PedidoModel.status != StatusPedido.CANCELADO.value,
                PedidoModel.created_at >= inicio,
                PedidoModel.created_at < fim,
            )
            .group_by(ItemModel.id, ItemModel.nome, ItemModel.artista)
            .order_by(quantidade.desc(), ItemModel.nome, ItemModel.id)
            .all()
        )
        return [
            MusicaAgregada(item_id=item_id, nome=nome, artista=artista, quantidade=int(qtd or 0))
            for item_id, nome, artista, qtd in rows
        ]
