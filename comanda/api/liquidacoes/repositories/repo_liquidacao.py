from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from comanda.api.liquidacoes.models.model_pagamento import PagamentoModel
from comanda.api.pedidos.models.model_pedido_item import (
    PedidoItemModel,
    EstadoItem,
    ESTADOS_NAO_PAGOS,
)


class LiquidacaoRepository:
    """
    Escritas da liquidação. As atualizações de linha são condicionais à
    quantidade lida pelo caixa: 0 linhas afetadas significa que alguém
    alterou a linha depois da listagem.
    """

    def __init__(self, db: Session):
        self.db = db

    def add_pagamento(self, pagamento: PagamentoModel) -> PagamentoModel:
        self.db.add(pagamento)
        self.db.flush()
        return pagamento

    def _linha_inalterada(self, pedido_item_id: int, quantidade_lida: int):
        return self.db.query(PedidoItemModel).filter(
            PedidoItemModel.id == pedido_item_id,
            PedidoItemModel.quantidade == quantidade_lida,
            PedidoItemModel.estado.in_(ESTADOS_NAO_PAGOS),
        )

    def liquidar_linha_integral(self, pedido_item_id: int, quantidade_lida: int, valor_pago: Decimal) -> int:
        return self._linha_inalterada(pedido_item_id, quantidade_lida).update(
            {
                PedidoItemModel.estado: EstadoItem.PAGO.value,
                PedidoItemModel.valor_pago: valor_pago,
            },
            synchronize_session=False,
        )

    def decrementar_linha(self, pedido_item_id: int, quantidade_lida: int, restante: int) -> int:
        return self._linha_inalterada(pedido_item_id, quantidade_lida).update(
            {PedidoItemModel.quantidade: restante},
            synchronize_session=False,
        )

    def inserir_fragmento_pago(
        self,
        pedido_id: int,
        item_id: int,
        quantidade: int,
        valor_pago: Decimal,
        nota: Optional[str] = None,
    ) -> PedidoItemModel:
        fragmento = PedidoItemModel(
            pedido_id=pedido_id,
            item_id=item_id,
            quantidade=quantidade,
            nota=nota,
            estado=EstadoItem.PAGO.value,
            valor_pago=valor_pago,
        )
        self.db.add(fragmento)
        self.db.flush()
        return fragmento
