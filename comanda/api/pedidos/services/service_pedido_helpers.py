from typing import Iterable

from comanda.api.cadastros.models.model_item import TipoItem
from comanda.api.pedidos.models.model_pedido import PedidoModel, TipoPedido
from comanda.api.pedidos.schemas.schema_pedido import PedidoItemOut, PedidoOut


def derivar_tipo_pedido(tipos_itens: Iterable[str]) -> str:
    """Só músicas -> MUSICAS; músicas e produtos -> MISTO; caso contrário PRODUTOS."""
    tipos = set(tipos_itens)
    tem_musica = TipoItem.MUSICA.value in tipos
    tem_produto = TipoItem.PRODUTO.value in tipos
    if tem_musica and tem_produto:
        return TipoPedido.MISTO.value
    if tem_musica:
        return TipoPedido.MUSICAS.value
    return TipoPedido.PRODUTOS.value


def build_pedido_out(pedido: PedidoModel) -> PedidoOut:
    return PedidoOut(
        id=pedido.id,
        mesa_id=pedido.mesa_id,
        mesa_nome=pedido.mesa.nome if pedido.mesa else None,
        sucursal_id=pedido.sucursal_id,
        tipo=pedido.tipo,
        status=pedido.status,
        status_descricao=pedido.status_descricao,
        total=pedido.total,
        liquidado=bool(pedido.liquidado),
        observacoes=pedido.observacoes,
        created_at=pedido.created_at,
        itens=[
            PedidoItemOut(
                id=linha.id,
                item_id=linha.item_id,
                nome=linha.item.nome if linha.item else None,
                tipo=linha.item.tipo if linha.item else None,
                quantidade=linha.quantidade,
                nota=linha.nota,
                estado=linha.estado,
            )
            for linha in pedido.itens
        ],
    )
