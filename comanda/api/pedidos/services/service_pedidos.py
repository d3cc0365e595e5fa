from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from comanda.api.cadastros.contracts.item_contract import IItemContract
from comanda.api.cadastros.services.service_mesas import MesaService
from comanda.api.pedidos.models.model_pedido import PedidoModel, StatusPedido
from comanda.api.pedidos.models.model_pedido_item import PedidoItemModel, EstadoItem
from comanda.api.pedidos.repositories.repo_pedidos import PedidoRepository
from comanda.api.pedidos.schemas.schema_pedido import PedidoCreateRequest, PedidoOut
from comanda.api.pedidos.services.service_pedido_helpers import build_pedido_out, derivar_tipo_pedido
from comanda.api.realtime.core.change_feed import EventoMudanca, TipoEntidade, publicar
from comanda.core.exceptions import ArmazenamentoError, NaoEncontradoError, ValidacaoError
from comanda.utils.logger import logger


class PedidoService:
    """Recebe o carrinho da mesa e cria o pedido PENDENTE."""

    def __init__(self, db: Session, item_contract: IItemContract):
        self.db = db
        self.repo = PedidoRepository(db)
        self.mesa_service = MesaService(db)
        self.item_contract = item_contract

    def criar_pedido(self, slug: str, token: str, payload: PedidoCreateRequest) -> PedidoOut:
        mesa = self.mesa_service.resolver_mesa_ativa(slug, token)
        if not payload.itens:
            raise ValidacaoError("Carrinho vazio")

        itens = self.item_contract.obter_itens([i.item_id for i in payload.itens])
        local_id = mesa.sucursal.local_id

        total = Decimal("0")
        linhas: list[PedidoItemModel] = []
        for entrada in payload.itens:
            item = itens.get(entrada.item_id)
            if item is None or item.local_id != local_id:
                raise NaoEncontradoError(f"Item {entrada.item_id} não encontrado")
            if not item.ativo or not self.item_contract.disponivel_na_sucursal(item.id, mesa.sucursal_id):
                raise ValidacaoError(f"Item '{item.nome}' indisponível")
            if item.cobravel:
                total += item.preco * entrada.quantidade
            linhas.append(
                PedidoItemModel(
                    item_id=item.id,
                    quantidade=entrada.quantidade,
                    nota=entrada.nota,
                    estado=EstadoItem.PENDENTE.value,
                )
            )

        pedido = PedidoModel(
            sucursal_id=mesa.sucursal_id,
            mesa_id=mesa.id,
            tipo=derivar_tipo_pedido(itens[i.item_id].tipo for i in payload.itens),
            status=StatusPedido.PENDENTE.value,
            total=total,
            liquidado=False,
            observacoes=payload.observacoes,
            itens=linhas,
        )
        try:
            self.repo.add(pedido)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Pedidos] Erro ao criar pedido da mesa {mesa.id}: {e}")
            raise ArmazenamentoError(f"Erro ao criar pedido: {e}")
        self.db.refresh(pedido)

        logger.info(f"[Pedidos] Pedido {pedido.id} criado na mesa {mesa.id} ({pedido.tipo}, total={total})")
        publicar(
            EventoMudanca(
                tipo=TipoEntidade.PEDIDO,
                acao="criado",
                sucursal_id=pedido.sucursal_id,
                ids=[pedido.id],
                dados={"mesa_id": mesa.id},
            )
        )
        return build_pedido_out(pedido)
