from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from comanda.api.pedidos.models.model_pedido import PedidoModel, StatusPedido, PROXIMO_STATUS
from comanda.api.pedidos.repositories.repo_pedidos import PedidoRepository
from comanda.api.pedidos.schemas.schema_pedido import AvancoStatusOut, PedidoOut
from comanda.api.pedidos.services.service_pedido_helpers import build_pedido_out
from comanda.api.realtime.core.change_feed import EventoMudanca, TipoEntidade, publicar
from comanda.core.contexto import ContextoSessao
from comanda.core.exceptions import ArmazenamentoError, NaoEncontradoError
from comanda.utils.logger import logger

STATUS_CANCELAVEIS = (StatusPedido.PENDENTE.value, StatusPedido.PREPARANDO.value)


class PedidoStatusService:
    """Ciclo de vida dos pedidos: PENDENTE -> PREPARANDO -> PRONTO (ou CANCELADO)."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PedidoRepository(db)

    def _get_pedido_or_404(self, pedido_id: int, contexto: ContextoSessao) -> PedidoModel:
        pedido = self.repo.get_by_id_sucursal(pedido_id, contexto.sucursal_id)
        if not pedido:
            raise NaoEncontradoError(f"Pedido {pedido_id} não encontrado")
        return pedido

    def _transicionar(self, pedido: PedidoModel, novo_status: str) -> AvancoStatusOut:
        anterior = pedido.status
        try:
            afetadas = self.repo.atualizar_status_condicional(pedido.id, anterior, novo_status)
            liquidado = bool(pedido.liquidado)
            if afetadas and novo_status == StatusPedido.PRONTO.value:
                # Pedido só de músicas não tem o que liquidar
                if not self.repo.possui_itens_cobraveis_nao_pagos(pedido.id):
                    self.repo.marcar_liquidado(pedido.id)
                    liquidado = True
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Pedidos] Erro ao atualizar status do pedido {pedido.id}: {e}")
            raise ArmazenamentoError(f"Erro ao atualizar status do pedido: {e}")

        self.db.refresh(pedido)
        if not afetadas:
            logger.info(
                f"[Pedidos] Pedido {pedido.id} mudou antes da transição {anterior}->{novo_status}; atual={pedido.status}"
            )
            return AvancoStatusOut(
                pedido_id=pedido.id,
                status_anterior=anterior,
                status=pedido.status,
                avancou=False,
                liquidado=bool(pedido.liquidado),
            )

        logger.info(f"[Pedidos] Pedido {pedido.id}: {anterior} -> {novo_status} (liquidado={liquidado})")
        publicar(
            EventoMudanca(
                tipo=TipoEntidade.PEDIDO,
                acao="status",
                sucursal_id=pedido.sucursal_id,
                ids=[pedido.id],
                dados={"status_anterior": anterior, "status": novo_status, "liquidado": liquidado},
            )
        )
        return AvancoStatusOut(
            pedido_id=pedido.id,
            status_anterior=anterior,
            status=novo_status,
            avancou=True,
            liquidado=liquidado,
        )

    def avancar_status(self, pedido_id: int, contexto: ContextoSessao) -> AvancoStatusOut:
        pedido = self._get_pedido_or_404(pedido_id, contexto)
        proximo = PROXIMO_STATUS.get(pedido.status)
        if pedido.liquidado or proximo is None:
            return AvancoStatusOut(
                pedido_id=pedido.id,
                status_anterior=pedido.status,
                status=pedido.status,
                avancou=False,
                liquidado=bool(pedido.liquidado),
            )
        return self._transicionar(pedido, proximo)

    def cancelar(self, pedido_id: int, contexto: ContextoSessao) -> AvancoStatusOut:
        pedido = self._get_pedido_or_404(pedido_id, contexto)
        if pedido.liquidado or pedido.status not in STATUS_CANCELAVEIS:
            return AvancoStatusOut(
                pedido_id=pedido.id,
                status_anterior=pedido.status,
                status=pedido.status,
                avancou=False,
                liquidado=bool(pedido.liquidado),
            )
        return self._transicionar(pedido, StatusPedido.CANCELADO.value)

    def listar_ativos(self, contexto: ContextoSessao) -> list[PedidoOut]:
        return [build_pedido_out(p) for p in self.repo.list_ativos(contexto.sucursal_id)]
