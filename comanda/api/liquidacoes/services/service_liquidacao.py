from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from comanda.api.cadastros.contracts.item_contract import IItemContract
from comanda.api.cadastros.models.model_mesa import MesaModel
from comanda.api.cadastros.repositories.repo_mesas import MesaRepository
from comanda.api.faturas.models.model_fatura import FaturaModel, EstadoFatura
from comanda.api.faturas.repositories.repo_faturas import FaturaRepository
from comanda.api.faturas.services.service_faturas import validar_dados_fatura
from comanda.api.liquidacoes.models.model_pagamento import PagamentoModel
from comanda.api.liquidacoes.repositories.repo_liquidacao import LiquidacaoRepository
from comanda.api.liquidacoes.schemas.schema_liquidacao import (
    ItemPendenteOut,
    LiquidacaoItemIn,
    LiquidacaoRequest,
    LiquidacaoResultado,
    MesaPendenteOut,
    TotalPorMetodo,
)
from comanda.api.pedidos.models.model_pedido import StatusPedido
from comanda.api.pedidos.models.model_pedido_item import PedidoItemModel
from comanda.api.pedidos.repositories.repo_pedidos import PedidoRepository
from comanda.api.realtime.core.change_feed import EventoMudanca, TipoEntidade, publicar
from comanda.core.contexto import ContextoSessao
from comanda.core.exceptions import (
    ArmazenamentoError,
    ComandaError,
    ConflitoConcorrenciaError,
    NaoEncontradoError,
    ValidacaoError,
)
from comanda.utils.logger import logger
from comanda.utils.prometheus_metrics import conflitos_liquidacao_total, registrar_liquidacao


@dataclass
class _LinhaLiquidada:
    entrada: LiquidacaoItemIn
    linha: PedidoItemModel
    preco_unitario: Decimal

    @property
    def metodo(self) -> str:
        return self.entrada.metodo.value

    @property
    def subtotal(self) -> Decimal:
        return self.preco_unitario * self.entrada.quantidade


class LiquidacaoService:
    """
    Liquidação de mesas: lista o que falta pagar e confirma pagamentos
    divididos por método, com divisão de linhas em pagamentos parciais.
    """

    def __init__(self, db: Session, item_contract: IItemContract):
        self.db = db
        self.item_contract = item_contract
        self.repo = LiquidacaoRepository(db)
        self.pedido_repo = PedidoRepository(db)
        self.mesa_repo = MesaRepository(db)
        self.fatura_repo = FaturaRepository(db)

    def _get_mesa_or_404(self, mesa_id: int, contexto: ContextoSessao) -> MesaModel:
        mesa = self.mesa_repo.get_by_id_sucursal(mesa_id, contexto.sucursal_id)
        if not mesa:
            raise NaoEncontradoError(f"Mesa {mesa_id} não encontrada")
        return mesa

    # ------------------------------------------------------------------
    # Leitura
    # ------------------------------------------------------------------
    def listar_mesas_pendentes(self, contexto: ContextoSessao) -> List[MesaPendenteOut]:
        mesas: Dict[int, MesaPendenteOut] = {}
        for pedido in self.pedido_repo.list_pendentes_liquidacao_by_sucursal(contexto.sucursal_id):
            resumo = mesas.get(pedido.mesa_id)
            if resumo is None:
                resumo = MesaPendenteOut(
                    mesa_id=pedido.mesa_id,
                    mesa_nome=pedido.mesa.nome if pedido.mesa else None,
                    total=Decimal("0"),
                    quantidade_pedidos=0,
                )
                mesas[pedido.mesa_id] = resumo
            resumo.total += Decimal(str(pedido.total or 0))
            resumo.quantidade_pedidos += 1
            resumo.pedido_ids.append(pedido.id)
        return list(mesas.values())

    def listar_itens_pendentes(self, mesa_id: int, contexto: ContextoSessao) -> List[ItemPendenteOut]:
        mesa = self._get_mesa_or_404(mesa_id, contexto)
        pedidos = self.pedido_repo.list_pendentes_liquidacao_by_mesa(mesa.id)
        if not pedidos:
            return []

        ordem = {p.id: idx for idx, p in enumerate(pedidos)}
        linhas = self.pedido_repo.list_itens_nao_pagos(list(ordem))
        linhas.sort(key=lambda linha: (ordem[linha.pedido_id], linha.id))
        itens = self.item_contract.obter_itens([linha.item_id for linha in linhas])

        resultado: List[ItemPendenteOut] = []
        for linha in linhas:
            item = itens.get(linha.item_id)
            if item is None:
                logger.warning(f"[Liquidacao] Item {linha.item_id} da linha {linha.id} não encontrado no cardápio")
            pagavel = bool(item and item.cobravel)
            resultado.append(
                ItemPendenteOut(
                    pedido_item_id=linha.id,
                    pedido_id=linha.pedido_id,
                    item_id=linha.item_id,
                    nome=item.nome if item else f"Item {linha.item_id}",
                    tipo=item.tipo if item else "PRODUTO",
                    preco_unitario=item.preco if pagavel else Decimal("0"),
                    quantidade=linha.quantidade,
                    quantidade_selecionada=0,
                    nota=linha.nota,
                    pagavel=pagavel,
                )
            )
        return resultado

    # ------------------------------------------------------------------
    # Confirmação
    # ------------------------------------------------------------------
    def _validar_request(self, mesa: MesaModel, request: LiquidacaoRequest) -> List[_LinhaLiquidada]:
        selecionadas = [e for e in request.itens if e.quantidade > 0]
        if not selecionadas:
            raise ValidacaoError("Selecione ao menos um item para liquidar")

        sem_metodo = [e.pedido_item_id for e in selecionadas if e.metodo is None]
        if sem_metodo:
            raise ValidacaoError(f"Itens sem método de pagamento: {sem_metodo}")

        repetidas = [pid for pid, n in Counter(e.pedido_item_id for e in selecionadas).items() if n > 1]
        if repetidas:
            raise ValidacaoError(f"Linhas repetidas na seleção: {repetidas}")

        excedentes = [e.pedido_item_id for e in selecionadas if e.quantidade > e.quantidade_lida]
        if excedentes:
            raise ValidacaoError(f"Quantidade maior que a disponível nas linhas: {excedentes}")

        linhas = {linha.id: linha for linha in self.pedido_repo.list_itens_by_ids([e.pedido_item_id for e in selecionadas])}
        for entrada in selecionadas:
            linha = linhas.get(entrada.pedido_item_id)
            pedido = linha.pedido if linha else None
            if (
                linha is None
                or pedido.mesa_id != mesa.id
                or pedido.status != StatusPedido.PRONTO.value
                or pedido.liquidado
                or linha.pago
            ):
                raise NaoEncontradoError(f"Linha {entrada.pedido_item_id} não está pendente nesta mesa")

        itens = self.item_contract.obter_itens([linha.item_id for linha in linhas.values()])
        resultado: List[_LinhaLiquidada] = []
        for entrada in selecionadas:
            linha = linhas[entrada.pedido_item_id]
            item = itens.get(linha.item_id)
            if item is None:
                raise NaoEncontradoError(f"Item {linha.item_id} não encontrado")
            if not item.cobravel:
                raise ValidacaoError(f"'{item.nome}' é uma música e não é cobrada")
            resultado.append(_LinhaLiquidada(entrada=entrada, linha=linha, preco_unitario=item.preco))
        return resultado

    def confirmar_liquidacao(
        self,
        mesa_id: int,
        request: LiquidacaoRequest,
        contexto: ContextoSessao,
    ) -> LiquidacaoResultado:
        """
        Grava a liquidação numa única transação:
        1. agrupa as linhas por método
        2. um pagamento por método
        3. com fatura: uma fatura por (método, pedido)
        4. linhas inteiras viram PAGO; parciais são divididas
        5. pedidos sem linha cobrável pendente ficam liquidados
        """
        mesa = self._get_mesa_or_404(mesa_id, contexto)
        dados_fatura = validar_dados_fatura(request.fatura) if request.fatura else None
        selecionadas = self._validar_request(mesa, request)

        grupos: Dict[str, List[_LinhaLiquidada]] = {}
        for sel in selecionadas:
            grupos.setdefault(sel.metodo, []).append(sel)
        grupos = dict(sorted(grupos.items()))

        por_metodo: Dict[str, Decimal] = {
            metodo: sum((s.subtotal for s in linhas), Decimal("0")) for metodo, linhas in grupos.items()
        }
        pagamento_ids: List[int] = []
        fatura_ids: List[int] = []
        pedidos_liquidados: List[int] = []

        try:
            for metodo, total in por_metodo.items():
                pagamento = self.repo.add_pagamento(
                    PagamentoModel(
                        sucursal_id=mesa.sucursal_id,
                        mesa_id=mesa.id,
                        usuario_id=contexto.usuario_id,
                        total=total,
                        metodo=metodo,
                    )
                )
                pagamento_ids.append(pagamento.id)

            if dados_fatura:
                for metodo, linhas in grupos.items():
                    por_pedido: Dict[int, Decimal] = {}
                    for sel in linhas:
                        pedido_id = sel.linha.pedido_id
                        por_pedido[pedido_id] = por_pedido.get(pedido_id, Decimal("0")) + sel.subtotal
                    for pedido_id, valor in sorted(por_pedido.items()):
                        fatura = self.fatura_repo.add(
                            FaturaModel(
                                pedido_id=pedido_id,
                                mesa_id=mesa.id,
                                sucursal_id=mesa.sucursal_id,
                                nome=dados_fatura.nome,
                                identificacao=dados_fatura.identificacao,
                                email=dados_fatura.email,
                                telefone=dados_fatura.telefone,
                                endereco=dados_fatura.endereco,
                                valor=valor,
                                metodo_pagamento=metodo,
                                estado=EstadoFatura.PENDENTE.value,
                            )
                        )
                        fatura_ids.append(fatura.id)

            for sel in selecionadas:
                entrada = sel.entrada
                if entrada.quantidade == entrada.quantidade_lida:
                    afetadas = self.repo.liquidar_linha_integral(
                        entrada.pedido_item_id, entrada.quantidade_lida, sel.subtotal
                    )
                else:
                    afetadas = self.repo.decrementar_linha(
                        entrada.pedido_item_id,
                        entrada.quantidade_lida,
                        entrada.quantidade_lida - entrada.quantidade,
                    )
                    if afetadas:
                        self.repo.inserir_fragmento_pago(
                            pedido_id=sel.linha.pedido_id,
                            item_id=sel.linha.item_id,
                            quantidade=entrada.quantidade,
                            valor_pago=sel.subtotal,
                            nota=sel.linha.nota,
                        )
                if not afetadas:
                    raise ConflitoConcorrenciaError(
                        f"A linha {entrada.pedido_item_id} foi alterada por outro operador; atualize a mesa"
                    )

            for pedido_id in sorted({sel.linha.pedido_id for sel in selecionadas}):
                if not self.pedido_repo.possui_itens_cobraveis_nao_pagos(pedido_id):
                    self.pedido_repo.marcar_liquidado(pedido_id)
                    pedidos_liquidados.append(pedido_id)

            self.db.commit()
        except ComandaError as e:
            self.db.rollback()
            if isinstance(e, ConflitoConcorrenciaError):
                conflitos_liquidacao_total.inc()
            logger.warning(f"[Liquidacao] Mesa {mesa_id}: liquidação desfeita ({e.detail})")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Liquidacao] Mesa {mesa_id}: erro ao gravar liquidação: {e}")
            raise ArmazenamentoError(f"Erro ao gravar liquidação: {e}")

        # Os objetos carregados ficaram desatualizados pelas escritas em massa
        self.db.expire_all()

        total = sum(por_metodo.values(), Decimal("0"))
        unidades = sum(sel.entrada.quantidade for sel in selecionadas)
        registrar_liquidacao(por_metodo)
        resumo = ", ".join(f"{m}={v}" for m, v in por_metodo.items())
        logger.info(
            f"[Liquidacao] Mesa {mesa_id}: total={total} unidades={unidades} "
            f"({resumo}) pedidos_liquidados={pedidos_liquidados}"
        )
        self._publicar_eventos(mesa, selecionadas, pagamento_ids, fatura_ids, pedidos_liquidados)

        return LiquidacaoResultado(
            mesa_id=mesa.id,
            total=total,
            por_metodo=[TotalPorMetodo(metodo=m, total=v) for m, v in por_metodo.items()],
            unidades=unidades,
            pagamento_ids=pagamento_ids,
            fatura_ids=fatura_ids,
            pedidos_liquidados=pedidos_liquidados,
        )

    def _publicar_eventos(
        self,
        mesa: MesaModel,
        selecionadas: List[_LinhaLiquidada],
        pagamento_ids: List[int],
        fatura_ids: List[int],
        pedidos_liquidados: List[int],
    ) -> None:
        publicar(EventoMudanca(
            tipo=TipoEntidade.PAGAMENTO,
            acao="criado",
            sucursal_id=mesa.sucursal_id,
            ids=pagamento_ids,
            dados={"mesa_id": mesa.id},
        ))
        publicar(EventoMudanca(
            tipo=TipoEntidade.PEDIDO_ITEM,
            acao="liquidado",
            sucursal_id=mesa.sucursal_id,
            ids=[sel.entrada.pedido_item_id for sel in selecionadas],
            dados={"mesa_id": mesa.id},
        ))
        publicar(EventoMudanca(
            tipo=TipoEntidade.PEDIDO,
            acao="liquidacao",
            sucursal_id=mesa.sucursal_id,
            ids=sorted({sel.linha.pedido_id for sel in selecionadas}),
            dados={"mesa_id": mesa.id, "pedidos_liquidados": pedidos_liquidados},
        ))
        if fatura_ids:
            publicar(EventoMudanca(
                tipo=TipoEntidade.FATURA,
                acao="criada",
                sucursal_id=mesa.sucursal_id,
                ids=fatura_ids,
                dados={"mesa_id": mesa.id},
            ))
