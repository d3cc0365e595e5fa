from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from decimal import Decimal
from typing import Dict, Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.exc import SQLAlchemyError

from comanda.api.cadastros.models.model_item import TipoItem
from comanda.api.pedidos.models.model_pedido import PedidoModel
from comanda.api.pedidos.services.service_pedido_helpers import derivar_tipo_pedido
from comanda.api.relatorios.repositories.repo_fechamento import FechamentoRepository
from comanda.api.relatorios.schemas.schema_fechamento import (
    FechamentoDiarioOut,
    ItemFechamento,
    MusicaFechamento,
    MusicasFechamento,
    PedidoFechamento,
    ReceitaMetodoOut,
    ReceitasFechamento,
)
from comanda.config.settings import TIMEZONE_PADRAO
from comanda.core.exceptions import ArmazenamentoError, NaoEncontradoError, ValidacaoError
from comanda.utils.logger import logger


def _parse_data(valor: Union[date, str]) -> date:
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    try:
        return date.fromisoformat(str(valor))
    except ValueError:
        raise ValidacaoError("Data inválida. Use o formato YYYY-MM-DD")


def _zona(nome: str) -> ZoneInfo:
    try:
        return ZoneInfo(nome)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidacaoError(f"Timezone desconhecido: {nome}")


def limites_dia_utc(dia: date, zona: ZoneInfo) -> Tuple[datetime, datetime]:
    """
    Converte o dia local em [inicio, fim) UTC. Cada extremo é convertido
    separadamente, então dias de 23h ou 25h (horário de verão) ficam corretos.
    """
    inicio_local = datetime.combine(dia, time.min, tzinfo=zona)
    fim_local = datetime.combine(dia + timedelta(days=1), time.min, tzinfo=zona)
    return inicio_local.astimezone(dt_timezone.utc), fim_local.astimezone(dt_timezone.utc)


class FechamentoDiarioService:
    def __init__(self, repository: FechamentoRepository) -> None:
        self.repository = repository

    def _resolver_timezone(self, timezone: Optional[str], sucursal_id: int) -> str:
        if timezone:
            return timezone
        sucursal = self.repository.get_sucursal(sucursal_id)
        if sucursal is None:
            raise NaoEncontradoError(f"Sucursal {sucursal_id} não encontrada")
        return sucursal.timezone or TIMEZONE_PADRAO

    @staticmethod
    def _itens_agrupados(pedido: PedidoModel) -> list[ItemFechamento]:
        """Junta fragmentos da mesma linha (liquidações parciais) por item."""
        agrupados: Dict[int, ItemFechamento] = {}
        for linha in pedido.itens:
            item = linha.item
            cobravel = item is not None and item.tipo == TipoItem.PRODUTO.value
            preco = item.preco_efetivo if item is not None else Decimal("0")
            atual = agrupados.get(linha.item_id)
            if atual is None:
                atual = ItemFechamento(
                    item_id=linha.item_id,
                    nome=item.nome if item is not None else f"Item {linha.item_id}",
                    tipo=item.tipo if item is not None else TipoItem.PRODUTO.value,
                    quantidade=0,
                    preco_unitario=preco,
                    subtotal=Decimal("0"),
                )
                agrupados[linha.item_id] = atual
            atual.quantidade += linha.quantidade
            if cobravel:
                atual.subtotal += preco * linha.quantidade
        return list(agrupados.values())

    def fechamento_diario(
        self,
        data: Union[date, str],
        timezone: Optional[str],
        sucursal_id: int,
    ) -> FechamentoDiarioOut:
        dia = _parse_data(data)
        tz_nome = self._resolver_timezone(timezone, sucursal_id)
        inicio, fim = limites_dia_utc(dia, _zona(tz_nome))

        try:
            pedidos = self.repository.pedidos_do_periodo(sucursal_id, inicio, fim)
            receitas = self.repository.receitas_por_metodo(sucursal_id, inicio, fim)
            musicas = self.repository.musicas_do_periodo(sucursal_id, inicio, fim)
        except SQLAlchemyError as e:
            logger.error(f"[Fechamento] Erro ao consultar fechamento de {dia} (sucursal {sucursal_id}): {e}")
            raise ArmazenamentoError(f"Erro ao consultar fechamento diário: {e}")

        pedidos_out = []
        for pedido in pedidos:
            itens = self._itens_agrupados(pedido)
            pedidos_out.append(
                PedidoFechamento(
                    id=pedido.id,
                    mesa_id=pedido.mesa_id,
                    mesa_nome=pedido.mesa.nome if pedido.mesa else None,
                    tipo=derivar_tipo_pedido(i.tipo for i in itens) if itens else pedido.tipo,
                    status=pedido.status,
                    status_descricao=pedido.status_descricao,
                    total=pedido.total,
                    liquidado=bool(pedido.liquidado),
                    created_at=pedido.created_at,
                    itens=itens,
                )
            )

        logger.info(
            f"[Fechamento] {dia} ({tz_nome}) sucursal={sucursal_id}: "
            f"{len(pedidos_out)} pedido(s), {len(receitas)} método(s), {len(musicas)} música(s)"
        )
        return FechamentoDiarioOut(
            data=dia,
            timezone=tz_nome,
            inicio_utc=inicio,
            fim_utc=fim,
            sucursal_id=sucursal_id,
            musicas=MusicasFechamento(
                total=sum(m.quantidade for m in musicas),
                listado=[
                    MusicaFechamento(item_id=m.item_id, nome=m.nome, artista=m.artista, quantidade=m.quantidade)
                    for m in musicas
                ],
            ),
            receitas=ReceitasFechamento(
                por_metodo=[ReceitaMetodoOut(metodo=r.metodo, total=r.total) for r in receitas],
                total=sum((r.total for r in receitas), Decimal("0")),
            ),
            pedidos=pedidos_out,
        )
