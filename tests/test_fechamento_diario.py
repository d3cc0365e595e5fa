from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from comanda.api.cadastros.adapters.item_adapter import ItemAdapter
from comanda.api.liquidacoes.models.model_pagamento import PagamentoModel
from comanda.api.liquidacoes.schemas.schema_liquidacao import LiquidacaoItemIn, LiquidacaoRequest
from comanda.api.liquidacoes.services.service_liquidacao import LiquidacaoService
from comanda.api.pedidos.models.model_pedido import StatusPedido
from comanda.api.relatorios.repositories.repo_fechamento import FechamentoRepository
from comanda.api.relatorios.services.service_fechamento_diario import (
    FechamentoDiarioService,
    limites_dia_utc,
)
from comanda.core.exceptions import ValidacaoError

DIA = date(2024, 3, 10)


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def svc(db):
    return FechamentoDiarioService(FechamentoRepository(db))


@pytest.fixture
def movimento(db, fabrica, cenario):
    """Pedidos e pagamentos em volta do dia 10/03 em Guayaquil (UTC-5)."""
    mesa = cenario["mesa"]
    antes = fabrica.pedido(mesa, [(cenario["cerveja"], 1)], created_at=_utc(2024, 3, 10, 4, 59))
    manha = fabrica.pedido(
        mesa,
        [(cenario["cerveja"], 2), (cenario["musica"], 1)],
        created_at=_utc(2024, 3, 10, 15, 0),
    )
    noite = fabrica.pedido(
        mesa,
        [(cenario["musica"], 2)],
        created_at=_utc(2024, 3, 11, 4, 0),
    )
    outra_musica = fabrica.musica(cenario["local"], nome="Yesterday", artista="The Beatles")
    cancelado = fabrica.pedido(
        mesa,
        [(outra_musica, 5)],
        status=StatusPedido.CANCELADO.value,
        created_at=_utc(2024, 3, 10, 16, 0),
    )
    for metodo, total, quando in [
        ("DINHEIRO", "20.00", _utc(2024, 3, 10, 16, 0)),
        ("CARTAO", "15.50", _utc(2024, 3, 10, 20, 0)),
        ("DINHEIRO", "5.00", _utc(2024, 3, 11, 1, 0)),
        ("CARTAO", "99.00", _utc(2024, 3, 11, 5, 0)),
    ]:
        db.add(
            PagamentoModel(
                sucursal_id=mesa.sucursal_id,
                mesa_id=mesa.id,
                total=Decimal(total),
                metodo=metodo,
                created_at=quando,
            )
        )
    db.commit()
    return {"antes": antes, "manha": manha, "noite": noite, "cancelado": cancelado}


def test_limites_do_dia_em_utc():
    inicio, fim = limites_dia_utc(DIA, ZoneInfo("America/Guayaquil"))
    assert inicio == _utc(2024, 3, 10, 5, 0)
    assert fim == _utc(2024, 3, 11, 5, 0)


def test_limites_em_dia_de_horario_de_verao():
    inicio, fim = limites_dia_utc(DIA, ZoneInfo("America/New_York"))
    assert inicio == _utc(2024, 3, 10, 5, 0)
    assert fim - inicio == timedelta(hours=23)


def test_fechamento_do_dia(svc, cenario, movimento):
    relatorio = svc.fechamento_diario(DIA, "America/Guayaquil", cenario["sucursal"].id)

    assert relatorio.timezone == "America/Guayaquil"
    assert [p.id for p in relatorio.pedidos] == [
        movimento["noite"].id,
        movimento["cancelado"].id,
        movimento["manha"].id,
    ]

    assert relatorio.receitas.total == Decimal("40.50")
    assert [(r.metodo, r.total) for r in relatorio.receitas.por_metodo] == [
        ("CARTAO", Decimal("15.50")),
        ("DINHEIRO", Decimal("25.00")),
    ]

    # Pedido cancelado não entra na contagem de músicas
    assert relatorio.musicas.total == 3
    assert [(m.nome, m.artista, m.quantidade) for m in relatorio.musicas.listado] == [
        ("Bohemian Rhapsody", "Queen", 3),
    ]

    manha = relatorio.pedidos[2]
    assert manha.tipo == "MISTO"
    assert manha.mesa_nome == "Mesa 1"
    assert manha.status_descricao == "Pronto"
    assert [(i.nome, i.tipo, i.quantidade, i.preco_unitario, i.subtotal) for i in manha.itens] == [
        ("Cerveja", "PRODUTO", 2, Decimal("10.00"), Decimal("20.00")),
        ("Bohemian Rhapsody", "MUSICA", 1, Decimal("0"), Decimal("0")),
    ]
    assert relatorio.pedidos[0].tipo == "MUSICAS"


def test_timezone_padrao_da_sucursal(svc, fabrica, cenario, movimento):
    sucursal = fabrica.sucursal(cenario["local"], nome="Filial", timezone="UTC")
    relatorio = svc.fechamento_diario(DIA, None, sucursal.id)
    assert relatorio.timezone == "UTC"
    assert relatorio.inicio_utc == _utc(2024, 3, 10, 0, 0)

    relatorio = svc.fechamento_diario("2024-03-10", None, cenario["sucursal"].id)
    assert relatorio.timezone == "America/Guayaquil"
    assert len(relatorio.pedidos) == 3


def test_fragmentos_de_liquidacao_parcial_sao_agrupados(svc, db, fabrica, cenario, contexto):
    mesa = cenario["mesa"]
    pedido = fabrica.pedido(mesa, [(cenario["cerveja"], 3)])
    linha = pedido.itens[0]
    LiquidacaoService(db, item_contract=ItemAdapter(db)).confirmar_liquidacao(
        mesa.id,
        LiquidacaoRequest(
            itens=[LiquidacaoItemIn(pedido_item_id=linha.id, quantidade=2, quantidade_lida=3, metodo="CARTAO")]
        ),
        contexto,
    )

    hoje = datetime.now(ZoneInfo("America/Guayaquil")).date()
    relatorio = svc.fechamento_diario(hoje, "America/Guayaquil", cenario["sucursal"].id)

    assert len(relatorio.pedidos) == 1
    itens = relatorio.pedidos[0].itens
    assert [(i.nome, i.quantidade, i.subtotal) for i in itens] == [("Cerveja", 3, Decimal("30.00"))]
    assert relatorio.receitas.total == Decimal("20.00")


def test_fechamento_e_deterministico(svc, cenario, movimento):
    a = svc.fechamento_diario(DIA, "America/Guayaquil", cenario["sucursal"].id)
    b = svc.fechamento_diario(DIA, "America/Guayaquil", cenario["sucursal"].id)
    assert a.model_dump() == b.model_dump()


@pytest.mark.parametrize("tz", ["Marte/Olympus", "GMT+99"])
def test_timezone_desconhecido(svc, cenario, tz):
    with pytest.raises(ValidacaoError):
        svc.fechamento_diario(DIA, tz, cenario["sucursal"].id)


def test_data_invalida(svc, cenario):
    with pytest.raises(ValidacaoError):
        svc.fechamento_diario("10/03/2024", "America/Guayaquil", cenario["sucursal"].id)
