from decimal import Decimal

import pytest

from comanda.api.cadastros.adapters.item_adapter import ItemAdapter
from comanda.api.pedidos.schemas.schema_pedido import PedidoCreateRequest, PedidoItemIn
from comanda.api.pedidos.services.service_pedidos import PedidoService
from comanda.core.exceptions import NaoEncontradoError, ValidacaoError


@pytest.fixture
def svc(db):
    return PedidoService(db, item_contract=ItemAdapter(db))


def _carrinho(*itens):
    return PedidoCreateRequest(itens=[PedidoItemIn(item_id=i.id, quantidade=q) for i, q in itens])


def test_cria_pedido_misto_com_total_sem_musicas(svc, cenario):
    mesa = cenario["mesa"]
    pedido = svc.criar_pedido(
        mesa.slug,
        mesa.token,
        _carrinho((cenario["cerveja"], 2), (cenario["musica"], 1)),
    )
    assert pedido.status == "PENDENTE"
    assert pedido.tipo == "MISTO"
    assert pedido.total == Decimal("20.00")
    assert pedido.liquidado is False
    assert [(i.quantidade, i.estado) for i in pedido.itens] == [(2, "PENDENTE"), (1, "PENDENTE")]


def test_carrinho_so_de_musicas(svc, cenario):
    mesa = cenario["mesa"]
    pedido = svc.criar_pedido(mesa.slug, mesa.token, _carrinho((cenario["musica"], 1)))
    assert pedido.tipo == "MUSICAS"
    assert pedido.total == Decimal("0")


def test_carrinho_vazio(svc, cenario):
    mesa = cenario["mesa"]
    with pytest.raises(ValidacaoError):
        svc.criar_pedido(mesa.slug, mesa.token, PedidoCreateRequest(itens=[]))


def test_mesa_inativa_ou_token_errado(svc, fabrica, cenario):
    inativa = fabrica.mesa(cenario["sucursal"], ativa=False)
    with pytest.raises(NaoEncontradoError):
        svc.criar_pedido(inativa.slug, inativa.token, _carrinho((cenario["cerveja"], 1)))
    with pytest.raises(NaoEncontradoError):
        svc.criar_pedido(cenario["mesa"].slug, "errado", _carrinho((cenario["cerveja"], 1)))


def test_item_indisponivel_na_sucursal(svc, fabrica, cenario):
    fabrica.indisponivel(cenario["porcao"], cenario["sucursal"])
    mesa = cenario["mesa"]
    with pytest.raises(ValidacaoError):
        svc.criar_pedido(mesa.slug, mesa.token, _carrinho((cenario["porcao"], 1)))


def test_item_de_outro_local(svc, fabrica, cenario):
    outro_local = fabrica.local("Outro bar")
    item = fabrica.produto(outro_local, "Vinho", "30.00")
    mesa = cenario["mesa"]
    with pytest.raises(NaoEncontradoError):
        svc.criar_pedido(mesa.slug, mesa.token, _carrinho((item, 1)))


def test_contrato_de_itens(db, cenario):
    contrato = ItemAdapter(db)

    cerveja = contrato.obter_item(cenario["cerveja"].id)
    musica = contrato.obter_item(cenario["musica"].id)

    assert (cerveja.nome, cerveja.preco, cerveja.cobravel) == ("Cerveja", Decimal("10.00"), True)
    assert (musica.artista, musica.preco, musica.cobravel) == ("Queen", Decimal("0"), False)
    assert contrato.obter_item(999999) is None
