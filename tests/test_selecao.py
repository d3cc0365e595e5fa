from decimal import Decimal

import pytest

from comanda.api.faturas.schemas.schema_fatura import DadosFatura
from comanda.api.liquidacoes.models.model_pagamento import MetodoPagamento
from comanda.api.liquidacoes.schemas.schema_liquidacao import ItemPendenteOut
from comanda.api.liquidacoes.services.selecao import SelecaoLiquidacao, normalizar_quantidade
from comanda.core.exceptions import NaoEncontradoError, ValidacaoError


def _linha(pedido_item_id, quantidade, preco="10.00", pagavel=True, pedido_id=1):
    return ItemPendenteOut(
        pedido_item_id=pedido_item_id,
        pedido_id=pedido_id,
        item_id=100 + pedido_item_id,
        nome=f"Item {pedido_item_id}",
        tipo="PRODUTO" if pagavel else "MUSICA",
        preco_unitario=Decimal(preco) if pagavel else Decimal("0"),
        quantidade=quantidade,
        pagavel=pagavel,
    )


@pytest.fixture
def selecao():
    return SelecaoLiquidacao(
        mesa_id=1,
        itens=[
            _linha(1, 3, "10.00"),
            _linha(2, 2, "6.00"),
            _linha(3, 1, pagavel=False),
        ],
    )


@pytest.mark.parametrize(
    "valor, esperado",
    [
        (2, 2),
        (2.9, 2),
        ("2", 2),
        ("1.7", 1),
        (-1, 0),
        (99, 3),
        ("abc", 0),
        (None, 0),
        (float("nan"), 0),
        (float("inf"), 3),
        (10 ** 400, 3),
        (-(10 ** 400), 0),
        (Decimal("1e400"), 3),
    ],
)
def test_normalizar_quantidade_limita_e_arredonda_para_baixo(valor, esperado):
    assert normalizar_quantidade(valor, 3) == esperado


def test_selecao_comeca_vazia(selecao):
    assert selecao.unidades_selecionadas == 0
    assert selecao.total_selecionado == Decimal("0")
    assert all(linha.quantidade_selecionada == 0 for linha in selecao.linhas)


def test_selecionar_quantidade_aplica_limite(selecao):
    assert selecao.selecionar_quantidade(1, 10) == 3
    assert selecao.selecionar_quantidade(2, -4) == 0
    assert selecao.selecionar_quantidade(2, 1.5) == 1
    assert selecao.total_selecionado == Decimal("36.00")
    assert selecao.unidades_selecionadas == 4


def test_musica_nunca_e_selecionada(selecao):
    assert selecao.selecionar_quantidade(3, 1) == 0
    selecao.selecionar_tudo()
    assert selecao.selecionar_quantidade(3, 5) == 0
    assert selecao.unidades_selecionadas == 5


def test_linha_desconhecida(selecao):
    with pytest.raises(NaoEncontradoError):
        selecao.selecionar_quantidade(999, 1)


def test_atribuir_metodo_so_nas_linhas_selecionadas(selecao):
    selecao.selecionar_quantidade(1, 2)
    selecao.atribuir_metodo("cartao")
    linhas = {linha.item.pedido_item_id: linha for linha in selecao.linhas}
    assert linhas[1].metodo == MetodoPagamento.CARTAO
    assert linhas[2].metodo is None
    assert linhas[3].metodo is None

    selecao.selecionar_quantidade(2, 2)
    selecao.atribuir_metodo(MetodoPagamento.DINHEIRO)
    assert linhas[1].metodo == MetodoPagamento.DINHEIRO
    assert selecao.resumo_por_metodo() == {"DINHEIRO": Decimal("32.00")}


def test_metodos_diferentes_por_linha(selecao):
    selecao.selecionar_quantidade(1, 3)
    selecao.atribuir_metodo("DINHEIRO")
    selecao.selecionar_quantidade(1, 0)
    selecao.selecionar_quantidade(2, 2)
    selecao.atribuir_metodo("CARTAO")
    selecao.selecionar_quantidade(1, 3)
    assert selecao.resumo_por_metodo() == {
        "DINHEIRO": Decimal("30.00"),
        "CARTAO": Decimal("12.00"),
    }


def test_metodo_invalido(selecao):
    selecao.selecionar_quantidade(1, 1)
    with pytest.raises(ValidacaoError):
        selecao.atribuir_metodo("cheque")


def test_limpar_selecao(selecao):
    selecao.selecionar_tudo()
    selecao.atribuir_metodo("CARTAO")
    selecao.limpar_selecao()
    assert selecao.unidades_selecionadas == 0
    assert selecao.resumo_por_metodo() == {}


def test_para_request_leva_quantidade_lida(selecao):
    selecao.selecionar_quantidade(1, 2)
    selecao.atribuir_metodo("CARTAO")
    fatura = DadosFatura(nome="Ana", identificacao="0912345678")
    request = selecao.para_request(fatura)

    assert len(request.itens) == 1
    entrada = request.itens[0]
    assert entrada.pedido_item_id == 1
    assert entrada.quantidade == 2
    assert entrada.quantidade_lida == 3
    assert entrada.metodo == MetodoPagamento.CARTAO
    assert request.fatura.identificacao == "0912345678"
