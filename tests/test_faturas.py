import pytest

from comanda.api.cadastros.adapters.item_adapter import ItemAdapter
from comanda.api.faturas.schemas.schema_fatura import DadosFatura
from comanda.api.faturas.services.service_faturas import FaturaService, validar_identificacao
from comanda.api.liquidacoes.schemas.schema_liquidacao import LiquidacaoItemIn, LiquidacaoRequest
from comanda.api.liquidacoes.services.service_liquidacao import LiquidacaoService
from comanda.api.realtime.core.change_feed import TipoEntidade, on_change
from comanda.core.contexto import ContextoSessao
from comanda.core.exceptions import NaoEncontradoError, ValidacaoError


@pytest.fixture
def svc(db):
    return FaturaService(db)


@pytest.fixture
def liquidar(db, fabrica, cenario, contexto):
    """Liquida um pedido novo de uma cerveja pedindo fatura com os dados informados."""
    liquidacao = LiquidacaoService(db, item_contract=ItemAdapter(db))

    def _liquidar(dados: DadosFatura, metodo="DINHEIRO"):
        mesa = cenario["mesa"]
        pedido = fabrica.pedido(mesa, [(cenario["cerveja"], 1)])
        linha = pedido.itens[0]
        return liquidacao.confirmar_liquidacao(
            mesa.id,
            LiquidacaoRequest(
                itens=[LiquidacaoItemIn(pedido_item_id=linha.id, quantidade=1, quantidade_lida=1, metodo=metodo)],
                fatura=dados,
            ),
            contexto,
        )

    return _liquidar


def test_lista_faturas_pendentes(svc, liquidar, contexto):
    primeira = liquidar(DadosFatura(nome="Ana", identificacao="0912345678"))
    segunda = liquidar(DadosFatura(nome="Bruno", identificacao="1790012345001"), metodo="CARTAO")

    pendentes = svc.listar_pendentes(contexto)

    assert [f.id for f in pendentes] == segunda.fatura_ids + primeira.fatura_ids
    assert pendentes[0].metodo_pagamento == "CARTAO"
    assert pendentes[0].mesa_nome == "Mesa 1"
    assert all(f.estado == "PENDENTE" and f.emitida_em is None for f in pendentes)


def test_marcar_emitida_e_idempotente(svc, liquidar, contexto):
    fatura_id = liquidar(DadosFatura(nome="Ana", identificacao="0912345678")).fatura_ids[0]
    eventos = []
    on_change(TipoEntidade.FATURA, eventos.append)

    emitida = svc.marcar_emitida(fatura_id, contexto)
    de_novo = svc.marcar_emitida(fatura_id, contexto)

    assert emitida.estado == "EMITIDA"
    assert emitida.emitida_em is not None
    assert de_novo.emitida_em == emitida.emitida_em
    assert [(e.acao, e.ids) for e in eventos] == [("emitida", [fatura_id])]
    assert svc.listar_pendentes(contexto) == []


def test_marcar_emitida_de_outra_sucursal(svc, fabrica, cenario, liquidar):
    fatura_id = liquidar(DadosFatura(nome="Ana", identificacao="0912345678")).fatura_ids[0]
    outra = fabrica.sucursal(cenario["local"], nome="Filial")
    with pytest.raises(NaoEncontradoError):
        svc.marcar_emitida(fatura_id, ContextoSessao(usuario_id=1, sucursal_id=outra.id))


def test_dados_da_fatura_mais_recente(svc, liquidar, contexto):
    liquidar(DadosFatura(nome="Ana", identificacao="0912345678", email="antigo@exemplo.com"))
    ultima = liquidar(
        DadosFatura(nome="Ana Lima", identificacao="0912345678", email="ana@exemplo.com", telefone="099 123 4567")
    )

    dados = svc.buscar_dados_faturamento(" 0912345678 ", contexto)

    assert dados.ultima_fatura_id == ultima.fatura_ids[0]
    assert dados.nome == "Ana Lima"
    assert dados.email == "ana@exemplo.com"
    assert dados.telefone == "099 123 4567"
    assert dados.endereco is None


def test_dados_sem_fatura_anterior(svc, liquidar, contexto):
    liquidar(DadosFatura(nome="Ana", identificacao="0912345678"))
    with pytest.raises(NaoEncontradoError):
        svc.buscar_dados_faturamento("0987654321", contexto)


@pytest.mark.parametrize(
    "identificacao",
    ["", "123", "09123456789", "091234567a", "09123456780012", "٠١٢٣٤٥٦٧٨٩"],
)
def test_identificacao_invalida(identificacao):
    with pytest.raises(ValidacaoError):
        validar_identificacao(identificacao)
