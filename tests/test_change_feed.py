from comanda.api.realtime.core.change_feed import ChangeFeed, EventoMudanca, TipoEntidade


def _evento(tipo=TipoEntidade.PEDIDO, acao="status"):
    return EventoMudanca(tipo=tipo, acao=acao, sucursal_id=1, ids=[10])


def test_entrega_somente_para_o_tipo_assinado():
    feed = ChangeFeed()
    pedidos, faturas = [], []
    feed.on_change(TipoEntidade.PEDIDO, pedidos.append)
    feed.on_change(TipoEntidade.FATURA, faturas.append)

    feed.publicar(_evento())

    assert [e.acao for e in pedidos] == ["status"]
    assert faturas == []


def test_cancelar_assinatura():
    feed = ChangeFeed()
    recebidos = []
    cancelar = feed.on_change(TipoEntidade.PEDIDO, recebidos.append)

    feed.publicar(_evento(acao="primeiro"))
    cancelar()
    cancelar()
    feed.publicar(_evento(acao="segundo"))

    assert [e.acao for e in recebidos] == ["primeiro"]


def test_assinante_com_erro_nao_interrompe_os_demais():
    feed = ChangeFeed()
    recebidos = []

    def quebra(evento):
        raise RuntimeError("tela desconectada")

    feed.on_change(TipoEntidade.PAGAMENTO, quebra)
    feed.on_change(TipoEntidade.PAGAMENTO, recebidos.append)

    feed.publicar(_evento(tipo=TipoEntidade.PAGAMENTO, acao="criado"))

    assert [e.acao for e in recebidos] == ["criado"]


def test_limpar_remove_todos():
    feed = ChangeFeed()
    recebidos = []
    feed.on_change(TipoEntidade.PEDIDO_ITEM, recebidos.append)
    feed.limpar()
    feed.publicar(_evento(tipo=TipoEntidade.PEDIDO_ITEM))
    assert recebidos == []
