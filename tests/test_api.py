from decimal import Decimal

from fastapi import Request

from comanda.core.admin_dependencies import get_contexto
from comanda.core.rls_context import get_rls_sucursal_id, get_rls_user_id
from comanda.core.security import create_access_token


def _url_mesa(mesa):
    return f"{mesa.slug}/{mesa.token}"


def test_health_e_metricas(client):
    assert client.get("/health").json() == {"status": "healthy"}

    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "comanda_http_requests_total" in resp.text


def test_rotas_admin_exigem_token(client):
    resp = client.get("/api/liquidacoes/admin/mesas")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Não autenticado"}

    resp = client.get("/api/liquidacoes/admin/mesas", headers={"Authorization": "Bearer invalido"})
    assert resp.status_code == 401

    sem_sucursal = create_access_token({"sub": "7"})
    resp = client.get("/api/liquidacoes/admin/mesas", headers={"Authorization": f"Bearer {sem_sucursal}"})
    assert resp.status_code == 401

    sucursal_em_lista = create_access_token({"sub": "7", "sucursal_id": [1]})
    resp = client.get("/api/liquidacoes/admin/mesas", headers={"Authorization": f"Bearer {sucursal_em_lista}"})
    assert resp.status_code == 401


def test_mesa_publica_pelo_qr_code(client, cenario):
    mesa = cenario["mesa"]
    resp = client.get(f"/api/mesas/client/{_url_mesa(mesa)}")
    assert resp.status_code == 200
    corpo = resp.json()
    assert corpo["nome"] == "Mesa 1"
    assert corpo["sucursal_id"] == cenario["sucursal"].id
    assert "token" not in corpo

    resp = client.get(f"/api/mesas/client/{mesa.slug}/outro")
    assert resp.status_code == 404
    assert resp.json()["tipo"] == "nao_encontrado"


def test_fluxo_da_mesa_ate_a_liquidacao(client, cenario, auth_headers):
    mesa = cenario["mesa"]
    resp = client.post(
        f"/api/pedidos/client/{_url_mesa(mesa)}",
        json={
            "itens": [
                {"item_id": cenario["cerveja"].id, "quantidade": 3},
                {"item_id": cenario["musica"].id, "quantidade": 1, "nota": "bem alto"},
            ]
        },
    )
    assert resp.status_code == 201
    pedido = resp.json()
    assert pedido["tipo"] == "MISTO"
    assert Decimal(pedido["total"]) == Decimal("30.00")

    for esperado in ("PREPARANDO", "PRONTO"):
        resp = client.post(f"/api/pedidos/admin/{pedido['id']}/avancar", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == esperado

    mesas = client.get("/api/liquidacoes/admin/mesas", headers=auth_headers).json()
    assert [(m["mesa_id"], Decimal(m["total"])) for m in mesas] == [(mesa.id, Decimal("30.00"))]

    itens = client.get(f"/api/liquidacoes/admin/mesas/{mesa.id}/itens", headers=auth_headers).json()
    cerveja = next(i for i in itens if i["pagavel"])
    musica = next(i for i in itens if not i["pagavel"])
    assert musica["nota"] == "bem alto"

    selecao = {
        "itens": [
            {
                "pedido_item_id": cerveja["pedido_item_id"],
                "quantidade": 2,
                "quantidade_lida": cerveja["quantidade"],
                "metodo": "CARTAO",
            }
        ]
    }
    resp = client.post(f"/api/liquidacoes/admin/mesas/{mesa.id}/confirmar", json=selecao, headers=auth_headers)
    assert resp.status_code == 200
    resultado = resp.json()
    assert Decimal(resultado["total"]) == Decimal("20.00")
    assert resultado["unidades"] == 2
    assert resultado["pedidos_liquidados"] == []

    # Mesma seleção de novo: a linha já não tem a quantidade lida
    resp = client.post(f"/api/liquidacoes/admin/mesas/{mesa.id}/confirmar", json=selecao, headers=auth_headers)
    assert resp.status_code == 409
    assert resp.json()["tipo"] == "conflito_concorrencia"

    itens = client.get(f"/api/liquidacoes/admin/mesas/{mesa.id}/itens", headers=auth_headers).json()
    restante = next(i for i in itens if i["pagavel"])
    assert restante["quantidade"] == 1

    resp = client.post(
        f"/api/liquidacoes/admin/mesas/{mesa.id}/confirmar",
        json={
            "itens": [
                {
                    "pedido_item_id": restante["pedido_item_id"],
                    "quantidade": 1,
                    "quantidade_lida": 1,
                    "metodo": "DINHEIRO",
                }
            ]
        },
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["pedidos_liquidados"] == [pedido["id"]]
    assert client.get("/api/liquidacoes/admin/mesas", headers=auth_headers).json() == []


def test_erros_de_liquidacao(client, fabrica, cenario, auth_headers):
    mesa = cenario["mesa"]
    pedido = fabrica.pedido(mesa, [(cenario["cerveja"], 1), (cenario["musica"], 1)])
    cerveja, musica = pedido.itens
    url = f"/api/liquidacoes/admin/mesas/{mesa.id}/confirmar"

    resp = client.post(url, json={"itens": []}, headers=auth_headers)
    assert resp.status_code == 422
    assert resp.json()["tipo"] == "validacao"

    resp = client.post(
        url,
        json={"itens": [{"pedido_item_id": musica.id, "quantidade": 1, "quantidade_lida": 1, "metodo": "DINHEIRO"}]},
        headers=auth_headers,
    )
    assert resp.status_code == 422

    resp = client.post(
        url,
        json={"itens": [{"pedido_item_id": cerveja.id, "quantidade": 1, "quantidade_lida": 1, "metodo": "CHEQUE"}]},
        headers=auth_headers,
    )
    assert resp.status_code == 422

    resp = client.post(
        url,
        json={"itens": [{"pedido_item_id": 999999, "quantidade": 1, "quantidade_lida": 1, "metodo": "DINHEIRO"}]},
        headers=auth_headers,
    )
    assert resp.status_code == 404

    resp = client.get("/api/liquidacoes/admin/mesas/999999/itens", headers=auth_headers)
    assert resp.status_code == 404


def test_fechamento_diario(client, fabrica, cenario, auth_headers):
    fabrica.pedido(cenario["mesa"], [(cenario["musica"], 2)])

    resp = client.get(
        "/api/relatorios/admin/fechamento-diario",
        params={"data": "2000-01-01", "timezone": "UTC"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    corpo = resp.json()
    assert corpo["pedidos"] == []
    assert corpo["musicas"] == {"total": 0, "listado": []}
    assert Decimal(corpo["receitas"]["total"]) == Decimal("0")

    resp = client.get(
        "/api/relatorios/admin/fechamento-diario",
        params={"data": "2000-01-01", "timezone": "Lua/Crateras"},
        headers=auth_headers,
    )
    assert resp.status_code == 422

    resp = client.get(
        "/api/relatorios/admin/fechamento-diario",
        params={"data": "01/01/2000"},
        headers=auth_headers,
    )
    assert resp.status_code == 422


def test_contexto_rls_limpo_ao_fim_do_request(db, contexto, auth_headers):
    request = Request({"type": "http", "headers": [(b"authorization", auth_headers["Authorization"].encode())]})
    dependencia = get_contexto(request, db)

    recebido = next(dependencia)
    assert recebido.sucursal_id == contexto.sucursal_id
    assert (get_rls_user_id(), get_rls_sucursal_id()) == (7, contexto.sucursal_id)

    dependencia.close()
    assert (get_rls_user_id(), get_rls_sucursal_id()) == (None, None)
