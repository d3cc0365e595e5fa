import os

# Configuração antes de importar a aplicação
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "chave-de-teste"
os.environ["INICIALIZAR_BANCO"] = "false"
os.environ["RUNNING_IN_DOCKER"] = "1"

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from comanda.api.cadastros.models.model_item import ItemModel, ItemSucursalModel, TipoItem
from comanda.api.cadastros.models.model_local import LocalModel
from comanda.api.cadastros.models.model_mesa import MesaModel
from comanda.api.cadastros.models.model_sucursal import SucursalModel
from comanda.api.pedidos.models.model_pedido import PedidoModel, StatusPedido
from comanda.api.pedidos.models.model_pedido_item import PedidoItemModel, EstadoItem
from comanda.api.pedidos.services.service_pedido_helpers import derivar_tipo_pedido
from comanda.api.realtime.core.change_feed import change_feed
from comanda.core.contexto import ContextoSessao
from comanda.core.security import create_access_token
from comanda.database.db_connection import Base, SessionLocal, engine, get_db
from comanda.database.init_db import inicializar_banco
from comanda.main import app


class Fabrica:
    """Cria registros de teste com valores padrão razoáveis."""

    def __init__(self, db):
        self.db = db
        self._seq = 0

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    def local(self, nome="Bar Central"):
        local = LocalModel(nome=nome, ativo=True)
        self.db.add(local)
        self.db.commit()
        return local

    def sucursal(self, local=None, nome="Matriz", timezone=None):
        local = local or self.local()
        sucursal = SucursalModel(local_id=local.id, nome=nome, timezone=timezone, ativa=True)
        self.db.add(sucursal)
        self.db.commit()
        return sucursal

    def mesa(self, sucursal, nome=None, ativa=True):
        n = self._next()
        mesa = MesaModel(
            sucursal_id=sucursal.id,
            nome=nome or f"Mesa {n}",
            slug=f"mesa-{n}",
            token=f"tok{n:04d}",
            ativa=ativa,
        )
        self.db.add(mesa)
        self.db.commit()
        return mesa

    def produto(self, local, nome="Cerveja", preco="10.00", ativo=True):
        item = ItemModel(
            local_id=local.id,
            nome=nome,
            categoria="Bebidas",
            tipo=TipoItem.PRODUTO.value,
            preco=Decimal(preco),
            ativo=ativo,
        )
        self.db.add(item)
        self.db.commit()
        return item

    def musica(self, local, nome="Bohemian Rhapsody", artista="Queen"):
        item = ItemModel(
            local_id=local.id,
            nome=nome,
            tipo=TipoItem.MUSICA.value,
            preco=None,
            artista=artista,
            ativo=True,
        )
        self.db.add(item)
        self.db.commit()
        return item

    def indisponivel(self, item, sucursal):
        self.db.add(ItemSucursalModel(item_id=item.id, sucursal_id=sucursal.id, disponivel=False))
        self.db.commit()

    def pedido(self, mesa, linhas, status=StatusPedido.PRONTO.value, created_at=None, liquidado=False):
        """`linhas` é uma lista de (item, quantidade)."""
        total = sum(
            (item.preco_efetivo * qtd for item, qtd in linhas),
            Decimal("0"),
        )
        pedido = PedidoModel(
            sucursal_id=mesa.sucursal_id,
            mesa_id=mesa.id,
            tipo=derivar_tipo_pedido(item.tipo for item, _ in linhas),
            status=status,
            total=total,
            liquidado=liquidado,
            created_at=created_at or datetime.now(timezone.utc).replace(microsecond=0),
            itens=[
                PedidoItemModel(item_id=item.id, quantidade=qtd, estado=EstadoItem.PENDENTE.value)
                for item, qtd in linhas
            ],
        )
        self.db.add(pedido)
        self.db.commit()
        return pedido


@pytest.fixture(autouse=True)
def banco():
    inicializar_banco(engine)
    change_feed.limpar()
    yield
    change_feed.limpar()
    Base.metadata.drop_all(engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fabrica(db):
    return Fabrica(db)


@pytest.fixture
def cenario(fabrica):
    """Local com uma sucursal, uma mesa, dois produtos e uma música."""
    local = fabrica.local()
    sucursal = fabrica.sucursal(local)
    mesa = fabrica.mesa(sucursal, nome="Mesa 1")
    return {
        "local": local,
        "sucursal": sucursal,
        "mesa": mesa,
        "cerveja": fabrica.produto(local, "Cerveja", "10.00"),
        "porcao": fabrica.produto(local, "Porção de fritas", "6.00"),
        "musica": fabrica.musica(local),
    }


@pytest.fixture
def contexto(cenario):
    return ContextoSessao(usuario_id=7, sucursal_id=cenario["sucursal"].id, username="caixa")


@pytest.fixture
def client(db):
    def _get_db():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(contexto):
    token = create_access_token({"sub": str(contexto.usuario_id), "sucursal_id": contexto.sucursal_id})
    return {"Authorization": f"Bearer {token}"}
