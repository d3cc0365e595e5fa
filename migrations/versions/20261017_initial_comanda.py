"""Initial comanda schema: cadastros, pedidos e liquidacoes

Revision ID: 20261017_initial_comanda
Revises: 
Create Date: 2026-10-17 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261017_initial_comanda"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Ensure schemas exist
    op.execute("CREATE SCHEMA IF NOT EXISTS cadastros")
    op.execute("CREATE SCHEMA IF NOT EXISTS pedidos")
    op.execute("CREATE SCHEMA IF NOT EXISTS liquidacoes")

    # cadastros.locais
    op.create_table(
        "locais",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("nome", sa.String(120), nullable=False),
        sa.Column("ativo", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        schema="cadastros",
    )

    # cadastros.sucursais
    op.create_table(
        "sucursais",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("local_id", sa.Integer, sa.ForeignKey("cadastros.locais.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("nome", sa.String(120), nullable=False),
        sa.Column("timezone", sa.String(64), nullable=True),
        sa.Column("ativa", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        schema="cadastros",
    )
    op.create_index("idx_sucursais_local", "sucursais", ["local_id"], schema="cadastros")

    # cadastros.mesas
    op.create_table(
        "mesas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sucursal_id", sa.Integer, sa.ForeignKey("cadastros.sucursais.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("nome", sa.String(60), nullable=False),
        sa.Column("slug", sa.String(80), nullable=False),
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column("ativa", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("pin_hash", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.UniqueConstraint("slug", "token", name="uq_mesas_slug_token"),
        schema="cadastros",
    )
    op.create_index("idx_mesas_sucursal", "mesas", ["sucursal_id"], schema="cadastros")

    # cadastros.itens — produtos e músicas
    op.create_table(
        "itens",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("local_id", sa.Integer, sa.ForeignKey("cadastros.locais.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("nome", sa.String(160), nullable=False),
        sa.Column("categoria", sa.String(80), nullable=True),
        sa.Column("tipo", sa.String(7), nullable=False, server_default="PRODUTO"),
        sa.Column("preco", sa.Numeric(18, 2), nullable=True),
        sa.Column("artista", sa.String(160), nullable=True),
        sa.Column("ativo", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("tipo IN ('PRODUTO', 'MUSICA')", name="ck_itens_tipo"),
        schema="cadastros",
    )
    op.create_index("idx_itens_local", "itens", ["local_id"], schema="cadastros")

    # cadastros.itens_sucursal — disponibilidade por sucursal
    op.create_table(
        "itens_sucursal",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("item_id", sa.Integer, sa.ForeignKey("cadastros.itens.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sucursal_id", sa.Integer, sa.ForeignKey("cadastros.sucursais.id", ondelete="CASCADE"), nullable=False),
        sa.Column("disponivel", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.UniqueConstraint("item_id", "sucursal_id", name="uq_itens_sucursal_item_sucursal"),
        schema="cadastros",
    )

    # pedidos.pedidos
    op.create_table(
        "pedidos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sucursal_id", sa.Integer, sa.ForeignKey("cadastros.sucursais.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("mesa_id", sa.Integer, sa.ForeignKey("cadastros.mesas.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("tipo", sa.String(8), nullable=False, server_default="PRODUTOS"),
        sa.Column("status", sa.String(10), nullable=False, server_default="PENDENTE"),
        sa.Column("total", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("liquidado", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("observacoes", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("tipo IN ('PRODUTOS', 'MUSICAS', 'MISTO')", name="ck_pedidos_tipo"),
        sa.CheckConstraint(
            "status IN ('PENDENTE', 'PREPARANDO', 'PRONTO', 'CANCELADO')",
            name="ck_pedidos_status",
        ),
        schema="pedidos",
    )
    op.create_index("idx_pedidos_sucursal_status", "pedidos", ["sucursal_id", "status"], schema="pedidos")
    op.create_index(
        "idx_pedidos_mesa_status_liquidado", "pedidos", ["mesa_id", "status", "liquidado"], schema="pedidos"
    )
    op.create_index("idx_pedidos_sucursal_created", "pedidos", ["sucursal_id", "created_at"], schema="pedidos")

    # pedidos.pedido_itens — linhas (fragmentos PAGO surgem nas liquidações parciais)
    op.create_table(
        "pedido_itens",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("pedido_id", sa.Integer, sa.ForeignKey("pedidos.pedidos.id", ondelete="CASCADE"), nullable=False),
        sa.Column("item_id", sa.Integer, sa.ForeignKey("cadastros.itens.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("quantidade", sa.Integer, nullable=False),
        sa.Column("nota", sa.String(255), nullable=True),
        sa.Column("estado", sa.String(10), nullable=False, server_default="PENDENTE"),
        sa.Column("valor_pago", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("quantidade > 0", name="ck_pedido_itens_quantidade_positiva"),
        sa.CheckConstraint("estado IN ('PENDENTE', 'PREPARANDO', 'PAGO')", name="ck_pedido_itens_estado"),
        schema="pedidos",
    )
    op.create_index("idx_pedido_itens_pedido", "pedido_itens", ["pedido_id"], schema="pedidos")
    op.create_index("idx_pedido_itens_pedido_estado", "pedido_itens", ["pedido_id", "estado"], schema="pedidos")

    # liquidacoes.pagamentos
    op.create_table(
        "pagamentos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sucursal_id", sa.Integer, sa.ForeignKey("cadastros.sucursais.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("mesa_id", sa.Integer, sa.ForeignKey("cadastros.mesas.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("usuario_id", sa.Integer, nullable=True),
        sa.Column("total", sa.Numeric(18, 2), nullable=False),
        sa.Column("metodo", sa.String(13), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("metodo IN ('DINHEIRO', 'CARTAO', 'TRANSFERENCIA')", name="ck_pagamentos_metodo"),
        schema="liquidacoes",
    )
    op.create_index("idx_pagamentos_sucursal_created", "pagamentos", ["sucursal_id", "created_at"], schema="liquidacoes")
    op.create_index("idx_pagamentos_mesa", "pagamentos", ["mesa_id"], schema="liquidacoes")

    # liquidacoes.faturas
    op.create_table(
        "faturas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("pedido_id", sa.Integer, sa.ForeignKey("pedidos.pedidos.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("mesa_id", sa.Integer, sa.ForeignKey("cadastros.mesas.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("sucursal_id", sa.Integer, sa.ForeignKey("cadastros.sucursais.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("nome", sa.String(160), nullable=False),
        sa.Column("identificacao", sa.String(13), nullable=False),
        sa.Column("email", sa.String(160), nullable=True),
        sa.Column("telefone", sa.String(40), nullable=True),
        sa.Column("endereco", sa.String(255), nullable=True),
        sa.Column("valor", sa.Numeric(18, 2), nullable=False),
        sa.Column("metodo_pagamento", sa.String(13), nullable=False),
        sa.Column("estado", sa.String(8), nullable=False, server_default="PENDENTE"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("emitida_em", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("identificacao ~ '^[0-9]{10}([0-9]{3})?$'", name="ck_faturas_identificacao"),
        sa.CheckConstraint("estado IN ('PENDENTE', 'EMITIDA')", name="ck_faturas_estado"),
        schema="liquidacoes",
    )
    op.create_index("idx_faturas_sucursal_estado", "faturas", ["sucursal_id", "estado"], schema="liquidacoes")
    op.create_index("idx_faturas_identificacao", "faturas", ["identificacao"], schema="liquidacoes")


def downgrade() -> None:
    op.drop_index("idx_faturas_identificacao", table_name="faturas", schema="liquidacoes")
    op.drop_index("idx_faturas_sucursal_estado", table_name="faturas", schema="liquidacoes")
    op.drop_table("faturas", schema="liquidacoes")

    op.drop_index("idx_pagamentos_mesa", table_name="pagamentos", schema="liquidacoes")
    op.drop_index("idx_pagamentos_sucursal_created", table_name="pagamentos", schema="liquidacoes")
    op.drop_table("pagamentos", schema="liquidacoes")

    op.drop_index("idx_pedido_itens_pedido_estado", table_name="pedido_itens", schema="pedidos")
    op.drop_index("idx_pedido_itens_pedido", table_name="pedido_itens", schema="pedidos")
    op.drop_table("pedido_itens", schema="pedidos")

    op.drop_index("idx_pedidos_sucursal_created", table_name="pedidos", schema="pedidos")
    op.drop_index("idx_pedidos_mesa_status_liquidado", table_name="pedidos", schema="pedidos")
    op.drop_index("idx_pedidos_sucursal_status", table_name="pedidos", schema="pedidos")
    op.drop_table("pedidos", schema="pedidos")

    op.drop_table("itens_sucursal", schema="cadastros")
    op.drop_index("idx_itens_local", table_name="itens", schema="cadastros")
    op.drop_table("itens", schema="cadastros")
    op.drop_index("idx_mesas_sucursal", table_name="mesas", schema="cadastros")
    op.drop_table("mesas", schema="cadastros")
    op.drop_index("idx_sucursais_local", table_name="sucursais", schema="cadastros")
    op.drop_table("sucursais", schema="cadastros")
    op.drop_table("locais", schema="cadastros")
