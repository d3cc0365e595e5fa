import re

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from comanda.api.faturas.models.model_fatura import FaturaModel, EstadoFatura
from comanda.api.faturas.repositories.repo_faturas import FaturaRepository
from comanda.api.faturas.schemas.schema_fatura import DadosFatura, DadosFaturamentoOut, FaturaOut
from comanda.api.realtime.core.change_feed import EventoMudanca, TipoEntidade, publicar
from comanda.core.contexto import ContextoSessao
from comanda.core.exceptions import ArmazenamentoError, NaoEncontradoError, ValidacaoError
from comanda.utils.database_utils import now_trimmed
from comanda.utils.logger import logger

# Cédula (10 dígitos) ou RUC (13 dígitos)
IDENTIFICACAO_RE = re.compile(r"^[0-9]{10}(?:[0-9]{3})?$")


def validar_identificacao(identificacao: str) -> str:
    valor = (identificacao or "").strip()
    if not IDENTIFICACAO_RE.fullmatch(valor):
        raise ValidacaoError("Identificação deve ter 10 ou 13 dígitos")
    return valor


def validar_dados_fatura(dados: DadosFatura) -> DadosFatura:
    """Normaliza e valida os dados antes de qualquer gravação."""
    nome = (dados.nome or "").strip()
    if not nome:
        raise ValidacaoError("Nome para a fatura é obrigatório")
    return dados.model_copy(
        update={
            "nome": nome,
            "identificacao": validar_identificacao(dados.identificacao),
            "email": (dados.email or "").strip() or None,
            "telefone": (dados.telefone or "").strip() or None,
            "endereco": (dados.endereco or "").strip() or None,
        }
    )


def build_fatura_out(f: FaturaModel) -> FaturaOut:
    return FaturaOut(
        id=f.id,
        pedido_id=f.pedido_id,
        mesa_id=f.mesa_id,
        mesa_nome=f.mesa.nome if f.mesa else None,
        nome=f.nome,
        identificacao=f.identificacao,
        email=f.email,
        telefone=f.telefone,
        endereco=f.endereco,
        valor=f.valor,
        metodo_pagamento=f.metodo_pagamento,
        estado=f.estado,
        created_at=f.created_at,
        emitida_em=f.emitida_em,
    )


class FaturaService:
    """Fila de faturas solicitadas na liquidação."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = FaturaRepository(db)

    def listar_pendentes(self, contexto: ContextoSessao) -> list[FaturaOut]:
        return [build_fatura_out(f) for f in self.repo.list_pendentes(contexto.sucursal_id)]

    def marcar_emitida(self, fatura_id: int, contexto: ContextoSessao) -> FaturaOut:
        fatura = self.repo.get_by_id_sucursal(fatura_id, contexto.sucursal_id)
        if not fatura:
            raise NaoEncontradoError(f"Fatura {fatura_id} não encontrada")
        if fatura.estado == EstadoFatura.EMITIDA.value:
            return build_fatura_out(fatura)

        try:
            fatura.estado = EstadoFatura.EMITIDA.value
            fatura.emitida_em = now_trimmed()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Faturas] Erro ao marcar fatura {fatura_id} como emitida: {e}")
            raise ArmazenamentoError(f"Erro ao atualizar fatura: {e}")
        self.db.refresh(fatura)

        logger.info(f"[Faturas] Fatura {fatura.id} emitida (pedido {fatura.pedido_id})")
        publicar(
            EventoMudanca(
                tipo=TipoEntidade.FATURA,
                acao="emitida",
                sucursal_id=fatura.sucursal_id,
                ids=[fatura.id],
            )
        )
        return build_fatura_out(fatura)

    def buscar_dados_faturamento(self, identificacao: str, contexto: ContextoSessao) -> DadosFaturamentoOut:
        identificacao = validar_identificacao(identificacao)
        fatura = self.repo.get_mais_recente_by_identificacao(identificacao, contexto.sucursal_id)
        if not fatura:
            raise NaoEncontradoError("Nenhuma fatura anterior para esta identificação")
        return DadosFaturamentoOut(
            ultima_fatura_id=fatura.id,
            nome=fatura.nome,
            identificacao=fatura.identificacao,
            email=fatura.email,
            telefone=fatura.telefone,
            endereco=fatura.endereco,
        )
