"""
Erros de domínio.

São HTTPException para que os routers não precisem traduzir nada: o service
levanta e o FastAPI responde com o status correspondente.
"""
from fastapi import HTTPException, status


class ComandaError(HTTPException):
    tipo = "erro"
    status_code_padrao = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code_padrao, detail=detail)


class ValidacaoError(ComandaError):
    """Entrada inválida; nada foi gravado."""

    tipo = "validacao"
    status_code_padrao = status.HTTP_422_UNPROCESSABLE_ENTITY


class NaoEncontradoError(ComandaError):
    """Mesa/pedido/item inexistente ou fora do escopo (estado de tela desatualizado)."""

    tipo = "nao_encontrado"
    status_code_padrao = status.HTTP_404_NOT_FOUND


class ConflitoConcorrenciaError(ComandaError):
    """A seleção foi montada sobre quantidades que mudaram no banco."""

    tipo = "conflito_concorrencia"
    status_code_padrao = status.HTTP_409_CONFLICT


class ArmazenamentoError(ComandaError):
    """Falha de leitura/escrita no banco."""

    tipo = "armazenamento"
    status_code_padrao = status.HTTP_503_SERVICE_UNAVAILABLE
