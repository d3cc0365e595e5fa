from sqlalchemy.orm import Session

from comanda.api.cadastros.models.model_mesa import MesaModel
from comanda.api.cadastros.repositories.repo_mesas import MesaRepository
from comanda.api.cadastros.schemas.schema_mesa import MesaPublicaOut
from comanda.core.exceptions import NaoEncontradoError


class MesaService:
    """Service para resolução de mesas."""

    def __init__(self, db: Session):
        self.repo = MesaRepository(db)

    def resolver_mesa_ativa(self, slug: str, token: str) -> MesaModel:
        mesa = self.repo.get_ativa_by_slug_token(slug, token)
        if not mesa:
            raise NaoEncontradoError("Mesa não encontrada ou inativa")
        return mesa

    def resolver_publica(self, slug: str, token: str) -> MesaPublicaOut:
        mesa = self.resolver_mesa_ativa(slug, token)
        sucursal = mesa.sucursal
        return MesaPublicaOut(
            id=mesa.id,
            nome=mesa.nome,
            slug=mesa.slug,
            sucursal_id=mesa.sucursal_id,
            sucursal_nome=sucursal.nome if sucursal else None,
            local_id=sucursal.local_id if sucursal else None,
        )
