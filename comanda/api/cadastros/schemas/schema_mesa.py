from typing import Optional
from pydantic import BaseModel, ConfigDict


class MesaPublicaOut(BaseModel):
    """Mesa resolvida a partir do QR code (sem token nem PIN)."""
    id: int
    nome: str
    slug: str
    sucursal_id: int
    sucursal_nome: Optional[str] = None
    local_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
