from .schema_liquidacao import (
    ItemPendenteOut,
    MesaPendenteOut,
    LiquidacaoItemIn,
    LiquidacaoRequest,
    TotalPorMetodo,
    LiquidacaoResultado,
)

__all__ = [
    "ItemPendenteOut",
    "MesaPendenteOut",
    "LiquidacaoItemIn",
    "LiquidacaoRequest",
    "TotalPorMetodo",
    "LiquidacaoResultado",
]
