from .model_fatura import FaturaModel, EstadoFatura

__all__ = ["FaturaModel", "EstadoFatura"]
