"""
Models do domínio Cadastros (local, sucursal, mesa, item).
"""
from .model_local import LocalModel
from .model_sucursal import SucursalModel
from .model_mesa import MesaModel
from .model_item import ItemModel, ItemSucursalModel, TipoItem

__all__ = [
    "LocalModel",
    "SucursalModel",
    "MesaModel",
    "ItemModel",
    "ItemSucursalModel",
    "TipoItem",
]
