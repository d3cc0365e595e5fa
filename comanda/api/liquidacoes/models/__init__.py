from .model_pagamento import PagamentoModel, MetodoPagamento

__all__ = ["PagamentoModel", "MetodoPagamento"]
