"""
Métricas Prometheus: HTTP, logs e liquidações.
"""
import logging
import re
from time import time
from typing import Callable

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST  # noqa: F401
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

http_requests_total = Counter(
    'comanda_http_requests_total',
    'Total de requisições HTTP',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'comanda_http_request_duration_seconds',
    'Duração das requisições HTTP em segundos',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0]
)

log_messages_total = Counter(
    'comanda_log_messages_total',
    'Total de mensagens de log',
    ['level']
)

# Liquidações
liquidacoes_confirmadas_total = Counter(
    'comanda_liquidacoes_confirmadas_total',
    'Liquidações de mesa confirmadas'
)

valor_liquidado_total = Counter(
    'comanda_valor_liquidado_total',
    'Valor liquidado por método de pagamento',
    ['metodo']
)

conflitos_liquidacao_total = Counter(
    'comanda_conflitos_liquidacao_total',
    'Liquidações rejeitadas por conflito de concorrência'
)

_UUID_RE = re.compile(r'/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}')
_ID_RE = re.compile(r'/\d+')


def normalizar_endpoint(endpoint: str) -> str:
    """
    Remove IDs para evitar alta cardinalidade.
    Ex: /api/liquidacoes/admin/mesas/12/itens -> /api/liquidacoes/admin/mesas/{id}/itens
    """
    endpoint = _UUID_RE.sub('/{uuid}', endpoint)
    return _ID_RE.sub('/{id}', endpoint)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Coleta métricas das requisições HTTP."""

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        endpoint = normalizar_endpoint(request.url.path)
        start_time = time()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            http_requests_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(time() - start_time)


def registrar_liquidacao(por_metodo: dict) -> None:
    liquidacoes_confirmadas_total.inc()
    for metodo, total in por_metodo.items():
        valor_liquidado_total.labels(metodo=metodo).inc(float(total))


def get_metrics():
    """Retorna as métricas no formato Prometheus."""
    return generate_latest()
