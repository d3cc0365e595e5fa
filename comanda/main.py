from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import Response

from comanda.config.settings import (
    BASE_URL,
    CORS_ALLOW_ALL,
    CORS_ORIGINS,
    ENABLE_DOCS,
    INICIALIZAR_BANCO,
)
from comanda.core.exceptions import ComandaError
from comanda.core.exception_handlers import (
    comanda_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler,
)
from comanda.utils.logger import logger
from comanda.utils.prometheus_metrics import PrometheusMiddleware, get_metrics, CONTENT_TYPE_LATEST

# ───────────────────────────
# Importar modelos antes das rotas
# Garante que todos os modelos estejam registrados no SQLAlchemy
# antes de qualquer query ser executada
# ───────────────────────────
import comanda.database.init_db  # noqa: F401
from comanda.api.cadastros.router.router import api_cadastros
from comanda.api.pedidos.router.router import api_pedidos
from comanda.api.liquidacoes.router.router import api_liquidacoes
from comanda.api.faturas.router.router import api_faturas
from comanda.api.relatorios.router.router import router as relatorios_router

# ──────────────────────────
# Instância FastAPI
# ──────────────────────────
app = FastAPI(
    title="API Comanda",
    version="1.0.0",
    description="Pedidos de mesa, liquidação de contas e fechamento diário",
    docs_url=("/swagger" if ENABLE_DOCS else None),
    redoc_url=("/redoc" if ENABLE_DOCS else None),
    openapi_url=("/openapi.json" if ENABLE_DOCS else None),
    servers=([{"url": BASE_URL, "description": "Base URL do ambiente"}] if BASE_URL else None),
    redirect_slashes=False,
)

# ───────────────────────────
# Exception Handlers Globais
# ───────────────────────────
app.add_exception_handler(ComandaError, comanda_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# ───────────────────────────
# Middlewares
# ───────────────────────────
# Executados na ordem reversa da adição (último adicionado = primeiro executado)
app.add_middleware(PrometheusMiddleware)

# Regra:
# - Se CORS_ALLOW_ALL=true => allow_origins=["*"], allow_credentials=False
# - Caso contrário => allow_origins=CORS_ORIGINS (se vazio cai para ["*"]), allow_credentials=True somente quando houver origens explícitas
if CORS_ALLOW_ALL:
    allowed_origins = ["*"]
    allow_credentials = False
else:
    allowed_origins = CORS_ORIGINS or ["*"]
    allow_credentials = bool(CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ───────────────────────────
# Startup / Shutdown
# ───────────────────────────
@app.on_event("startup")
async def startup():
    from comanda.database.init_db import inicializar_banco

    logger.info("Iniciando API...")
    if INICIALIZAR_BANCO:
        inicializar_banco()
    logger.info("API iniciada com sucesso.")


@app.on_event("shutdown")
async def shutdown():
    from comanda.api.realtime.core.change_feed import change_feed

    logger.info("Encerrando API...")
    change_feed.limpar()
    logger.info("API encerrada.")


# ───────────────────────────
# Rotas
# ───────────────────────────
@app.get("/")
async def root():
    return {"status": "ok", "message": "API is running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.get("/metrics")
async def metrics():
    """Métricas Prometheus (público, sem autenticação)."""
    return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)


app.include_router(api_cadastros)
app.include_router(api_pedidos)
app.include_router(api_liquidacoes)
app.include_router(api_faturas)
app.include_router(relatorios_router)


# ───────────────────────────
# OpenAPI: Segurança Bearer/JWT no Swagger
# ───────────────────────────
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        servers=app.servers,
    )

    components = openapi_schema.get("components", {})
    security_schemes = components.get("securitySchemes", {})
    security_schemes.update({
        "bearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    })
    components["securitySchemes"] = security_schemes
    openapi_schema["components"] = components
    openapi_schema["security"] = [{"bearerAuth": []}]

    # Rotas públicas: health, métricas e as rotas de cliente (QR code)
    public_paths = {"/", "/health", "/metrics"}
    for path, methods in openapi_schema.get("paths", {}).items():
        if path in public_paths or "/client/" in path:
            for method_obj in methods.values():
                method_obj["security"] = []

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi
