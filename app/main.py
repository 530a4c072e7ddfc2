"""Entrada principal da app FastAPI (configura middlewares, exceções e routers)."""
from fastapi import FastAPI
from app.core.config import settings
from app.infrastructure.db.mongo import init_mongo, db_ready
from app.infrastructure.db.mongo_async import close_async_db
from app.infrastructure.db.bootstrap import ensure_collections
from app.api.router import api_router
from app.core.logging import setup_logging
from app.core.middleware import add_middlewares
from app.core.exceptions import register_exception_handlers
import logging

_log = logging.getLogger("agenda.startup")

setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name)

add_middlewares(app)
register_exception_handlers(app)

# Startup
@app.on_event("startup")
def on_startup():
    init_mongo()
    # Garante coleções/índices se houver conexão
    try:
        if db_ready():
            ensure_collections()
        else:
            _log.warning("Mongo não pronto; pulando ensure_collections()")
    except Exception as e:
        # Não impede a subida se validadores/índices falharem
        _log.warning("ensure_collections() falhou: %s", e)


@app.on_event("shutdown")
def on_shutdown():
    close_async_db()

# Monta os routers sob o prefixo configurado
app.include_router(api_router, prefix=settings.api_prefix_normalized)
