"""Cliente MongoDB síncrono (PyMongo).

Usado só no startup: ping de conexão e bootstrap de índices/validadores.
As consultas do agendamento usam o cliente assíncrono (`mongo_async`).
"""
import logging

import certifi
from pymongo import MongoClient
from pymongo.errors import ServerSelectionTimeoutError

from app.core.config import settings

_log = logging.getLogger("agenda.mongo")

_client: MongoClient | None = None
_db = None


def mongo_client_kwargs() -> dict:
    """Opções de conexão compartilhadas com o cliente Motor (TLS + timeout)."""
    uri = settings.mongo_uri
    kwargs = dict(serverSelectionTimeoutMS=settings.mongo_timeout_ms)
    if uri.startswith("mongodb+srv://"):
        # SRV já implica TLS; fornece o bundle de CA
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if settings.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return kwargs


def init_mongo() -> None:
    """
    Inicializa o cliente e valida a conexão (ping).
    Chamar uma única vez no startup do FastAPI.
    """
    global _client, _db
    try:
        _client = MongoClient(settings.mongo_uri, **mongo_client_kwargs())
        _client.admin.command("ping")
        _db = _client[settings.mongo_db]
        _log.info("Mongo conectado (db=%s)", settings.mongo_db)
    except ServerSelectionTimeoutError as e:
        # Não derruba a app: deixa _db em None
        _log.warning("Mongo inacessível (timeout): %s", e)
        _client = None
        _db = None
    except Exception as e:
        _log.warning("Erro de conexão com o Mongo: %s", e)
        _client = None
        _db = None


def get_db():
    """Referência à base síncrona. Use em bootstrap, não em routers."""
    if _db is None:
        raise RuntimeError("Mongo não inicializado. Tente mais tarde.")
    return _db


def db_ready() -> bool:
    return _db is not None
