"""Cliente MongoDB assíncrono (Motor).

Todas as consultas e gravações do agendamento passam por aqui; são os únicos
pontos de suspensão de uma validação.
"""
from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import settings
from app.infrastructure.db.mongo import mongo_client_kwargs

_log = logging.getLogger("agenda.mongo.async")

_aclient: Optional[AsyncIOMotorClient] = None
_adb: Optional[AsyncIOMotorDatabase] = None


def get_async_db() -> AsyncIOMotorDatabase:
    """Devolve a DB assíncrona; inicializa sob demanda um único cliente."""
    global _aclient, _adb
    if _adb is None:
        _aclient = _aclient or AsyncIOMotorClient(settings.mongo_uri, **mongo_client_kwargs())
        _adb = _aclient[settings.mongo_db]
        _log.info("Motor pronto (db async inicializada)")
    return _adb


def close_async_db() -> None:
    global _aclient, _adb
    if _aclient is not None:
        _aclient.close()
    _aclient = None
    _adb = None
