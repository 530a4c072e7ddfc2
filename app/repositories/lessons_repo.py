"""Repo de `aulas`: histórico por UC e gravação de aulas aceitas.

`data` é gravada como string ISO (YYYY-MM-DD); o filtro `$lt` compara datas
pela ordem lexicográfica.
"""
from datetime import date, datetime, timezone
from typing import Any, Dict, List

from app.domain.scheduling.models import ScheduledLessonRecord
from app.infrastructure.db.mongo_async import get_async_db

COLL = "aulas"


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


async def list_prior_lessons(iduc: int, before: date) -> List[ScheduledLessonRecord]:
    """Aulas da UC com data estritamente anterior a `before`, por data."""
    db = get_async_db()
    cursor = (
        db[COLL]
        .find({"iduc": int(iduc), "data": {"$lt": before.isoformat()}}, {"_id": 0, "iduc": 1, "data": 1, "horas": 1})
        .sort("data", 1)
    )
    docs = await cursor.to_list(length=None)
    return [ScheduledLessonRecord.model_validate(d) for d in docs]


async def insert_lesson(doc: Dict[str, Any]) -> str:
    """Grava uma aula e devolve o id (str)."""
    db = get_async_db()
    data = dict(doc)
    data.setdefault("created_at", _now_iso())
    res = await db[COLL].insert_one(data)
    return str(res.inserted_id)
