"""Repo de `unidades_curriculares` (catálogo de UCs, somente leitura)."""
from typing import Any, Dict, List, Optional

from app.domain.scheduling.models import CurricularUnit
from app.infrastructure.db.mongo_async import get_async_db

COLL = "unidades_curriculares"

_PROJECTION = {"_id": 0, "iduc": 1, "nomeuc": 1, "cargahoraria": 1}


async def get_unit(iduc: int) -> Optional[CurricularUnit]:
    """Busca a UC pelo id; None quando não existe."""
    db = get_async_db()
    doc = await db[COLL].find_one({"iduc": int(iduc)}, _PROJECTION)
    return CurricularUnit.model_validate(doc) if doc else None


async def list_units_by_course(idcurso: int) -> List[Dict[str, Any]]:
    """UCs de um curso, ordenadas pelo nome."""
    db = get_async_db()
    cursor = db[COLL].find({"idcurso": int(idcurso)}, _PROJECTION).sort("nomeuc", 1)
    return await cursor.to_list(length=None)
