"""Repo de `turma` (somente leitura) com o nome do curso associado."""
from typing import Any, Dict, List, Optional

from app.infrastructure.db.mongo_async import get_async_db

COLL = "turma"
CURSOS = "cursos"


async def list_turmas() -> List[Dict[str, Any]]:
    """Lista turmas ordenadas pelo nome, com `nomecurso` do curso."""
    db = get_async_db()
    pipeline = [
        {"$sort": {"turmanome": 1}},
        {"$lookup": {"from": CURSOS, "localField": "idcurso", "foreignField": "idcurso", "as": "curso"}},
        {"$project": {
            "_id": 0,
            "idturma": 1,
            "turmanome": 1,
            "idcurso": 1,
            "nomecurso": {"$first": "$curso.nomecurso"},
        }},
    ]
    return await db[COLL].aggregate(pipeline).to_list(length=None)


async def get_turma(idturma: int) -> Optional[Dict[str, Any]]:
    db = get_async_db()
    return await db[COLL].find_one({"idturma": int(idturma)}, {"_id": 0})
