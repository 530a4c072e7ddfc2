"""
Bootstrap da base Mongo: aplica validadores (JSON Schema) e índices.
Roda no startup para garantir as coleções do agendamento.
Não derruba a app se algo falhar; só registra warnings.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db

_log = logging.getLogger("agenda.mongo.bootstrap")


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            db.create_collection(name)
    except PyMongoError:
        # collMod falha quando a coleção não existe: cria com o validator
        try:
            if name not in db.list_collection_names():
                if validator:
                    db.create_collection(name, validator={"$jsonSchema": validator})
                else:
                    db.create_collection(name)
        except PyMongoError as e:
            _log.warning("Não foi possível aplicar validator em '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            _log.warning("Não foi possível criar índice em '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garante coleções, validadores e índices mínimos do agendamento.
    """
    _collmod_or_create("cursos", None)
    _ensure_indexes("cursos", [{"keys": [("idcurso", 1)], "unique": True, "name": "uniq_idcurso"}])

    _collmod_or_create("turma", None)
    _ensure_indexes(
        "turma",
        [
            {"keys": [("idturma", 1)], "unique": True, "name": "uniq_idturma"},
            {"keys": [("turmanome", 1)], "name": "ix_turmanome"},
        ],
    )

    uc_validator = {
        "bsonType": "object",
        "required": ["iduc", "nomeuc", "cargahoraria", "idcurso"],
        "properties": {
            "iduc": {"bsonType": ["int", "long"]},
            "nomeuc": {"bsonType": "string"},
            "cargahoraria": {"bsonType": ["int", "long"], "minimum": 0},
            "idcurso": {"bsonType": ["int", "long"]},
        },
        "additionalProperties": True,
    }
    _collmod_or_create("unidades_curriculares", uc_validator)
    _ensure_indexes(
        "unidades_curriculares",
        [
            {"keys": [("iduc", 1)], "unique": True, "name": "uniq_iduc"},
            {"keys": [("idcurso", 1), ("nomeuc", 1)], "name": "ix_curso_nome"},
        ],
    )

    aula_validator = {
        "bsonType": "object",
        "required": ["idturma", "iduc", "data", "horainicio", "horafim", "horas", "status", "created_at"],
        "properties": {
            "idturma": {"bsonType": ["int", "long"]},
            "iduc": {"bsonType": ["int", "long"]},
            "data": {"bsonType": "string", "pattern": "^\\d{4}-\\d{2}-\\d{2}$"},
            "horainicio": {"bsonType": "string", "pattern": "^\\d{2}:\\d{2}$"},
            "horafim": {"bsonType": "string", "pattern": "^\\d{2}:\\d{2}$"},
            "horario": {"bsonType": "string"},
            "horas": {"bsonType": ["int", "long"], "minimum": 1},
            "status": {"bsonType": "string"},
            "created_at": {"bsonType": "string", "minLength": 10},
        },
        "additionalProperties": True,
    }
    _collmod_or_create("aulas", aula_validator)
    _ensure_indexes(
        "aulas",
        [
            {"keys": [("iduc", 1), ("data", 1)], "name": "ix_uc_data"},
            {"keys": [("idturma", 1), ("data", 1)], "name": "ix_turma_data"},
        ],
    )
