"""Fixtures compartilhadas: banco em memória no lugar dos repositórios Mongo."""
from datetime import date
from typing import Any, Dict, List, Optional

import pytest
from pymongo.errors import AutoReconnect

from app.domain.scheduling.models import CurricularUnit, ScheduledLessonRecord
from app.repositories import curricular_units_repo, lessons_repo, turmas_repo


class FakeStore:
    """Substitui as funções dos repos; registra a ordem das consultas."""

    def __init__(self) -> None:
        self.units: Dict[int, Dict[str, Any]] = {}
        self.turmas: List[Dict[str, Any]] = []
        self.lessons: List[Dict[str, Any]] = []
        self.calls: List[tuple] = []
        self.fail_on_days: set[str] = set()
        self.lookups_down = False

    # --- helpers de montagem ---
    def add_unit(self, iduc: int, nomeuc: str, cargahoraria: int, idcurso: int = 1) -> None:
        self.units[iduc] = {"iduc": iduc, "nomeuc": nomeuc, "cargahoraria": cargahoraria, "idcurso": idcurso}

    def add_lesson(self, iduc: int, data: str, horas: Optional[int]) -> None:
        self.lessons.append({"iduc": iduc, "data": data, "horas": horas})

    def _check_up(self) -> None:
        if self.lookups_down:
            raise AutoReconnect("connection refused")

    # --- curricular_units_repo ---
    async def get_unit(self, iduc: int) -> Optional[CurricularUnit]:
        self.calls.append(("get_unit", iduc))
        self._check_up()
        doc = self.units.get(iduc)
        return CurricularUnit.model_validate(doc) if doc else None

    async def list_units_by_course(self, idcurso: int) -> List[Dict[str, Any]]:
        self.calls.append(("list_units_by_course", idcurso))
        self._check_up()
        found = [
            {"iduc": u["iduc"], "nomeuc": u["nomeuc"], "cargahoraria": u["cargahoraria"]}
            for u in self.units.values()
            if u["idcurso"] == idcurso
        ]
        return sorted(found, key=lambda u: u["nomeuc"])

    # --- lessons_repo ---
    async def list_prior_lessons(self, iduc: int, before: date) -> List[ScheduledLessonRecord]:
        self.calls.append(("list_prior_lessons", iduc, before))
        self._check_up()
        docs = sorted(
            (d for d in self.lessons if d["iduc"] == iduc and d["data"] < before.isoformat()),
            key=lambda d: d["data"],
        )
        return [ScheduledLessonRecord.model_validate(d) for d in docs]

    async def insert_lesson(self, doc: Dict[str, Any]) -> str:
        self.calls.append(("insert_lesson", doc["data"]))
        if doc["data"] in self.fail_on_days:
            raise AutoReconnect("connection lost")
        self.lessons.append(dict(doc))
        return f"aula-{len(self.lessons)}"

    # --- turmas_repo ---
    async def list_turmas(self) -> List[Dict[str, Any]]:
        self._check_up()
        return sorted(self.turmas, key=lambda t: t["turmanome"])

    async def get_turma(self, idturma: int) -> Optional[Dict[str, Any]]:
        self._check_up()
        return next((t for t in self.turmas if t["idturma"] == idturma), None)


@pytest.fixture
def store(monkeypatch) -> FakeStore:
    fake = FakeStore()
    monkeypatch.setattr(curricular_units_repo, "get_unit", fake.get_unit)
    monkeypatch.setattr(curricular_units_repo, "list_units_by_course", fake.list_units_by_course)
    monkeypatch.setattr(lessons_repo, "list_prior_lessons", fake.list_prior_lessons)
    monkeypatch.setattr(lessons_repo, "insert_lesson", fake.insert_lesson)
    monkeypatch.setattr(turmas_repo, "list_turmas", fake.list_turmas)
    monkeypatch.setattr(turmas_repo, "get_turma", fake.get_turma)
    return fake
