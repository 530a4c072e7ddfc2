"""Testes do acumulador de carga horária."""
from datetime import date

import pytest

from app.domain.scheduling.errors import UnknownUnitError
from app.domain.scheduling.models import CurricularUnit, ScheduledLessonRecord
from app.domain.scheduling.workload import hours_scheduled_before, remaining_capacity

UC = CurricularUnit(iduc=7, nomeuc="Banco de Dados", cargahoraria=40)
CUTOFF = date(2025, 3, 10)


def _lesson(day: str, hours):
    return ScheduledLessonRecord(iduc=7, data=day, horas=hours)


def test_aliases_from_database_columns():
    assert UC.id == 7 and UC.name == "Banco de Dados" and UC.total_hours == 40
    lesson = _lesson("2025-03-01", 4)
    assert lesson.day == date(2025, 3, 1) and lesson.hours == 4


def test_cutoff_is_exclusive():
    lessons = [_lesson("2025-03-09", 2), _lesson("2025-03-10", 4), _lesson("2025-03-11", 8)]
    assert hours_scheduled_before(lessons, CUTOFF) == 2
    assert remaining_capacity(UC, lessons, CUTOFF) == 38


def test_missing_hours_count_as_zero():
    lessons = [_lesson("2025-03-01", None), _lesson("2025-03-02", 3)]
    assert remaining_capacity(UC, lessons, CUTOFF) == 37


def test_capacity_is_clamped_at_zero():
    lessons = [_lesson("2025-02-01", 30), _lesson("2025-02-02", 30)]
    assert remaining_capacity(UC, lessons, CUTOFF) == 0


def test_no_history_means_full_budget():
    assert remaining_capacity(UC, [], CUTOFF) == 40


def test_monotonically_non_increasing():
    lessons = []
    previous = remaining_capacity(UC, lessons, CUTOFF)
    for i in range(1, 25):
        lessons.append(_lesson(f"2025-01-{i:02d}", 3))
        current = remaining_capacity(UC, lessons, CUTOFF)
        assert 0 <= current <= previous
        previous = current


def test_unknown_unit_is_not_zero_capacity():
    with pytest.raises(UnknownUnitError):
        remaining_capacity(None, [], CUTOFF)


def test_fractional_hours_from_old_rows():
    """Horas fracionárias somam normalmente; a sobra vai para horas inteiras."""
    lessons = [_lesson("2025-03-01", 1.5), _lesson("2025-03-02", 2)]
    assert hours_scheduled_before(lessons, CUTOFF) == 3.5
    assert remaining_capacity(UC, lessons, CUTOFF) == 36
