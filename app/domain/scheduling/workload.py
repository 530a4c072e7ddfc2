"""Acumulador de carga horária por UC."""
import math
from datetime import date
from typing import Iterable, Optional

from app.domain.scheduling.errors import UnknownUnitError
from app.domain.scheduling.models import CurricularUnit, ScheduledLessonRecord


def hours_scheduled_before(prior_lessons: Iterable[ScheduledLessonRecord], cutoff: date) -> float:
    """Soma as horas das aulas estritamente anteriores ao corte."""
    return sum((lesson.hours or 0) for lesson in prior_lessons if lesson.day < cutoff)


def remaining_capacity(
    uc: Optional[CurricularUnit],
    prior_lessons: Iterable[ScheduledLessonRecord],
    cutoff: date,
) -> int:
    """Carga restante da UC em `cutoff`, em horas inteiras, nunca negativa.

    Sobra fracionária é arredondada para baixo: pedidos são em horas inteiras.
    Sem UC a capacidade é indeterminada: levanta `UnknownUnitError` em vez
    de assumir zero.
    """
    if uc is None:
        raise UnknownUnitError(None)
    return max(math.floor(uc.total_hours - hours_scheduled_before(prior_lessons, cutoff)), 0)
