"""Validador de lote de aulas.

Compõe a política de janelas e o acumulador de carga. Sem efeitos
colaterais: quem chama decide se grava as aulas depois de um `Accepted`.

Ordem das verificações (para na primeira falha):
1. campos obrigatórios (turma, UC, hora de início, ao menos um dia)
2. janela de horário
3. carga horária restante na data do primeiro dia do lote
"""
from datetime import date
from typing import Collection, Iterable, Optional, Sequence

from app.domain.scheduling.models import (
    Accepted,
    BatchSummary,
    CapacityShortfall,
    CurricularUnit,
    Rejected,
    RejectionReason,
    ScheduledLessonRecord,
    SchedulingBatchRequest,
    ValidationResult,
)
from app.domain.scheduling.time_window import classify_and_validate
from app.domain.scheduling.workload import remaining_capacity

_FIELD_LABELS = (
    ("turma_id", "turma"),
    ("uc_id", "unidade curricular"),
    ("slot", "hora de início"),
)


def check_required_fields(request: SchedulingBatchRequest) -> Optional[Rejected]:
    """Primeira etapa da validação; não depende de nenhuma consulta."""
    missing = [label for attr, label in _FIELD_LABELS if getattr(request, attr) is None]
    if missing:
        return Rejected(
            reason=RejectionReason.MISSING_REQUIRED_FIELD,
            message=f"Preencha todos os campos obrigatórios: {', '.join(missing)}.",
        )
    if not request.days:
        return Rejected(
            reason=RejectionReason.MISSING_REQUIRED_FIELD,
            message="Selecione ao menos um dia para agendar.",
        )
    return None


def capacity_message(shortfall: CapacityShortfall) -> str:
    return (
        "Carga horária insuficiente!\n\n"
        f"UC: {shortfall.uc_name}\n"
        f"Carga restante: {shortfall.remaining_capacity}h\n"
        f"Tentando agendar: {shortfall.total_hours_requested}h "
        f"({shortfall.day_count} aulas x {shortfall.duration_hours}h)\n\n"
        "Reduza o número de dias ou as horas por aula."
    )


def validate_batch(
    request: SchedulingBatchRequest,
    uc: CurricularUnit,
    prior_lessons: Sequence[ScheduledLessonRecord],
) -> ValidationResult:
    rejected = check_required_fields(request)
    if rejected is not None:
        return rejected

    slot = request.slot
    window = classify_and_validate(slot.start_minutes, slot.duration_hours)
    if isinstance(window, Rejected):
        return window

    total = request.day_count * slot.duration_hours
    # corte = primeiro dia do lote; os demais dias não descontam entre si
    remaining = remaining_capacity(uc, prior_lessons, request.earliest_day)
    if total > remaining:
        shortfall = CapacityShortfall(
            uc_name=uc.name,
            remaining_capacity=remaining,
            total_hours_requested=total,
            day_count=request.day_count,
            duration_hours=slot.duration_hours,
        )
        return Rejected(
            reason=RejectionReason.INSUFFICIENT_CAPACITY,
            message=capacity_message(shortfall),
            shortfall=shortfall,
        )
    return Accepted(total_hours=total)


def summarize_batch(
    uc: Optional[CurricularUnit],
    prior_lessons: Iterable[ScheduledLessonRecord],
    days: Collection[date],
    duration_hours: int,
) -> BatchSummary:
    """Resumo de horas do lote contra a carga restante (sem validar janela)."""
    total = len(days) * duration_hours
    if not days:
        return BatchSummary(day_count=0, duration_hours=duration_hours, total_hours=0)
    remaining = remaining_capacity(uc, prior_lessons, min(days))
    return BatchSummary(
        day_count=len(days),
        duration_hours=duration_hours,
        total_hours=total,
        remaining_capacity=remaining,
        remaining_after=max(remaining - total, 0),
    )
