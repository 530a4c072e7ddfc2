"""Serviço de agendamento de aulas em lote.

Orquestra as consultas ao banco (sequenciais: UC, depois histórico de
aulas), o validador puro do domínio e a gravação dia a dia.

- `slot_preview`: estado de edição; recalculado a cada mudança de início/duração.
- `validate`: validação única de um lote, sem gravar nada.
- `schedule_batch`: valida e, só se aceito, grava uma aula por dia.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Awaitable, Dict, Iterable, List, Optional, Tuple, TypeVar

from pymongo.errors import PyMongoError

from app.core.config import settings
from app.domain.scheduling.errors import InvalidTimeFormatError, LookupFailureError, UnknownUnitError
from app.domain.scheduling.models import (
    Accepted,
    BatchCommitResult,
    BatchSummary,
    CurricularUnit,
    DayCommitOutcome,
    LessonSlot,
    Rejected,
    RejectionReason,
    ScheduledLessonRecord,
    SchedulingBatchRequest,
    ValidationResult,
)
from app.domain.scheduling.time_window import (
    classify_and_validate,
    compute_end_time,
    format_hhmm,
    max_duration_hours,
    parse_hhmm,
    period_label,
)
from app.domain.scheduling.validator import check_required_fields, summarize_batch, validate_batch
from app.domain.scheduling.workload import hours_scheduled_before, remaining_capacity
from app.repositories import curricular_units_repo, lessons_repo, turmas_repo

_log = logging.getLogger("agenda.scheduling")

T = TypeVar("T")


async def _lookup(what: str, pending: Awaitable[T]) -> T:
    try:
        return await pending
    except PyMongoError as e:
        raise LookupFailureError(f"Falha ao consultar {what}: {e}") from e


def build_request(
    idturma: Optional[int],
    iduc: Optional[int],
    start_time: Optional[str],
    duration_hours: int,
    days: Iterable[date],
) -> SchedulingBatchRequest:
    """Monta o pedido a partir da entrada crua do formulário.

    Hora vazia vira slot ausente; hora malformada levanta `InvalidTimeFormatError`.
    """
    slot = None
    if start_time:
        slot = LessonSlot(start_minutes=parse_hhmm(start_time), duration_hours=duration_hours)
    return SchedulingBatchRequest(turma_id=idturma, uc_id=iduc, slot=slot, days=frozenset(days))


def slot_preview(start_time: str, duration_hours: int) -> Dict[str, Any]:
    """Dados derivados do slot para exibição enquanto o usuário edita."""
    start = parse_hhmm(start_time)
    end = compute_end_time(start, duration_hours)
    window = classify_and_validate(start, duration_hours)
    valid = not isinstance(window, Rejected)
    return {
        "start_time": format_hhmm(start),
        "end_time": format_hhmm(end),
        "horario": f"{format_hhmm(start)}-{format_hhmm(end)}",
        "period": period_label(start) or None,
        "max_duration_hours": max_duration_hours(start),
        "valid": valid,
        "message": None if valid else window.message,
    }


async def load_unit_context(iduc: int, cutoff: date) -> Tuple[CurricularUnit, List[ScheduledLessonRecord]]:
    """Consulta a UC e, em seguida, as aulas anteriores ao corte."""
    uc = await _lookup("unidade curricular", curricular_units_repo.get_unit(iduc))
    if uc is None:
        raise UnknownUnitError(iduc)
    prior = await _lookup("aulas anteriores", lessons_repo.list_prior_lessons(iduc, cutoff))
    return uc, prior


async def capacity_for(iduc: int, cutoff: date) -> Dict[str, Any]:
    uc, prior = await load_unit_context(iduc, cutoff)
    return {
        "iduc": uc.id,
        "nomeuc": uc.name,
        "cargahoraria": uc.total_hours,
        "cutoff": cutoff,
        "scheduled_hours": hours_scheduled_before(prior, cutoff),
        "remaining_capacity": remaining_capacity(uc, prior, cutoff),
    }


def _bad_start_time(exc: InvalidTimeFormatError) -> Rejected:
    return Rejected(
        reason=RejectionReason.MISSING_REQUIRED_FIELD,
        message=f"{exc}. Informe novamente a hora de início.",
    )


async def validate(
    idturma: Optional[int],
    iduc: Optional[int],
    start_time: Optional[str],
    duration_hours: int,
    days: Iterable[date],
) -> ValidationResult:
    """Valida um lote sem gravar.

    Campos e janela de horário são conferidos antes de qualquer consulta.
    """
    try:
        request = build_request(idturma, iduc, start_time, duration_hours, days)
    except InvalidTimeFormatError as e:
        return _bad_start_time(e)

    rejected = check_required_fields(request)
    if rejected is None:
        # janela antes da carga: horário inválido não consulta o banco
        window = classify_and_validate(request.slot.start_minutes, request.slot.duration_hours)
        if isinstance(window, Rejected):
            rejected = window
    if rejected is not None:
        _log.info("lote rejeitado reason=%s", rejected.reason.value)
        return rejected

    uc, prior = await load_unit_context(request.uc_id, request.earliest_day)
    result = validate_batch(request, uc, prior)
    if isinstance(result, Rejected):
        _log.info("lote rejeitado reason=%s iduc=%s dias=%s", result.reason.value, iduc, request.day_count)
    return result


async def summarize(iduc: int, duration_hours: int, days: Iterable[date]) -> BatchSummary:
    days = frozenset(days)
    if not days:
        return summarize_batch(None, [], days, duration_hours)
    uc, prior = await load_unit_context(iduc, min(days))
    return summarize_batch(uc, prior, days, duration_hours)


def _lesson_doc(request: SchedulingBatchRequest, day: date, status: str) -> Dict[str, Any]:
    slot = request.slot
    start = format_hhmm(slot.start_minutes)
    end = format_hhmm(slot.end_minutes)
    return {
        "idturma": request.turma_id,
        "iduc": request.uc_id,
        "data": day.isoformat(),
        "horainicio": start,
        "horafim": end,
        "horario": f"{start}-{end}",
        "horas": slot.duration_hours,
        "status": status,
    }


async def commit_days(request: SchedulingBatchRequest, status: Optional[str] = None) -> List[DayCommitOutcome]:
    """Grava uma aula por dia, em ordem de data, uma de cada vez.

    Falha em um dia não interrompe os demais; o resultado diz quais dias
    foram gravados para que só os que falharam sejam reenviados.
    """
    status = status or settings.lesson_default_status
    outcomes: List[DayCommitOutcome] = []
    for day in sorted(request.days):
        try:
            lesson_id = await lessons_repo.insert_lesson(_lesson_doc(request, day, status))
        except PyMongoError as e:
            _log.warning("falha ao gravar aula iduc=%s data=%s: %s", request.uc_id, day, e)
            outcomes.append(DayCommitOutcome(day=day, committed=False, error=str(e)))
        else:
            outcomes.append(DayCommitOutcome(day=day, committed=True, lesson_id=lesson_id))
    return outcomes


async def schedule_batch(
    idturma: Optional[int],
    iduc: Optional[int],
    start_time: Optional[str],
    duration_hours: int,
    days: Iterable[date],
    status: Optional[str] = None,
) -> BatchCommitResult:
    """Valida o lote e grava as aulas somente se aceito."""
    days = frozenset(days)
    result = await validate(idturma, iduc, start_time, duration_hours, days)
    if not isinstance(result, Accepted):
        return BatchCommitResult(validation=result)
    request = build_request(idturma, iduc, start_time, duration_hours, days)
    outcomes = await commit_days(request, status)
    committed = sum(1 for o in outcomes if o.committed)
    _log.info("lote gravado iduc=%s idturma=%s dias=%s/%s", iduc, idturma, committed, len(outcomes))
    return BatchCommitResult(validation=result, outcomes=outcomes)


async def list_turmas() -> List[Dict[str, Any]]:
    return await _lookup("turmas", turmas_repo.list_turmas())


async def list_units_for_turma(idturma: int) -> List[Dict[str, Any]]:
    """UCs do curso da turma; lista vazia se a turma não existe ou não tem curso."""
    turma = await _lookup("turma", turmas_repo.get_turma(idturma))
    if not turma or turma.get("idcurso") is None:
        return []
    return await _lookup("unidades curriculares", curricular_units_repo.list_units_by_course(turma["idcurso"]))
