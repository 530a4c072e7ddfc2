"""Testes do validador de lotes de aulas."""
from datetime import date, timedelta

import pytest

from app.domain.scheduling.models import (
    Accepted,
    CurricularUnit,
    LessonSlot,
    Rejected,
    RejectionReason,
    ScheduledLessonRecord,
    SchedulingBatchRequest,
)
from app.domain.scheduling.time_window import parse_hhmm
from app.domain.scheduling.validator import summarize_batch, validate_batch

UC = CurricularUnit(iduc=3, nomeuc="Algoritmos", cargahoraria=40)
MONDAY = date(2025, 3, 10)


def _days(n: int, start: date = MONDAY) -> frozenset:
    return frozenset(start + timedelta(days=i) for i in range(n))


def _request(n_days=2, start="08:00", duration=2, **overrides) -> SchedulingBatchRequest:
    fields = dict(
        turma_id=1,
        uc_id=3,
        slot=LessonSlot(start_minutes=parse_hhmm(start), duration_hours=duration),
        days=_days(n_days),
    )
    fields.update(overrides)
    return SchedulingBatchRequest(**fields)


def _history(total_hours: int) -> list:
    """Aulas de 2h antes do corte somando `total_hours` (par)."""
    return [
        ScheduledLessonRecord(iduc=3, data=MONDAY - timedelta(days=i + 1), horas=2)
        for i in range(total_hours // 2)
    ]


# ─── CENÁRIOS ─────────────────────────────────────────────────────────────────

class TestScenarios:
    def test_insufficient_capacity(self):
        """40h de carga, 38h já agendadas, 2 dias x 2h = 4h pedidas."""
        result = validate_batch(_request(), UC, _history(38))
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.INSUFFICIENT_CAPACITY
        s = result.shortfall
        assert (s.uc_name, s.remaining_capacity, s.total_hours_requested) == ("Algoritmos", 2, 4)
        assert (s.day_count, s.duration_hours) == (2, 2)
        assert "Carga restante: 2h" in result.message
        assert "Tentando agendar: 4h (2 aulas x 2h)" in result.message

    def test_accepted_with_room_left(self):
        result = validate_batch(_request(), UC, _history(20))
        assert result == Accepted(total_hours=4)

    def test_exact_fit_is_accepted(self):
        result = validate_batch(_request(n_days=2, duration=2), UC, _history(36))
        assert isinstance(result, Accepted)

    @pytest.mark.parametrize("scheduled", range(0, 42, 2))
    @pytest.mark.parametrize("days, duration", [(1, 1), (2, 2), (3, 4), (5, 3)])
    def test_rejected_iff_total_exceeds_remaining(self, scheduled, days, duration):
        result = validate_batch(_request(n_days=days, duration=duration, start="08:00"), UC, _history(scheduled))
        remaining = max(40 - scheduled, 0)
        if days * duration > remaining:
            assert isinstance(result, Rejected)
            assert result.reason == RejectionReason.INSUFFICIENT_CAPACITY
        else:
            assert result == Accepted(total_hours=days * duration)

    def test_same_inputs_same_result(self):
        request, history = _request(), _history(38)
        assert validate_batch(request, UC, history) == validate_batch(request, UC, history)


# ─── ORDEM DAS VERIFICAÇÕES ───────────────────────────────────────────────────

class TestShortCircuit:
    @pytest.mark.parametrize("field", ["turma_id", "uc_id", "slot"])
    def test_missing_required_field(self, field):
        result = validate_batch(_request(**{field: None}), UC, [])
        assert isinstance(result, Rejected)
        assert result.reason == RejectionReason.MISSING_REQUIRED_FIELD

    def test_lists_every_missing_field(self):
        result = validate_batch(_request(turma_id=None, slot=None), UC, [])
        assert "turma" in result.message and "hora de início" in result.message

    def test_empty_day_set(self):
        result = validate_batch(_request(days=frozenset()), UC, [])
        assert result.reason == RejectionReason.MISSING_REQUIRED_FIELD

    def test_window_checked_before_capacity(self):
        """Horário inválido vence mesmo sem carga disponível."""
        result = validate_batch(_request(start="11:00", duration=2), UC, _history(40))
        assert result.reason == RejectionReason.INVALID_TIME_WINDOW
        assert result.shortfall is None

    def test_duplicate_days_count_once(self):
        request = _request(days=frozenset([MONDAY, MONDAY]))
        assert request.day_count == 1
        assert validate_batch(request, UC, []) == Accepted(total_hours=2)


# ─── CORTE NO PRIMEIRO DIA DO LOTE ────────────────────────────────────────────

class TestCutoffSemantics:
    def test_only_lessons_before_earliest_day_count(self):
        """Comportamento atual: o corte é o primeiro dia do lote.

        Uma aula já gravada entre o primeiro e o último dia do lote não
        desconta a carga, mesmo que o lote a ultrapasse depois de gravado.
        """
        uc = CurricularUnit(iduc=3, nomeuc="Algoritmos", cargahoraria=10)
        history = [ScheduledLessonRecord(iduc=3, data=MONDAY + timedelta(days=2), horas=8)]
        request = _request(days=frozenset([MONDAY, MONDAY + timedelta(days=4)]), duration=2)
        assert validate_batch(request, uc, history) == Accepted(total_hours=4)

    def test_lesson_on_earliest_day_is_not_prior(self):
        uc = CurricularUnit(iduc=3, nomeuc="Algoritmos", cargahoraria=4)
        history = [ScheduledLessonRecord(iduc=3, data=MONDAY, horas=4)]
        assert isinstance(validate_batch(_request(), uc, history), Accepted)


# ─── RESUMO ───────────────────────────────────────────────────────────────────

class TestSummary:
    def test_summary_after_scheduling(self):
        summary = summarize_batch(UC, _history(30), _days(3), 2)
        assert summary.total_hours == 6
        assert summary.remaining_capacity == 10
        assert summary.remaining_after == 4

    def test_summary_clamps_after(self):
        summary = summarize_batch(UC, _history(38), _days(2), 2)
        assert summary.remaining_after == 0

    def test_summary_without_days(self):
        summary = summarize_batch(None, [], frozenset(), 3)
        assert summary.day_count == 0
        assert summary.remaining_capacity is None
