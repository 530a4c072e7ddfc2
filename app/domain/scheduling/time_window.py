"""Política de janelas de horário para aulas.

Funções puras: classificam um par (início, duração) em um período letivo e
derivam os dados de exibição (fim calculado, rótulo do período, duração
máxima sugerida). O rótulo sai das mesmas constantes de `TeachingPeriod`
usadas na validação.
"""
from __future__ import annotations

import re
from typing import Optional, Union

from app.domain.scheduling.errors import InvalidTimeFormatError
from app.domain.scheduling.models import (
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    Rejected,
    RejectionReason,
    TeachingPeriod,
)

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")

# hora a partir da qual a duração máxima cai para 3h
EVENING_START_HOUR = 19


def parse_hhmm(value: Optional[str]) -> int:
    """Converte "HH:MM" (24h) em minutos desde a meia-noite."""
    match = _HHMM.match((value or "").strip())
    if not match:
        raise InvalidTimeFormatError(value)
    h, m = int(match.group(1)), int(match.group(2))
    if h > 23 or m > 59:
        raise InvalidTimeFormatError(value)
    return h * MINUTES_PER_HOUR + m


def format_hhmm(minutes: int) -> str:
    """Formata minutos como relógio de parede (passa da meia-noite dá a volta)."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def compute_end_time(start_minutes: int, duration_hours: int) -> int:
    return start_minutes + duration_hours * MINUTES_PER_HOUR


def describe_windows() -> str:
    return ", ".join(
        f"{p.label} {format_hhmm(p.start)}-{format_hhmm(p.end)}" for p in TeachingPeriod
    )


def classify_and_validate(start_minutes: int, duration_hours: int) -> Union[TeachingPeriod, Rejected]:
    """Devolve o período que contém [início, fim) por inteiro, ou um `Rejected`.

    Um slot que cruza a borda de um período (ou fica fora de todos) é
    rejeitado com `INVALID_TIME_WINDOW`.
    """
    if duration_hours is None or duration_hours < 1:
        return Rejected(
            reason=RejectionReason.INVALID_TIME_WINDOW,
            message="Hora de início e duração são obrigatórias.",
        )
    end_minutes = compute_end_time(start_minutes, duration_hours)
    matches = [p for p in TeachingPeriod if p.contains(start_minutes, end_minutes)]
    if len(matches) != 1:
        return Rejected(
            reason=RejectionReason.INVALID_TIME_WINDOW,
            message=(
                "A aula deve estar totalmente dentro de um dos períodos válidos "
                f"({describe_windows()}). Horário informado: "
                f"{format_hhmm(start_minutes)}-{format_hhmm(end_minutes)}."
            ),
        )
    return matches[0]


def max_duration_hours(start_minutes: int) -> int:
    """Duração máxima sugerida ao usuário; não é regra de rejeição."""
    return 3 if start_minutes // MINUTES_PER_HOUR >= EVENING_START_HOUR else 4


def period_for_start(start_minutes: int) -> Optional[TeachingPeriod]:
    for period in TeachingPeriod:
        if period.start <= start_minutes < period.end:
            return period
    return None


def period_label(start_minutes: int) -> str:
    """Rótulo de exibição; vazio quando o início cai fora de todos os períodos."""
    period = period_for_start(start_minutes)
    return period.label if period else ""
