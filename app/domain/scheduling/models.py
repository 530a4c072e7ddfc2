"""
Modelos do domínio de agendamento (Pydantic, imutáveis).

Convenções:
- Atributos em inglês e snake_case; os nomes das colunas do banco
  (`iduc`, `nomeuc`, `cargahoraria`, `data`, `horas`) são aceitos como alias.
- Horários em minutos desde a meia-noite; durações em horas inteiras.
"""
from datetime import date
from enum import Enum
from typing import Annotated, FrozenSet, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


class TeachingPeriod(Enum):
    """Períodos letivos fixos: início inclusivo, fim exclusivo (minutos)."""

    MORNING = ("Matutino", 8 * 60, 12 * 60)
    AFTERNOON = ("Vespertino", 13 * 60 + 30, 17 * 60 + 30)
    EVENING = ("Noturno", 19 * 60, 22 * 60)

    def __init__(self, label: str, start: int, end: int) -> None:
        self.label = label
        self.start = start
        self.end = end

    def contains(self, start_minutes: int, end_minutes: int) -> bool:
        return start_minutes >= self.start and end_minutes <= self.end


class LessonSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_minutes: int = Field(ge=0, lt=MINUTES_PER_DAY)
    # >= 1 para ser válido; conferido pela política de janelas
    duration_hours: int

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration_hours * MINUTES_PER_HOUR


class CurricularUnit(BaseModel):
    """UC lida do catálogo de cursos (somente leitura)."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(validation_alias=AliasChoices("id", "iduc"))
    name: str = Field(validation_alias=AliasChoices("name", "nomeuc"))
    # cargahoraria: total de horas exigidas pela UC
    total_hours: int = Field(ge=0, validation_alias=AliasChoices("total_hours", "cargahoraria"))


class ScheduledLessonRecord(BaseModel):
    """Aula já gravada; `hours` ausente conta como 0.

    Registros antigos podem ter horas fracionárias (ex.: 1.5).
    """

    model_config = ConfigDict(frozen=True)

    uc_id: int = Field(validation_alias=AliasChoices("uc_id", "iduc"))
    day: date = Field(validation_alias=AliasChoices("day", "data"))
    hours: Optional[float] = Field(default=None, validation_alias=AliasChoices("hours", "horas"))


class SchedulingBatchRequest(BaseModel):
    """Pedido transitório: o mesmo slot repetido em cada dia selecionado."""

    model_config = ConfigDict(frozen=True)

    turma_id: Optional[int] = None
    uc_id: Optional[int] = None
    slot: Optional[LessonSlot] = None
    days: FrozenSet[date] = frozenset()

    @property
    def day_count(self) -> int:
        return len(self.days)

    @property
    def earliest_day(self) -> Optional[date]:
        return min(self.days) if self.days else None


class RejectionReason(str, Enum):
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_TIME_WINDOW = "invalid_time_window"
    INSUFFICIENT_CAPACITY = "insufficient_capacity"


class CapacityShortfall(BaseModel):
    model_config = ConfigDict(frozen=True)

    uc_name: str
    remaining_capacity: int
    total_hours_requested: int
    day_count: int
    duration_hours: int


class Accepted(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["accepted"] = "accepted"
    total_hours: int


class Rejected(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["rejected"] = "rejected"
    reason: RejectionReason
    message: str
    shortfall: Optional[CapacityShortfall] = None


ValidationResult = Annotated[Union[Accepted, Rejected], Field(discriminator="status")]


class BatchSummary(BaseModel):
    """Resumo do agendamento exibido antes de confirmar.

    Sem dias selecionados a carga restante fica indefinida (None).
    """

    model_config = ConfigDict(frozen=True)

    day_count: int
    duration_hours: int
    total_hours: int
    remaining_capacity: Optional[int] = None
    remaining_after: Optional[int] = None


class DayCommitOutcome(BaseModel):
    """Resultado da gravação de um dia do lote."""

    model_config = ConfigDict(frozen=True)

    day: date
    committed: bool
    lesson_id: Optional[str] = None
    error: Optional[str] = None


class BatchCommitResult(BaseModel):
    """Validação do lote + resultado por dia (vazio quando rejeitado).

    Não há rollback: dias gravados continuam gravados se outro falhar.
    """

    model_config = ConfigDict(frozen=True)

    validation: ValidationResult
    outcomes: list[DayCommitOutcome] = []

    @property
    def failed_days(self) -> list[date]:
        return [o.day for o in self.outcomes if not o.committed]

    @property
    def fully_committed(self) -> bool:
        return isinstance(self.validation, Accepted) and not self.failed_days
