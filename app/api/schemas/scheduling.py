"""
Esquemas Pydantic da API de agendamento de aulas.

Convenções:
- Nomes de ids como no banco (`idturma`, `iduc`).
- Horários em "HH:MM" 24h; datas em ISO (YYYY-MM-DD).
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.core.config import settings


class TurmaOut(BaseModel):
    idturma: int
    turmanome: str
    idcurso: Optional[int] = None
    nomecurso: Optional[str] = None


class TurmasOut(BaseModel):
    turmas: List[TurmaOut]


class UnitOut(BaseModel):
    iduc: int
    nomeuc: str
    cargahoraria: int


class UnitsOut(BaseModel):
    ucs: List[UnitOut]


class SlotPreviewRequest(BaseModel):
    start_time: str  # HH:MM 24h
    duration_hours: int = Field(default=1, ge=1)

    @field_validator("start_time")
    @classmethod
    def _validate_time(cls, v: str) -> str:
        if len(v) == 5 and v[2] == ":" and v[:2].isdigit() and v[3:].isdigit():
            return v
        raise ValueError("time must be HH:MM")


class SlotPreviewOut(BaseModel):
    start_time: str
    end_time: str
    horario: str
    period: Optional[str] = None
    max_duration_hours: int
    valid: bool
    message: Optional[str] = None


class CapacityOut(BaseModel):
    iduc: int
    nomeuc: str
    cargahoraria: int
    cutoff: date
    scheduled_hours: float
    remaining_capacity: int


class BatchRequest(BaseModel):
    # Campos opcionais de propósito: ausência vira rejeição `missing_required_field`
    idturma: Optional[int] = None
    iduc: Optional[int] = None
    start_time: Optional[str] = None
    duration_hours: int = Field(default=1, ge=1)
    days: List[date] = Field(default_factory=list, max_length=settings.max_batch_days)


class BatchCommitRequest(BatchRequest):
    status: Optional[str] = None  # padrão: settings.lesson_default_status


class SummaryRequest(BaseModel):
    iduc: int
    duration_hours: int = Field(default=1, ge=1)
    days: List[date] = Field(default_factory=list, max_length=settings.max_batch_days)
