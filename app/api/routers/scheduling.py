"""Endpoints de agendamento de aulas: catálogos, prévia, validação e gravação em lote."""
from datetime import date

from fastapi import APIRouter, Query, Response, status
from fastapi.responses import JSONResponse

from app.api.schemas.scheduling import (
    BatchCommitRequest,
    BatchRequest,
    CapacityOut,
    SlotPreviewOut,
    SlotPreviewRequest,
    SummaryRequest,
    TurmasOut,
    UnitsOut,
)
from app.domain.scheduling.models import BatchCommitResult, BatchSummary, Rejected, ValidationResult
from app.services import scheduling_service as svc

router = APIRouter(prefix="/scheduling", tags=["Scheduling"])


@router.get(
    "/turmas",
    response_model=TurmasOut,
    summary="Listar turmas",
    description="Turmas ordenadas pelo nome, com o nome do curso.",
)
async def get_turmas():
    return {"turmas": await svc.list_turmas()}


@router.get(
    "/turmas/{idturma}/ucs",
    response_model=UnitsOut,
    summary="Listar UCs da turma",
    description="Unidades curriculares do curso da turma, ordenadas pelo nome.",
)
async def get_turma_units(idturma: int):
    return {"ucs": await svc.list_units_for_turma(idturma)}


@router.post(
    "/slot-preview",
    response_model=SlotPreviewOut,
    summary="Prévia do horário",
    description="Calcula fim, período e duração máxima para o início/duração informados.",
)
def preview_slot(payload: SlotPreviewRequest) -> SlotPreviewOut:
    return SlotPreviewOut(**svc.slot_preview(payload.start_time, payload.duration_hours))


@router.get(
    "/ucs/{iduc}/capacity",
    response_model=CapacityOut,
    summary="Carga horária restante",
    description="Horas já agendadas antes de `cutoff` e a carga restante da UC.",
)
async def get_capacity(iduc: int, cutoff: date = Query(..., description="Data de corte (YYYY-MM-DD), exclusiva")):
    return CapacityOut(**await svc.capacity_for(iduc, cutoff))


@router.post("/summary", response_model=BatchSummary, summary="Resumo do agendamento")
async def post_summary(payload: SummaryRequest) -> BatchSummary:
    return await svc.summarize(payload.iduc, payload.duration_hours, payload.days)


@router.post(
    "/validate",
    response_model=ValidationResult,
    summary="Validar lote",
    description="Valida o lote sem gravar. Rejeições de regra de negócio voltam com 200.",
)
async def post_validate(payload: BatchRequest):
    return await svc.validate(
        payload.idturma, payload.iduc, payload.start_time, payload.duration_hours, payload.days
    )


@router.post(
    "/batches",
    status_code=status.HTTP_201_CREATED,
    response_model=BatchCommitResult,
    summary="Agendar aulas em lote",
    description=(
        "Valida e grava uma aula por dia. 422 quando rejeitado; "
        "207 quando algum dia falhou na gravação (veja `outcomes`)."
    ),
)
async def post_batch(payload: BatchCommitRequest, response: Response):
    result = await svc.schedule_batch(
        payload.idturma,
        payload.iduc,
        payload.start_time,
        payload.duration_hours,
        payload.days,
        status=payload.status,
    )
    if isinstance(result.validation, Rejected):
        return JSONResponse(status_code=422, content=result.model_dump(mode="json"))
    if result.failed_days:
        response.status_code = status.HTTP_207_MULTI_STATUS
    return result
