"""Health (sem auth), saídas tipadas e estáveis."""
from fastapi import APIRouter, status

from app.infrastructure.db.mongo import db_ready
from app.api.schemas.health import PingOut, HealthOut


router = APIRouter(tags=["Health"])  # sem prefixo para manter os paths estáveis


@router.get("/ping", response_model=PingOut, summary="Ping básico")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Saúde básica")
def health() -> HealthOut:
    return HealthOut(ok=True, db_ready=db_ready())
