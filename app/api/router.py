"""Agregador de routers da API."""
from fastapi import APIRouter
from app.api.routers import health, scheduling

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(scheduling.router)
