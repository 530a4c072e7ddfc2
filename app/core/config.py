"""Configuração central da aplicação (Pydantic Settings).

- Carrega variáveis do .env na raiz do projeto.
- Agrupa ajustes por área: App, CORS, Mongo, Agendamento.
"""
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve o .env da raiz do projeto (independente do CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Variáveis de configuração com valores padrão razoáveis.

    Nota: os valores podem ser sobrescritos por variáveis de ambiente (.env).
    """
    # App
    app_name: str = "Agenda de Aulas API"
    api_prefix: str = "/api"
    log_level: str = Field(
        "INFO",
        validation_alias=AliasChoices("AGENDA_LOG_LEVEL", "LOG_LEVEL"),
    )

    # CORS (front em Vite/React no localhost)
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    cors_allow_any: bool = False  # libera qualquer origem (use com cuidado)

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "agenda_db"
    mongo_timeout_ms: int = 15000
    mongo_tls: bool = False
    # TLS relaxado (apenas dev)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False

    # Agendamento
    lesson_default_status: str = Field(
        "Agendada",
        validation_alias=AliasChoices("AGENDA_LESSON_STATUS", "LESSON_DEFAULT_STATUS"),
    )
    max_batch_days: int = Field(
        31,
        ge=1,
        validation_alias=AliasChoices("AGENDA_MAX_BATCH_DAYS", "MAX_BATCH_DAYS"),
    )

    # --- Utilidades derivadas ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devolve `api_prefix` em formato consistente.

        - Sempre começa com '/'
        - Sem '/' final (exceto quando é só '/')
        - Vazio devolve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # não falha com variáveis não usadas
    )


settings = Settings()
