"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Admin, Email.
- Se construye una sola vez en `create_app` y se inyecta en cada componente;
  la instancia es inmutable (frozen).
"""
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Variables de configuración; se sobreescriben vía entorno (.env)."""

    # App
    app_name: str = "FAQ Board"
    api_prefix: str = "/api"
    port: int = 8080
    app_base_url: str = "http://localhost:8080"
    log_level: str = "INFO"
    public_dir: str | None = None

    # CORS (el frontend estático puede vivir en otro origen)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "faq_db"
    mongo_collection: str = "questions"
    mongo_tls: bool = False
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False

    # Admin: sin valor por defecto; si falta, el panel queda cerrado
    admin_password: str | None = None
    admin_email: str | None = None

    # Email / SMTP
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_from_email: str | None = None
    smtp_from_name: str = "FAQ"
    smtp_use_tls: bool = True

    # Preguntas
    default_submitter_name: str = "Anonymous"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
        frozen=True,
    )

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def base_url(self) -> str:
        return (self.app_base_url or "").rstrip("/")

    @property
    def admin_panel_url(self) -> str:
        return f"{self.base_url}/admin.html"

    @property
    def public_board_url(self) -> str:
        return f"{self.base_url}/"

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_pass)

    @property
    def admin_configured(self) -> bool:
        return bool(self.admin_password)


def load_settings(**overrides) -> Settings:
    """Construye la configuración (entorno + .env), con overrides opcionales para tests."""
    return Settings(**overrides)
