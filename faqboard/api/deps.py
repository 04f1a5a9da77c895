"""
Dependencias reutilizables para routers (FastAPI Depends).

Los componentes se construyen una vez en `create_app` y viven en `app.state`;
esta capa sólo los expone. Sin lógica de negocio.
"""
from typing import Optional

from fastapi import Header, Request

from faqboard.core.config import Settings
from faqboard.services.admin_gate import AdminGate
from faqboard.services.question_service import QuestionService

ADMIN_HEADER = "X-Admin-Password"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_question_service(request: Request) -> QuestionService:
    return request.app.state.question_service


def get_admin_gate(request: Request) -> AdminGate:
    return request.app.state.admin_gate


def require_admin(
    request: Request,
    x_admin_password: Optional[str] = Header(default=None, alias=ADMIN_HEADER),
) -> None:
    """Lanza `AuthorizationError` (401) si la cabecera no coincide con ADMIN_PASSWORD."""
    get_admin_gate(request).require(x_admin_password)
