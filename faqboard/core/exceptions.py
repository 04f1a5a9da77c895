"""
Errores de dominio y handlers globales para respuestas de error consistentes.

Los servicios lanzan `FaqError` y subclases; los handlers las traducen a HTTP
con el cuerpo `{"error": ...}` que espera el frontend.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

GENERIC_ERROR = "Erreur interne du serveur"


class FaqError(Exception):
    """Base de los errores de la aplicación."""

    status_code = 500
    default_message = GENERIC_ERROR

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FaqError):
    status_code = 400
    default_message = "Requête invalide"


class AuthorizationError(FaqError):
    status_code = 401
    default_message = "Non autorisé"


class NotFoundError(FaqError):
    status_code = 404
    default_message = "Question introuvable"


class StorageError(FaqError):
    """Falla del almacén de documentos (conexión, timeout, escritura)."""

    status_code = 500


class NotificationError(FaqError):
    """Falla al enviar un correo. Nunca llega a la respuesta HTTP."""


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _body(message: str, request: Request, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message, **extra}
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("faqboard.errors")

    @app.exception_handler(FaqError)
    async def _faq_error_handler(request: Request, exc: FaqError):
        if exc.status_code >= 500:
            log.error(
                "%s %s failed request_id=%s: %s",
                request.method,
                request.url.path,
                _req_id(request),
                exc,
                exc_info=exc.__cause__ or exc,
            )
        return JSONResponse(status_code=exc.status_code, content=_body(exc.message, request))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_body(exc.detail or "HTTP error", request),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=_body("Requête invalide", request, errors=exc.errors()),
        )

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return JSONResponse(status_code=500, content=_body(GENERIC_ERROR, request))
