"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers).

Arranque: `faqboard` (script) o `uvicorn faqboard.main:create_app --factory`.
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from faqboard.api.router import api_router
from faqboard.api.routers import health
from faqboard.core.config import Settings, load_settings
from faqboard.core.exceptions import register_exception_handlers
from faqboard.core.logging import setup_logging
from faqboard.core.middleware import add_middlewares
from faqboard.infrastructure.db.bootstrap import ensure_collections
from faqboard.infrastructure.db.mongo import build_client, get_collection, get_database, ping
from faqboard.infrastructure.email.email_client import Mailer, build_mailer
from faqboard.repositories.question_repo import MongoQuestionStore, QuestionStore
from faqboard.services.admin_gate import AdminGate
from faqboard.services.notification_service import Notifier
from faqboard.services.question_service import QuestionService

_log = logging.getLogger("faqboard.startup")


def _mount_frontend(app: FastAPI, public_dir: Path) -> None:
    admin_page = public_dir / "admin.html"

    @app.get("/admin", include_in_schema=False)
    def admin_page_route():
        return FileResponse(admin_page)

    # Montado al final: las rutas de la API tienen prioridad
    app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[QuestionStore] = None,
    mailer: Optional[Mailer] = None,
) -> FastAPI:
    """Construye la app. `store`/`mailer` permiten inyectar sustitutos en memoria."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.mongo_client = None

    if store is None:
        client = build_client(settings)
        app.state.mongo_client = client
        store = MongoQuestionStore(get_collection(client, settings))

    notifier = Notifier(
        mailer if mailer is not None else build_mailer(settings),
        admin_email=settings.admin_email,
        admin_url=settings.admin_panel_url,
        board_url=settings.public_board_url,
    )
    app.state.admin_gate = AdminGate(settings.admin_password)
    app.state.question_service = QuestionService(
        store,
        notifier,
        default_name=settings.default_submitter_name,
    )

    add_middlewares(app, settings)
    register_exception_handlers(app)

    @app.on_event("startup")
    def on_startup():
        if not settings.admin_configured:
            _log.warning("ADMIN_PASSWORD no definido; las rutas de admin rechazan todo.")
        if notifier.mailer is None:
            _log.warning("SMTP no configurado; no se enviarán avisos por correo.")
        client = app.state.mongo_client
        if client is not None:
            # Garantiza colección/índices/validador si hay conexión
            if ping(client):
                ensure_collections(get_database(client, settings), settings.mongo_collection)
            else:
                _log.warning("Mongo no listo; omitiendo ensure_collections()")
        _log.info("FAQ pública: %s", settings.public_board_url)
        _log.info("Panel de admin: %s", settings.admin_panel_url)

    @app.on_event("shutdown")
    def on_shutdown():
        client = app.state.mongo_client
        if client is not None:
            client.close()

    app.include_router(health.router)
    app.include_router(api_router, prefix=settings.api_prefix_normalized)

    if settings.public_dir:
        public_dir = Path(settings.public_dir)
        if public_dir.is_dir():
            _mount_frontend(app, public_dir)
        else:
            _log.warning("PUBLIC_DIR no existe: %s", public_dir)

    return app


def run() -> None:
    import uvicorn

    settings = load_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
