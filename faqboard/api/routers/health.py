"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, Request, status

from faqboard.api.deps import get_admin_gate, get_settings
from faqboard.api.schemas.health import HealthOut, PingOut
from faqboard.infrastructure.db.mongo import ping as mongo_ping

router = APIRouter(tags=["Health"])  # sin prefijo para mantener rutas estables


@router.get("/ping", response_model=PingOut, summary="Ping básico")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
def health(request: Request) -> HealthOut:
    client = getattr(request.app.state, "mongo_client", None)
    # Con un almacén inyectado (sin cliente Mongo) no hay nada que sondear
    db_ready = mongo_ping(client) if client is not None else True
    return HealthOut(
        ok=db_ready,
        db_ready=db_ready,
        admin_enabled=get_admin_gate(request).enabled,
        smtp_configured=get_settings(request).smtp_configured,
    )
