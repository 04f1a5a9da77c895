"""Schemas para endpoints de health."""
from pydantic import BaseModel


class PingOut(BaseModel):
    message: str


class HealthOut(BaseModel):
    ok: bool
    db_ready: bool
    admin_enabled: bool
    smtp_configured: bool
