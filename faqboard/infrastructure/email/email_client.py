"""
Cliente SMTP para correos transaccionales (aviso al admin, respuesta al autor).
"""
from __future__ import annotations

import smtplib
from email.message import EmailMessage
from typing import Protocol

from faqboard.core.config import Settings
from faqboard.core.exceptions import NotificationError


class Mailer(Protocol):
    def send(self, to_email: str, subject: str, html_body: str, text_body: str | None = None) -> None:
        ...


class SmtpMailer:
    """Envía mensajes HTML (+ texto plano opcional) vía SMTP."""

    def __init__(self, settings: Settings) -> None:
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.user = settings.smtp_user
        self.password = settings.smtp_pass
        self.from_email = settings.smtp_from_email or settings.smtp_user
        self.from_name = settings.smtp_from_name
        self.use_tls = settings.smtp_use_tls

    def _build_message(self, to_email: str, subject: str, html_body: str, text_body: str | None) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = to_email
        msg["Subject"] = subject
        if text_body:
            msg.set_content(text_body)
            msg.add_alternative(html_body, subtype="html")
        else:
            msg.set_content(html_body, subtype="html")
        return msg

    def send(self, to_email: str, subject: str, html_body: str, text_body: str | None = None) -> None:
        if not self.host or not self.user or not self.password:
            raise NotificationError("SMTP no configurado. Define SMTP_HOST/SMTP_USER/SMTP_PASS en .env")

        msg = self._build_message(to_email, subject, html_body, text_body)
        try:
            # STARTTLS por defecto (587); SSL implícito si use_tls=False (465)
            if self.use_tls:
                with smtplib.SMTP(self.host, self.port) as server:
                    server.starttls()
                    server.login(self.user, self.password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP_SSL(self.host, self.port) as server:
                    server.login(self.user, self.password)
                    server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Envío a {to_email} falló: {e}") from e


def build_mailer(settings: Settings) -> Mailer | None:
    """Devuelve un `SmtpMailer` si SMTP está configurado; si no, None (sin avisos)."""
    if not settings.smtp_configured:
        return None
    return SmtpMailer(settings)
