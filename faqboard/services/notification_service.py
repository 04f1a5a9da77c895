"""
Avisos por correo del ciclo de vida de una pregunta.

- `notify_admin`: nueva pregunta recibida, con enlace al panel de administración.
- `notify_submitter`: la pregunta fue respondida, con enlace al tablero público.

Ambos son "best effort": cualquier falla se registra y se devuelve False,
nunca se propaga a la petición que los disparó.
"""
from __future__ import annotations

import logging
from html import escape
from typing import Any, Dict, Optional

from faqboard.infrastructure.email.email_client import Mailer

log = logging.getLogger("faqboard.notify")

ADMIN_SUBJECT = "📩 Nouvelle question FAQ"
SUBMITTER_SUBJECT = "✅ Réponse à votre question FAQ"

_QUOTE_STYLE = "background: #f9f9f9; padding: 15px; border-left: 3px solid #2196F3;"


def render_admin_notice(question: Dict[str, Any], admin_url: str) -> tuple[str, str]:
    """Devuelve (html, texto) del aviso al administrador."""
    name = question.get("name") or ""
    email = question.get("email")
    sender = f"{escape(name)} ({escape(email)})" if email else escape(name)
    html = f"""
    <h2>Nouvelle question reçue</h2>
    <p><strong>De:</strong> {sender}</p>
    <p><strong>Question:</strong></p>
    <blockquote style="{_QUOTE_STYLE}">
      {escape(question.get("question") or "")}
    </blockquote>
    <p><a href="{escape(admin_url)}">Répondre à la question</a></p>
    """
    text = (
        f"Nouvelle question de {name}{f' ({email})' if email else ''}:\n\n"
        f"{question.get('question') or ''}\n\n"
        f"Répondre: {admin_url}"
    )
    return html, text


def render_submitter_notice(question: Dict[str, Any], answer: str, board_url: str) -> tuple[str, str]:
    """Devuelve (html, texto) del aviso de respuesta al autor."""
    html = f"""
    <h2>Votre question a reçu une réponse</h2>
    <p><strong>Votre question:</strong></p>
    <blockquote style="{_QUOTE_STYLE}">
      {escape(question.get("question") or "")}
    </blockquote>
    <p><strong>Réponse:</strong></p>
    <blockquote style="{_QUOTE_STYLE.replace('#2196F3', '#4CAF50')}">
      {escape(answer)}
    </blockquote>
    <p><a href="{escape(board_url)}">Voir toutes les questions</a></p>
    """
    text = (
        f"Votre question:\n{question.get('question') or ''}\n\n"
        f"Réponse:\n{answer}\n\n"
        f"Voir toutes les questions: {board_url}"
    )
    return html, text


class Notifier:
    def __init__(
        self,
        mailer: Optional[Mailer],
        admin_email: Optional[str],
        admin_url: str,
        board_url: str,
    ) -> None:
        self.mailer = mailer
        self.admin_email = admin_email
        self.admin_url = admin_url
        self.board_url = board_url

    def notify_admin(self, question: Dict[str, Any]) -> bool:
        if self.mailer is None or not self.admin_email:
            log.debug("Aviso al admin omitido (sin SMTP o ADMIN_EMAIL) question_id=%s", question.get("id"))
            return False
        html, text = render_admin_notice(question, self.admin_url)
        try:
            self.mailer.send(self.admin_email, ADMIN_SUBJECT, html, text)
        except Exception:
            log.exception("Error enviando aviso al admin question_id=%s", question.get("id"))
            return False
        log.info("Aviso al admin enviado question_id=%s", question.get("id"))
        return True

    def notify_submitter(self, question: Dict[str, Any], answer: str) -> bool:
        to_email = question.get("email")
        if self.mailer is None or not to_email:
            log.debug("Aviso al autor omitido (sin SMTP o sin email) question_id=%s", question.get("id"))
            return False
        html, text = render_submitter_notice(question, answer, self.board_url)
        try:
            self.mailer.send(to_email, SUBMITTER_SUBJECT, html, text)
        except Exception:
            log.exception("Error enviando respuesta al autor question_id=%s", question.get("id"))
            return False
        log.info("Respuesta enviada al autor question_id=%s", question.get("id"))
        return True
