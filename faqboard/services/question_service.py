"""
Ciclo de vida de una pregunta: envío público (pending), respuesta del admin
(answered) y borrado. Orquesta los avisos por correo como efectos secundarios.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from faqboard.core.exceptions import NotFoundError, StorageError, ValidationError
from faqboard.core.time import now_iso
from faqboard.repositories.question_repo import Question, QuestionStore
from faqboard.services.notification_service import Notifier

log = logging.getLogger("faqboard.questions")

STATUS_PENDING = "pending"
STATUS_ANSWERED = "answered"

QUESTION_REQUIRED = "La question est requise"
ANSWER_REQUIRED = "La réponse est requise"


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class QuestionService:
    def __init__(
        self,
        store: QuestionStore,
        notifier: Notifier,
        default_name: str = "Anonymous",
        clock: Callable[[], str] = now_iso,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.default_name = default_name
        self.clock = clock

    def submit(self, question: Optional[str], email: Optional[str] = None, name: Optional[str] = None) -> str:
        """Crea una pregunta `pending` y avisa al admin. Devuelve el id."""
        text = _clean(question)
        if not text:
            raise ValidationError(QUESTION_REQUIRED)

        doc: Dict[str, Any] = {
            "question": text,
            "email": _clean(email) or None,
            "name": _clean(name) or self.default_name,
            "status": STATUS_PENDING,
            "createdAt": self.clock(),
            "answer": None,
            "answeredAt": None,
        }
        question_id = self.store.create(doc)
        log.info("Pregunta creada id=%s", question_id)

        self.notifier.notify_admin({**doc, "id": question_id})
        return question_id

    def get(self, question_id: str) -> Question:
        q = self.store.get(question_id)
        if q is None:
            raise NotFoundError()
        return q

    def answer(self, question_id: str, answer_text: Optional[str]) -> Question:
        """Fija respuesta, `answered` y `answeredAt`; avisa al autor si dejó email."""
        text = _clean(answer_text)
        if not text:
            raise ValidationError(ANSWER_REQUIRED)

        patch = {
            "answer": text,
            "status": STATUS_ANSWERED,
            "answeredAt": self.clock(),
        }
        if not self.store.update(question_id, patch):
            raise NotFoundError()
        log.info("Pregunta respondida id=%s", question_id)

        # La respuesta ya quedó guardada: una falla al releer sólo afecta al aviso
        try:
            updated = self.store.get(question_id)
        except StorageError:
            log.warning("No se pudo releer la pregunta respondida id=%s", question_id, exc_info=True)
            updated = None
        updated = updated or {"id": question_id, **patch}
        self.notifier.notify_submitter(updated, text)
        return updated

    def remove(self, question_id: str) -> None:
        # Idempotente: borrar un id inexistente no es un error
        self.store.delete(question_id)
        log.info("Pregunta eliminada id=%s", question_id)

    def public_list(self) -> List[Question]:
        return self.store.list_answered()

    def full_list(self) -> List[Question]:
        return self.store.list_all()
