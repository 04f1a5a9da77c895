"""Fixtures compartidas: almacén en memoria, mailer falso y cliente HTTP."""
from __future__ import annotations

import copy
import itertools
import uuid
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from faqboard.core.config import Settings
from faqboard.core.exceptions import NotificationError
from faqboard.main import create_app

ADMIN_PASSWORD = "s3cret-admin"


class InMemoryQuestionStore:
    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}

    def create(self, fields: Dict[str, Any]) -> str:
        question_id = uuid.uuid4().hex
        self.docs[question_id] = copy.deepcopy(dict(fields))
        return question_id

    def get(self, question_id: str) -> Optional[Dict[str, Any]]:
        doc = self.docs.get(question_id)
        if doc is None:
            return None
        return {**copy.deepcopy(doc), "id": question_id}

    def _all(self) -> List[Dict[str, Any]]:
        return [{**copy.deepcopy(d), "id": k} for k, d in self.docs.items()]

    def list_answered(self) -> List[Dict[str, Any]]:
        items = [d for d in self._all() if d.get("status") == "answered"]
        return sorted(items, key=lambda d: d.get("answeredAt") or "", reverse=True)

    def list_all(self) -> List[Dict[str, Any]]:
        return sorted(self._all(), key=lambda d: d.get("createdAt") or "", reverse=True)

    def update(self, question_id: str, patch: Dict[str, Any]) -> bool:
        if question_id not in self.docs:
            return False
        self.docs[question_id].update(copy.deepcopy(patch))
        return True

    def delete(self, question_id: str) -> None:
        self.docs.pop(question_id, None)


class FakeMailer:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: List[Dict[str, Any]] = []

    def send(self, to_email: str, subject: str, html_body: str, text_body: str | None = None) -> None:
        if self.fail:
            raise NotificationError("smtp down")
        self.sent.append({"to": to_email, "subject": subject, "html": html_body, "text": text_body})


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "admin_password": ADMIN_PASSWORD,
        "admin_email": "admin@example.com",
        "app_base_url": "https://faq.example.com",
        "public_dir": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def counter_clock(start: int = 0):
    """Reloj determinista: cada llamada devuelve un instante posterior."""
    seq = itertools.count(start)
    return lambda: f"2024-01-01T00:00:{next(seq):02d}.000Z"


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> InMemoryQuestionStore:
    return InMemoryQuestionStore()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def app(settings, store, mailer):
    return create_app(settings, store=store, mailer=mailer)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"X-Admin-Password": ADMIN_PASSWORD}
