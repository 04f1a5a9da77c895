"""Repo de la colección `questions`.

- Expone `id` (str del ObjectId) y nunca `_id`.
- Los campos se guardan en camelCase (`createdAt`, `answeredAt`), que es el
  formato que consumen el frontend y los exports.
- Toda falla de PyMongo se traduce a `StorageError`.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Protocol

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from faqboard.core.exceptions import StorageError

Question = Dict[str, Any]


class QuestionStore(Protocol):
    """Capacidades mínimas que el servicio necesita del almacén."""

    def create(self, fields: Dict[str, Any]) -> str: ...

    def get(self, question_id: str) -> Optional[Question]: ...

    def list_answered(self) -> List[Question]: ...

    def list_all(self) -> List[Question]: ...

    def update(self, question_id: str, patch: Dict[str, Any]) -> bool: ...

    def delete(self, question_id: str) -> None: ...


def _oid(question_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(str(question_id))
    except (InvalidId, TypeError):
        return None


def _out(doc: Dict[str, Any]) -> Question:
    d = dict(doc)
    d["id"] = str(d.pop("_id", ""))
    return d


@contextmanager
def _storage_errors(op: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        raise StorageError(f"{op} falló: {e}") from e


class MongoQuestionStore:
    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def create(self, fields: Dict[str, Any]) -> str:
        """Inserta y devuelve el id generado (str)."""
        data = dict(fields)
        data.pop("id", None)
        data.pop("_id", None)
        with _storage_errors("insert question"):
            res = self.collection.insert_one(data)
        return str(res.inserted_id)

    def get(self, question_id: str) -> Optional[Question]:
        oid = _oid(question_id)
        if oid is None:
            return None
        with _storage_errors("get question"):
            doc = self.collection.find_one({"_id": oid})
        return _out(doc) if doc else None

    def list_answered(self) -> List[Question]:
        """Preguntas respondidas, la respuesta más reciente primero."""
        with _storage_errors("list answered questions"):
            docs = list(self.collection.find({"status": "answered"}).sort("answeredAt", DESCENDING))
        return [_out(d) for d in docs]

    def list_all(self) -> List[Question]:
        """Todas las preguntas, la más reciente primero."""
        with _storage_errors("list questions"):
            docs = list(self.collection.find({}).sort("createdAt", DESCENDING))
        return [_out(d) for d in docs]

    def update(self, question_id: str, patch: Dict[str, Any]) -> bool:
        """Mezcla `patch` en el documento; False si el id no existe."""
        oid = _oid(question_id)
        if oid is None:
            return False
        set_ops = {k: v for k, v in patch.items() if k not in ("id", "_id")}
        with _storage_errors("update question"):
            res = self.collection.update_one({"_id": oid}, {"$set": set_ops})
        return res.matched_count > 0

    def delete(self, question_id: str) -> None:
        oid = _oid(question_id)
        if oid is None:
            return
        with _storage_errors("delete question"):
            self.collection.delete_one({"_id": oid})
