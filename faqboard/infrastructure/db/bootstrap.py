"""
Bootstrap de la base Mongo: define y aplica el validador (JSON Schema) e índices
de la colección de preguntas. Se ejecuta al inicio de la app.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

_log = logging.getLogger("faqboard.mongo.bootstrap")

QUESTION_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["question", "name", "status", "createdAt"],
    "properties": {
        "question": {"bsonType": "string", "minLength": 1},
        "name": {"bsonType": "string"},
        "email": {"bsonType": ["string", "null"]},
        "status": {"bsonType": "string", "enum": ["pending", "answered"]},
        "createdAt": {"bsonType": "string"},
        "answer": {"bsonType": ["string", "null"]},
        "answeredAt": {"bsonType": ["string", "null"]},
    },
}


def question_indexes() -> List[Dict[str, Any]]:
    return [
        {"keys": [("status", ASCENDING), ("answeredAt", DESCENDING)], "name": "status_answeredAt"},
        {"keys": [("createdAt", DESCENDING)], "name": "createdAt_desc"},
    ]


def _collmod_or_create(db: Database, name: str, validator: Dict[str, Any] | None) -> None:
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator}, validationLevel="moderate")
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # Algunos planes gestionados no permiten collMod; seguimos sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(db: Database, name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = db[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections(db: Database, collection: str) -> None:
    """Garantiza la colección de preguntas, su validador y sus índices."""
    _collmod_or_create(db, collection, QUESTION_VALIDATOR)
    _ensure_indexes(db, collection, question_indexes())
    _log.info("Colección '%s' lista", collection)
