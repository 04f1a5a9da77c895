"""Cliente MongoDB (PyMongo) del almacén de preguntas.

El cliente conecta de forma perezosa: se crea siempre en el arranque y el
`ping` sólo determina si la base está lista. Si no lo está, la app arranca
igual y cada operación del repositorio falla con `StorageError`.
"""
import logging

import certifi
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from faqboard.core.config import Settings

_log = logging.getLogger("faqboard.mongo")


def build_client(settings: Settings) -> MongoClient:
    uri = settings.mongo_uri
    # Ajustes conservadores: 15s y CA de certifi incluso con SRV
    kwargs = dict(serverSelectionTimeoutMS=15000)
    if uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        kwargs["tlsAllowInvalidCertificates"] = settings.mongo_tls_insecure
        kwargs["tlsAllowInvalidHostnames"] = settings.mongo_tls_allow_invalid_hostnames
    return MongoClient(uri, **kwargs)


def get_database(client: MongoClient, settings: Settings) -> Database:
    return client[settings.mongo_db]


def get_collection(client: MongoClient, settings: Settings) -> Collection:
    return get_database(client, settings)[settings.mongo_collection]


def ping(client: MongoClient) -> bool:
    """True si el servidor responde; nunca lanza."""
    try:
        client.admin.command("ping")
        return True
    except PyMongoError as e:
        _log.warning("Mongo no accesible: %s", e)
        return False
