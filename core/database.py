"""
Conexão com o MongoDB.

Localização: core/database.py

Mantém um único MongoClient por processo (o pymongo já faz pool de
conexões internamente). Repositories obtêm o database via get_database().
"""
import logging
from typing import Optional

from django.conf import settings
from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None


def get_client() -> MongoClient:
    """
    Retorna o MongoClient compartilhado, criando-o na primeira chamada.
    """
    global _client
    if _client is None:
        logger.info(f"[DATABASE] Conectando ao MongoDB (db={settings.MONGO_DB_NAME})")
        _client = MongoClient(
            settings.MONGO_URI,
            serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
            tz_aware=False,
        )
    return _client


def get_database(name: Optional[str] = None) -> Database:
    """
    Retorna o database do MongoDB configurado em settings.MONGO_DB_NAME.

    Args:
        name: Nome alternativo do database (opcional)

    Returns:
        pymongo Database
    """
    return get_client()[name or settings.MONGO_DB_NAME]


def close_client():
    """Fecha a conexão compartilhada (usado em scripts e testes)."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
