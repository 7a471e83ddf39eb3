"""
Repository para bancos.

Localização: finance/repositories/banco_repository.py

Gerencia a collection 'banks'. O código do banco é único.
"""
from core.repositories.base_repository import BaseRepository


class BancoRepository(BaseRepository):
    """
    Repository para gerenciar bancos no MongoDB.
    """

    def __init__(self, database=None):
        super().__init__('banks', database)

    def _ensure_indexes(self):
        self.collection.create_index('code', unique=True)
