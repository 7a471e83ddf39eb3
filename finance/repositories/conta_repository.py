"""
Repository para contas bancárias.

Localização: finance/repositories/conta_repository.py
"""
from typing import List, Dict, Any

from core.repositories.base_repository import BaseRepository


class ContaRepository(BaseRepository):
    """
    Repository para gerenciar contas no MongoDB.
    """

    def __init__(self, database=None):
        super().__init__('accounts', database)

    def _ensure_indexes(self):
        """
        Índices:
        - code (único): busca por código legível
        - bank_id: contas de um banco
        """
        self.collection.create_index('code', unique=True)
        self.collection.create_index('bank_id')

    def find_by_bank(self, bank_id: str) -> List[Dict[str, Any]]:
        return self.find_many(query={'bank_id': bank_id}, sort=('name', 1))
