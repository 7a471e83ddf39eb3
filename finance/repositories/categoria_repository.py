"""
Repository para categorias no MongoDB.

Localização: finance/repositories/categoria_repository.py
"""
from typing import List, Dict, Any

from core.repositories.base_repository import BaseRepository


class CategoriaRepository(BaseRepository):
    """
    Repository para gerenciar categorias no MongoDB.
    """

    def __init__(self, database=None):
        super().__init__('categories', database)

    def _ensure_indexes(self):
        """
        Cria índices necessários para otimizar queries.
        """
        # Código legível único
        self.collection.create_index('code', unique=True)

        # Ordenação por nome nas listagens
        self.collection.create_index('name')

    def find_all_ordered(self) -> List[Dict[str, Any]]:
        """
        Busca todas as categorias ordenadas por nome.

        Returns:
            Lista de categorias
        """
        return self.find_all(sort=('name', 1))
