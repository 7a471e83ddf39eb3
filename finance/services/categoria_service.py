"""
Service para gerenciar categorias.

Localização: finance/services/categoria_service.py
"""
import logging
from typing import List, Dict, Any

from finance.models.categoria_model import CategoriaModel
from finance.repositories.categoria_repository import CategoriaRepository
from finance.services.base_service import CrudService, audited

logger = logging.getLogger(__name__)


@audited
class CategoriaService(CrudService):
    """
    Service para gerenciar categorias de lançamentos.
    """

    entity = 'category'
    label = 'categoria'
    unique_code = True

    def __init__(self, categoria_repo=None):
        super().__init__(categoria_repo or CategoriaRepository())

    def build(self, payload, existing=None):
        return CategoriaModel.create_categoria_data(payload, existing)

    def list(self) -> List[Dict[str, Any]]:
        return self.repo.find_all_ordered()

    def popular_categorias_predefinidas(self) -> List[Dict[str, Any]]:
        """
        Popula as categorias pré-definidas que ainda não existem.

        Returns:
            Lista de categorias criadas
        """
        categorias_data = [
            CategoriaModel.create_categoria_data(categoria)
            for categoria in CategoriaModel.get_categorias_predefinidas()
            if not self.repo.find_by_code(categoria['code'])
        ]

        created = self.repo.create_many(categorias_data)
        logger.info(f"[CATEGORIAS] {len(created)} categorias pré-definidas criadas")
        return created
