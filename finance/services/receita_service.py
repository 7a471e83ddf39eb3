"""
Service para receitas.

Localização: finance/services/receita_service.py
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List

from core.decorators import audit_log
from finance.models.receita_model import ReceitaModel
from finance.repositories.receita_repository import ReceitaRepository
from finance.services.base_service import CrudService, audited, ensure_payload_list

logger = logging.getLogger(__name__)


@audited
class ReceitaService(CrudService):
    """
    Service para gerenciar receitas (entradas em collection própria).
    """

    entity = 'income'
    label = 'receita'
    default_sort = ('date', -1)

    def __init__(self, receita_repo=None):
        super().__init__(receita_repo or ReceitaRepository())

    def build(self, payload, existing=None):
        return ReceitaModel.create_receita_data(payload, existing)

    def total(self) -> Decimal:
        return self.repo.get_total()

    @audit_log(action='create_batch', entity='income')
    def create_batch(self, payload: Any) -> List[Dict[str, Any]]:
        """
        Cria várias receitas de uma vez.

        Toda a lista é validada antes de gravar qualquer item.

        Raises:
            ValueError: Lista vazia ou item inválido (indica a posição)
        """
        items = ensure_payload_list(payload, 'receita')

        receitas = []
        for position, item in enumerate(items, start=1):
            try:
                receitas.append(self.build(item))
            except ValueError as e:
                raise ValueError(f"Receita {position}: {e}") from e

        created = self.repo.create_many(receitas)
        logger.info(f"[RECEITAS] {len(created)} receitas criadas em lote")
        return created
