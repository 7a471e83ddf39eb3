"""
Service para cadastro de contas bancárias.

Localização: finance/services/conta_service.py
"""
from typing import List, Dict, Any

from finance.models.conta_model import ContaModel
from finance.repositories.conta_repository import ContaRepository
from finance.services.base_service import CrudService, audited


@audited
class ContaService(CrudService):
    """
    Service para gerenciar contas (corrente/poupança) vinculadas a bancos.
    """

    entity = 'account'
    label = 'conta'
    unique_code = True
    default_sort = ('name', 1)

    def __init__(self, conta_repo=None):
        super().__init__(conta_repo or ContaRepository())

    def build(self, payload, existing=None):
        return ContaModel.create_conta_data(payload, existing)

    def list_by_bank(self, bank_id: str) -> List[Dict[str, Any]]:
        return self.repo.find_by_bank(bank_id)
