"""
Service para custos fixos.

Localização: finance/services/custo_fixo_service.py
"""
from decimal import Decimal

from finance.models.custo_fixo_model import CustoFixoModel
from finance.repositories.custo_fixo_repository import CustoFixoRepository
from finance.services.base_service import CrudService, audited


@audited
class CustoFixoService(CrudService):
    """
    Service para gerenciar custos fixos (aluguel, internet, ...).

    Custos fixos não têm status: vencidos são identificados apenas pela
    data de vencimento.
    """

    entity = 'fixed_cost'
    label = 'custo fixo'

    def __init__(self, custo_fixo_repo=None):
        super().__init__(custo_fixo_repo or CustoFixoRepository())

    def build(self, payload, existing=None):
        return CustoFixoModel.create_custo_fixo_data(payload, existing)

    def list(self):
        return self.repo.find_all_by_due_date()

    def total(self) -> Decimal:
        """Soma o valor de todos os custos fixos."""
        return self.repo.get_total()
