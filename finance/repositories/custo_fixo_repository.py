"""
Repository para custos fixos.

Localização: finance/repositories/custo_fixo_repository.py

Schema da collection 'fixed_costs': ver finance/models/custo_fixo_model.py
"""
from decimal import Decimal
from typing import List, Dict, Any

from core.repositories.base_repository import BaseRepository


class CustoFixoRepository(BaseRepository):
    """
    Repository para gerenciar custos fixos no MongoDB.
    """

    def __init__(self, database=None):
        super().__init__('fixed_costs', database)

    def _ensure_indexes(self):
        self.collection.create_index('due_date')
        self.collection.create_index('category_id')

    def find_all_by_due_date(self) -> List[Dict[str, Any]]:
        return self.find_all(sort=('due_date', 1))

    def get_total(self) -> Decimal:
        """
        Soma o valor de todos os custos fixos.

        Returns:
            Total (Decimal('0') se a collection estiver vazia)
        """
        pipeline = [
            {'$group': {'_id': None, 'total': {'$sum': '$amount'}}}
        ]
        results = list(self.collection.aggregate(pipeline))
        if not results:
            return Decimal('0')
        return Decimal(str(results[0]['total']))
