"""
Repository para receitas.

Localização: finance/repositories/receita_repository.py

Schema da collection 'incomes': ver finance/models/receita_model.py
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Dict, Any

from core.repositories.base_repository import BaseRepository


class ReceitaRepository(BaseRepository):
    """
    Repository para gerenciar receitas no MongoDB.
    """

    def __init__(self, database=None):
        super().__init__('incomes', database)

    def _ensure_indexes(self):
        self.collection.create_index('date')
        self.collection.create_index([('status', 1), ('date', 1)])

    def find_by_period(self, start_date: Optional[datetime] = None,
                       end_date: Optional[datetime] = None) -> List[Dict[str, Any]]:
        return self.find_by_date_range('date', start_date, end_date)

    def get_total(self) -> Decimal:
        """
        Soma o valor de todas as receitas, independente do status.

        Returns:
            Total (Decimal('0') se não houver receitas)
        """
        pipeline = [
            {'$group': {'_id': None, 'total': {'$sum': '$amount'}}}
        ]
        results = list(self.collection.aggregate(pipeline))
        if not results:
            return Decimal('0')
        return Decimal(str(results[0]['total']))
