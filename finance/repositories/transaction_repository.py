"""
Repository para transações financeiras (lançamentos).

Localização: finance/repositories/transaction_repository.py

Este repository encapsula todas as operações com a collection 'transactions'
no MongoDB.

Schema da collection:
{
  _id: ObjectId,
  description: String,
  amount: Decimal128 (sempre positivo),
  date: ISODate,
  direction: "inflow" | "outflow",
  status: "pending" | "paid" | "cancelled",
  category_id: String,
  account_id: String,
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal

from core.repositories.base_repository import BaseRepository
from finance.models.transaction_model import TransactionModel


class TransactionRepository(BaseRepository):
    """
    Repository para gerenciar transações financeiras no MongoDB.

    Exemplo de uso:
        repo = TransactionRepository()
        transacoes = repo.find_by_period(start_date, end_date)
    """

    def __init__(self, database=None):
        super().__init__('transactions', database)

    def _ensure_indexes(self):
        """
        Cria índices necessários para otimizar queries.

        Índices:
        - date: Filtros por período
        - [status, date]: Busca de pendentes vencidos (atualização automática)
        - category_id / account_id: Resumos por categoria e conta
        """
        self.collection.create_index('date')
        self.collection.create_index([('status', 1), ('date', 1)])
        self.collection.create_index('category_id')
        self.collection.create_index('account_id')

    def find_by_period(self, start_date: Optional[datetime] = None,
                       end_date: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """
        Busca transações com data dentro do intervalo (inclusivo).

        Args:
            start_date: Data inicial (opcional)
            end_date: Data final (opcional)

        Returns:
            Lista de transações
        """
        return self.find_by_date_range('date', start_date, end_date)

    def find_pending_before(self, limit_date: datetime) -> List[Dict[str, Any]]:
        """
        Busca transações pendentes com data anterior ao limite.

        Args:
            limit_date: Início do dia de referência

        Returns:
            Lista de transações pendentes vencidas
        """
        return self.find_many(
            query={
                'status': TransactionModel.PENDING,
                'date': {'$lt': limit_date}
            },
            sort=('date', 1)
        )

    def get_summary(self) -> Dict[str, Decimal]:
        """
        Soma entradas e saídas de todas as transações (qualquer status).

        Returns:
            Dict com inflow, outflow e balance
        """
        pipeline = [
            {
                '$group': {
                    '_id': '$direction',
                    'total': {'$sum': '$amount'}
                }
            }
        ]

        results = list(self.collection.aggregate(pipeline))

        inflow = sum((Decimal(str(r['total'])) for r in results if r['_id'] == TransactionModel.INFLOW), Decimal('0'))
        outflow = sum((Decimal(str(r['total'])) for r in results if r['_id'] == TransactionModel.OUTFLOW), Decimal('0'))

        return {
            'inflow': inflow,
            'outflow': outflow,
            'balance': inflow - outflow
        }
