"""
Modelo de Transação (lançamento).

Localização: finance/models/transaction_model.py

Schema no MongoDB (collection 'transactions'):
{
  _id: ObjectId,
  description: String,
  amount: Decimal128,          # Sempre positivo; o sinal vem de direction
  date: ISODate,               # Data de vencimento/competência
  direction: String,           # 'inflow' | 'outflow'
  status: String,              # 'pending' | 'paid' | 'cancelled'
  category_id: String,
  account_id: String,
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Dict, Any, Optional

from finance.models.fields import (
    required_text, optional_text, parse_amount, required_date, choice, timestamps
)


class TransactionModel:
    """
    Modelo de dados para transações (lançamentos) financeiras.
    """

    INFLOW = 'inflow'
    OUTFLOW = 'outflow'

    PENDING = 'pending'
    PAID = 'paid'
    CANCELLED = 'cancelled'

    # Aceita também os nomes usados na interface em português
    DIRECTIONS = {
        'inflow': INFLOW,
        'entrada': INFLOW,
        'receita': INFLOW,
        'outflow': OUTFLOW,
        'saida': OUTFLOW,
        'saída': OUTFLOW,
        'despesa': OUTFLOW,
    }

    STATUSES = {
        'pending': PENDING,
        'pendente': PENDING,
        'paid': PAID,
        'pago': PAID,
        'cancelled': CANCELLED,
        'cancelado': CANCELLED,
    }

    @staticmethod
    def create_transaction_data(payload: Dict[str, Any],
                               existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Cria estrutura de dados de transação.

        Args:
            payload: Dados recebidos
            existing: Documento atual, em caso de atualização

        Returns:
            Dict com dados da transação

        Raises:
            ValueError: Se algum campo obrigatório estiver ausente ou inválido
        """
        return {
            'description': required_text(payload, 'description', 'Descrição'),
            'amount': parse_amount(payload.get('amount')),
            'date': required_date(payload, 'date', 'Data'),
            'direction': choice(payload.get('direction'), TransactionModel.DIRECTIONS, 'Tipo do lançamento'),
            'status': choice(payload.get('status'), TransactionModel.STATUSES, 'Status',
                             default=TransactionModel.PENDING),
            'category_id': optional_text(payload, 'category_id'),
            'account_id': optional_text(payload, 'account_id'),
            **timestamps(existing),
        }
