"""
Modelo de Receita.

Localização: finance/models/receita_model.py

Uma receita é estruturalmente um lançamento de entrada guardado em
collection própria.

Schema no MongoDB (collection 'incomes'):
{
  _id: ObjectId,
  description: String,
  amount: Decimal128,
  date: ISODate,
  status: String,              # 'pending' | 'paid' | 'cancelled'
  category_id: String,         # Obrigatório
  account_id: String,          # Obrigatório
  category_code: String,
  account_code: String,
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Dict, Any, Optional

from finance.models.fields import (
    required_text, optional_text, parse_amount, required_date, choice, timestamps
)
from finance.models.transaction_model import TransactionModel


class ReceitaModel:
    """Modelo de dados para receitas."""

    @staticmethod
    def create_receita_data(payload: Dict[str, Any],
                            existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Cria estrutura de dados de receita.

        Raises:
            ValueError: Se account_id/category_id ausentes ou valores inválidos
        """
        if not payload.get('account_id') or not payload.get('category_id'):
            raise ValueError("account_id e category_id são obrigatórios.")

        return {
            'description': required_text(payload, 'description', 'Descrição'),
            'amount': parse_amount(payload.get('amount')),
            'date': required_date(payload, 'date', 'Data'),
            'status': choice(payload.get('status'), TransactionModel.STATUSES, 'Status',
                             default=TransactionModel.PENDING),
            'category_id': str(payload['category_id']).strip(),
            'account_id': str(payload['account_id']).strip(),
            'category_code': optional_text(payload, 'category_code').upper(),
            'account_code': optional_text(payload, 'account_code').upper(),
            **timestamps(existing),
        }

    @staticmethod
    def income_as_transaction(receita: Dict[str, Any]) -> Dict[str, Any]:
        """
        Converte uma receita em lançamento de entrada para os cálculos.

        Args:
            receita: Documento da collection 'incomes'

        Returns:
            Dict no formato de lançamento com direction='inflow'
        """
        return {
            '_id': receita.get('_id'),
            'description': receita.get('description', ''),
            'amount': receita.get('amount'),
            'date': receita.get('date'),
            'direction': TransactionModel.INFLOW,
            'status': receita.get('status', TransactionModel.PENDING),
            'category_id': receita.get('category_id', ''),
            'account_id': receita.get('account_id', ''),
            'created_at': receita.get('created_at'),
            'updated_at': receita.get('updated_at'),
        }
