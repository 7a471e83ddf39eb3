"""
Modelo de Custo Fixo.

Localização: finance/models/custo_fixo_model.py

Custos fixos não têm status: vencido/a vencer é decidido apenas pela
data de vencimento.

Schema no MongoDB (collection 'fixed_costs'):
{
  _id: ObjectId,
  description: String,
  amount: Decimal128,
  due_date: ISODate,
  category_id: String,
  account_id: String,          # Opcional
  category_code: String,       # Código legível (opcional)
  account_code: String,        # Código legível (opcional)
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Dict, Any, Optional

from finance.models.fields import (
    required_text, optional_text, parse_amount, required_date, timestamps
)


class CustoFixoModel:
    """Modelo de dados para custos fixos."""

    @staticmethod
    def create_custo_fixo_data(payload: Dict[str, Any],
                               existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Cria estrutura de dados de custo fixo.

        Raises:
            ValueError: Se descrição, valor ou vencimento inválidos
        """
        return {
            'description': required_text(payload, 'description', 'Descrição'),
            'amount': parse_amount(payload.get('amount')),
            'due_date': required_date(payload, 'due_date', 'Data de vencimento'),
            'category_id': optional_text(payload, 'category_id'),
            'account_id': optional_text(payload, 'account_id'),
            'category_code': optional_text(payload, 'category_code').upper(),
            'account_code': optional_text(payload, 'account_code').upper(),
            **timestamps(existing),
        }
