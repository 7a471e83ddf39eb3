"""
Modelo de Conta bancária.

Localização: finance/models/conta_model.py

Schema no MongoDB (collection 'accounts'):
{
  _id: ObjectId,
  name: String,
  code: String,               # Código legível único
  type: String,               # 'checking' | 'savings'
  initial_balance: Decimal128,
  bank_id: String,            # ID do banco
  created_at: ISODate,
  updated_at: ISODate
}
"""
from decimal import Decimal
from typing import Dict, Any, Optional

from finance.models.fields import required_text, parse_amount, choice, timestamps


class ContaModel:
    """Modelo de dados para contas."""

    CHECKING = 'checking'
    SAVINGS = 'savings'

    TIPOS = {
        'checking': CHECKING,
        'corrente': CHECKING,
        'conta corrente': CHECKING,
        'savings': SAVINGS,
        'poupanca': SAVINGS,
        'poupança': SAVINGS,
    }

    @staticmethod
    def create_conta_data(payload: Dict[str, Any],
                          existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Cria estrutura de dados de conta.

        Raises:
            ValueError: Se campos obrigatórios ausentes ou tipo inválido
        """
        initial_balance = payload.get('initial_balance')
        return {
            'name': required_text(payload, 'name', 'Nome da conta'),
            'code': required_text(payload, 'code', 'Código da conta').upper(),
            'type': choice(payload.get('type'), ContaModel.TIPOS, 'Tipo da conta',
                           default=ContaModel.CHECKING),
            'initial_balance': (parse_amount(initial_balance, 'Saldo inicial', allow_negative=True)
                                if initial_balance not in (None, '') else Decimal('0')),
            'bank_id': required_text(payload, 'bank_id', 'bank_id'),
            **timestamps(existing),
        }
