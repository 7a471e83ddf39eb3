"""
Modelo de Banco.

Localização: finance/models/banco_model.py

Schema no MongoDB (collection 'banks'):
{
  _id: ObjectId,
  code: String,       # Código do banco (único, ex.: '341')
  name: String,
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Dict, Any, List, Optional

from finance.models.fields import required_text, timestamps


class BancoModel:
    """Modelo de dados para bancos."""

    @staticmethod
    def create_banco_data(payload: Dict[str, Any],
                          existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Cria estrutura de dados de banco.

        Raises:
            ValueError: Se código ou nome ausentes
        """
        return {
            'code': required_text(payload, 'code', 'Código do banco'),
            'name': required_text(payload, 'name', 'Nome do banco'),
            **timestamps(existing),
        }

    @staticmethod
    def get_bancos_padrao() -> List[Dict[str, str]]:
        """Bancos brasileiros criados na carga inicial."""
        return [
            {'code': '001', 'name': 'Banco do Brasil'},
            {'code': '033', 'name': 'Santander'},
            {'code': '104', 'name': 'Caixa Econômica Federal'},
            {'code': '237', 'name': 'Bradesco'},
            {'code': '341', 'name': 'Itaú'},
            {'code': '260', 'name': 'Nubank'},
            {'code': '077', 'name': 'Inter'},
        ]
