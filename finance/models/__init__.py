"""
Modelos do app finance.

Localização: finance/models/

Modelos não são ORM: apenas montam e validam os dicts gravados no MongoDB.
"""
from .banco_model import BancoModel
from .conta_model import ContaModel
from .categoria_model import CategoriaModel
from .custo_fixo_model import CustoFixoModel
from .transaction_model import TransactionModel
from .receita_model import ReceitaModel

__all__ = [
    'BancoModel', 'ContaModel', 'CategoriaModel',
    'CustoFixoModel', 'TransactionModel', 'ReceitaModel',
]
