"""
Repositories do app finance.

Localização: finance/repositories/

Repositories específicos para o domínio financeiro.
Cada repository representa uma collection relacionada a finanças.
"""
from .banco_repository import BancoRepository
from .conta_repository import ContaRepository
from .categoria_repository import CategoriaRepository
from .custo_fixo_repository import CustoFixoRepository
from .transaction_repository import TransactionRepository
from .receita_repository import ReceitaRepository

__all__ = [
    'BancoRepository', 'ContaRepository', 'CategoriaRepository',
    'CustoFixoRepository', 'TransactionRepository', 'ReceitaRepository',
    'get_repositories',
]


def get_repositories(database=None):
    """
    Instancia um repository por collection do domínio.

    Returns:
        Dict nome da collection -> repository, na ordem de carga
    """
    return {
        'banks': BancoRepository(database),
        'categories': CategoriaRepository(database),
        'accounts': ContaRepository(database),
        'fixed_costs': CustoFixoRepository(database),
        'incomes': ReceitaRepository(database),
        'transactions': TransactionRepository(database),
    }
