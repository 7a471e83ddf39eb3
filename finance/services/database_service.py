"""
Service de manutenção do banco de dados.

Localização: finance/services/database_service.py

Limpa as collections e recria os dados padrão (bancos, categorias e
contas) e os dados de exemplo do mês da data de referência.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil.relativedelta import relativedelta

from core.decorators import audit_log
from core.utils.dates import DateLike, now, to_date, today
from finance.models.banco_model import BancoModel
from finance.models.categoria_model import CategoriaModel
from finance.services.carga_service import COLLECTIONS, CargaService

logger = logging.getLogger(__name__)

CONFIGURATION_COLLECTIONS = ('banks', 'categories', 'accounts')
TRANSACTIONAL_COLLECTIONS = ('fixed_costs', 'transactions', 'incomes')


def _contas_padrao() -> List[Dict[str, Any]]:
    return [
        {'code': 'CORRENTE001', 'name': 'Conta Corrente Itaú', 'type': 'checking',
         'initial_balance': '2500.00', 'bank_code': '341'},
        {'code': 'POUPANCA001', 'name': 'Poupança Itaú', 'type': 'savings',
         'initial_balance': '5000.00', 'bank_code': '341'},
        {'code': 'NUBANK001', 'name': 'Conta Nubank', 'type': 'checking',
         'initial_balance': '1500.00', 'bank_code': '260'},
        # Cartão começa devendo
        {'code': 'CARTAO001', 'name': 'Cartão de Crédito', 'type': 'checking',
         'initial_balance': '-1200.00', 'bank_code': '341'},
    ]


def _dados_exemplo(reference) -> Dict[str, List[Dict[str, Any]]]:
    """
    Custos fixos, lançamentos e receitas do mês da data de referência.
    """
    def day(n, months_back=0):
        first = datetime(reference.year, reference.month, 1) - relativedelta(months=months_back)
        return first.replace(day=n)

    fixed_costs = [
        {'description': 'Aluguel Apartamento', 'amount': '1500.00', 'due_date': day(5), 'category_code': 'ALUGUEL'},
        {'description': 'Condomínio', 'amount': '350.00', 'due_date': day(10), 'category_code': 'CONDOM'},
        {'description': 'Energia Elétrica', 'amount': '180.00', 'due_date': day(15), 'category_code': 'ENERGIA'},
        {'description': 'Internet 300MB', 'amount': '99.90', 'due_date': day(12), 'category_code': 'INTERNET'},
        {'description': 'Plano de Saúde', 'amount': '420.00', 'due_date': day(8), 'category_code': 'PLANO'},
        {'description': 'Academia', 'amount': '89.90', 'due_date': day(3), 'category_code': 'ACADEMIA'},
    ]

    transactions = [
        {'description': 'Salário', 'amount': '4500.00', 'date': day(5), 'direction': 'inflow',
         'status': 'paid', 'category_code': 'SALARIO', 'account_code': 'CORRENTE001'},
        {'description': 'Supermercado', 'amount': '320.50', 'date': day(3), 'direction': 'outflow',
         'status': 'paid', 'category_code': 'MERCADO', 'account_code': 'CARTAO001'},
        {'description': 'Posto - Gasolina', 'amount': '180.00', 'date': day(10), 'direction': 'outflow',
         'status': 'paid', 'category_code': 'COMBUST', 'account_code': 'CARTAO001'},
        {'description': 'Delivery - Jantar', 'amount': '65.80', 'date': day(25), 'direction': 'outflow',
         'status': 'pending', 'category_code': 'IFOOD', 'account_code': 'CARTAO001'},
        {'description': 'Uber - Trabalho', 'amount': '28.50', 'date': day(28), 'direction': 'outflow',
         'status': 'pending', 'category_code': 'UBER', 'account_code': 'CARTAO001'},
        # Mês passado, ainda pendentes
        {'description': 'Farmácia', 'amount': '45.30', 'date': day(1, months_back=1), 'direction': 'outflow',
         'status': 'pending', 'category_code': 'FARMACIA', 'account_code': 'CARTAO001'},
        {'description': 'Cinema', 'amount': '72.00', 'date': day(15, months_back=1), 'direction': 'outflow',
         'status': 'pending', 'category_code': 'CINEMA', 'account_code': 'CARTAO001'},
    ]

    incomes = [
        {'description': 'Freelance Site', 'amount': '1200.00', 'date': day(20), 'status': 'pending',
         'category_code': 'FREELA', 'account_code': 'CORRENTE001'},
        {'description': 'Bônus de Performance', 'amount': '800.00', 'date': day(28), 'status': 'pending',
         'category_code': 'BONUS', 'account_code': 'CORRENTE001'},
    ]

    return {'fixed_costs': fixed_costs, 'transactions': transactions, 'incomes': incomes}


class DatabaseService:
    """
    Service para resetar, limpar e verificar o banco de dados.

    Exemplo de uso:
        service = DatabaseService()
        resultado = service.reset(keep_configuration=True)
    """

    def __init__(self, carga_service: Optional[CargaService] = None):
        self.carga = carga_service or CargaService()

    @property
    def repos(self):
        return self.carga.repos

    def _missing(self, name: str, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Filtra itens cujo código ainda não existe na collection."""
        return [item for item in items if not self.repos[name].find_by_code(item['code'])]

    def _default_payload(self, reference) -> Dict[str, Any]:
        payload = {
            'banks': self._missing('banks', BancoModel.get_bancos_padrao()),
            'categories': self._missing('categories', CategoriaModel.get_categorias_predefinidas()),
            'accounts': self._missing('accounts', _contas_padrao()),
        }
        payload.update(_dados_exemplo(reference))
        return payload

    @audit_log(action='reset', entity='database')
    def reset(self, keep_configuration: bool = False,
              reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Limpa o banco e recria dados padrão e de exemplo.

        Args:
            keep_configuration: Mantém bancos, contas e categorias existentes
            reference_date: Mês dos dados de exemplo (padrão: hoje)

        Returns:
            Dict com coleções limpas, itens criados e tempo de execução
        """
        started_at = now()
        reference = to_date(reference_date) or today()

        cleared = list(TRANSACTIONAL_COLLECTIONS)
        if not keep_configuration:
            cleared = list(CONFIGURATION_COLLECTIONS) + cleared
        for name in cleared:
            self.repos[name].delete_all()

        result = self.carga.load(self._default_payload(reference))
        finished_at = now()

        logger.info(f"[DATABASE] Reset concluído: {result['total']} itens criados")

        return {
            'message': f"Banco resetado com sucesso! {result['total']} itens criados.",
            'cleared_collections': cleared,
            'created': result['inserted'],
            'total_created': result['total'],
            'started_at': started_at,
            'finished_at': finished_at,
            'elapsed_seconds': (finished_at - started_at).total_seconds(),
        }

    @audit_log(action='clear_all', entity='database')
    def clear_all(self) -> Dict[str, Any]:
        removed = self.carga.clear_all()
        return {
            'message': "Banco limpo com sucesso!",
            'removed': removed,
        }

    def seed_defaults(self, reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """Recria do zero os dados padrão e de exemplo (equivale a reset completo)."""
        return self.reset(keep_configuration=False, reference_date=reference_date)

    def status(self) -> Dict[str, Any]:
        """
        Contagem por collection e se o sistema está pronto para uso
        (ao menos um banco, uma conta e uma categoria).
        """
        counts = {name: self.repos[name].count() for name in COLLECTIONS}
        ready = all(counts[name] > 0 for name in CONFIGURATION_COLLECTIONS)

        return {
            'checked_at': now(),
            'counts': counts,
            'total': sum(counts.values()),
            'ready': ready,
            'message': "Sistema pronto para uso" if ready else "Sistema precisa de configuração inicial",
        }
