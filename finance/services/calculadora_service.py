"""
Service de cálculos financeiros (calculadora).

Localização: finance/services/calculadora_service.py

O cálculo em si é feito por funções puras sobre listas de documentos já
carregadas do MongoDB (compute_aggregate). A data de referência ("hoje")
é sempre um parâmetro, o que mantém os cálculos determinísticos.

CalculadoraService apenas busca os dados nos repositories e chama as
funções puras.
"""
import logging
from collections import OrderedDict
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings

from core.utils.dates import DateLike, to_date, today, last_day_of_month
from finance.models.receita_model import ReceitaModel
from finance.models.transaction_model import TransactionModel
from finance.repositories.categoria_repository import CategoriaRepository
from finance.repositories.conta_repository import ContaRepository
from finance.repositories.custo_fixo_repository import CustoFixoRepository
from finance.repositories.receita_repository import ReceitaRepository
from finance.repositories.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)

ZERO = Decimal('0')

# Rótulos para referências que não resolvem
NOT_FOUND = 'Not Found'
NO_CATEGORY = 'No Category'
NO_ACCOUNT = 'No Account'

# Prioridades de itens vencidos / a vencer
PRIORITY_HIGH = 'HIGH'
PRIORITY_MEDIUM = 'MEDIUM'
PRIORITY_TODAY = 'TODAY'
PRIORITY_UPCOMING = 'UPCOMING'

KIND_TRANSACTION = 'transaction'
KIND_FIXED_COST = 'fixed_cost'

HIGH_PRIORITY_AFTER_DAYS = 30
UPCOMING_WINDOW_DAYS = 7


# ==================== FUNÇÕES AUXILIARES ====================

def to_amount(value: Any) -> Decimal:
    """Converte o valor gravado para Decimal (None vira zero)."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def sum_amounts(records: Iterable[Dict[str, Any]]) -> Decimal:
    return sum((to_amount(r.get('amount')) for r in records), ZERO)


def build_name_map(records: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """
    Monta o dicionário id -> nome usado para resolver referências.

    Args:
        records: Documentos com '_id' e 'name'

    Returns:
        Dict com o ID (string) como chave
    """
    return {str(r.get('_id')): r.get('name', '') for r in records}


def resolve_name(name_map: Dict[str, str], ref: Any, placeholder: str = NOT_FOUND) -> str:
    """Resolve uma referência; devolve o placeholder se não existir."""
    if not ref:
        return placeholder
    return name_map.get(str(ref), placeholder)


def _is(record: Dict[str, Any], status: str, direction: Optional[str] = None) -> bool:
    if record.get('status') != status:
        return False
    return direction is None or record.get('direction') == direction


def _priority_for_days_late(days_late: int) -> str:
    return PRIORITY_HIGH if days_late > HIGH_PRIORITY_AFTER_DAYS else PRIORITY_MEDIUM


def _due_item(record: Dict[str, Any], due: date, reference: date, kind: str,
              categories: Dict[str, str], accounts: Dict[str, str]) -> Dict[str, Any]:
    """Monta o item de vencido/a vencer com nomes já resolvidos."""
    days_late = (reference - due).days
    days_until_due = (due - reference).days

    if days_late > 0:
        priority = _priority_for_days_late(days_late)
    elif days_until_due == 0:
        priority = PRIORITY_TODAY
    else:
        priority = PRIORITY_UPCOMING

    return {
        'id': str(record.get('_id', '')),
        'description': record.get('description', ''),
        'amount': to_amount(record.get('amount')),
        'due_date': due,
        'days_late': max(days_late, 0),
        'days_until_due': max(days_until_due, 0),
        'kind': kind,
        'priority': priority,
        'category': resolve_name(categories, record.get('category_id')),
        'account': resolve_name(accounts, record.get('account_id')),
    }


# ==================== CÁLCULOS ====================

def compute_balances(transactions: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Calcula saldos e contagens.

    Saldo atual considera apenas lançamentos pagos; o projetado soma os
    pendentes.
    """
    paid = [t for t in transactions if _is(t, TransactionModel.PAID)]
    pending = [t for t in transactions if _is(t, TransactionModel.PENDING)]

    paid_inflow = sum_amounts(t for t in paid if t.get('direction') == TransactionModel.INFLOW)
    paid_outflow = sum_amounts(t for t in paid if t.get('direction') == TransactionModel.OUTFLOW)
    pending_inflow = sum_amounts(t for t in pending if t.get('direction') == TransactionModel.INFLOW)
    pending_outflow = sum_amounts(t for t in pending if t.get('direction') == TransactionModel.OUTFLOW)

    current_balance = paid_inflow - paid_outflow

    return {
        'paid_inflow': paid_inflow,
        'paid_outflow': paid_outflow,
        'current_balance': current_balance,
        'pending_inflow': pending_inflow,
        'pending_outflow': pending_outflow,
        'projected_balance': current_balance + pending_inflow - pending_outflow,
        'total_transactions': len(transactions),
        'paid_count': len(paid),
        'pending_count': len(pending),
    }


def classify_due_items(transactions: List[Dict[str, Any]],
                       fixed_costs: List[Dict[str, Any]],
                       reference: date,
                       categories: Dict[str, str],
                       accounts: Dict[str, str]) -> Dict[str, Any]:
    """
    Identifica lançamentos e custos fixos vencidos e a vencer (7 dias).

    - Lançamento vencido: pendente, saída e data < hoje
    - Custo fixo vencido: vencimento < hoje (custo fixo não tem status)
    - A vencer: hoje <= data <= hoje + 7 dias
    """
    window_end = reference + timedelta(days=UPCOMING_WINDOW_DAYS)

    overdue_transactions = []
    upcoming_transactions = []
    for t in transactions:
        if not _is(t, TransactionModel.PENDING, TransactionModel.OUTFLOW):
            continue
        due = to_date(t.get('date'))
        if due is None:
            continue
        if due < reference:
            overdue_transactions.append(_due_item(t, due, reference, KIND_TRANSACTION, categories, accounts))
        elif due <= window_end:
            upcoming_transactions.append(_due_item(t, due, reference, KIND_TRANSACTION, categories, accounts))

    overdue_fixed_costs = []
    upcoming_fixed_costs = []
    for c in fixed_costs:
        due = to_date(c.get('due_date'))
        if due is None:
            continue
        if due < reference:
            overdue_fixed_costs.append(_due_item(c, due, reference, KIND_FIXED_COST, categories, accounts))
        elif due <= window_end:
            upcoming_fixed_costs.append(_due_item(c, due, reference, KIND_FIXED_COST, categories, accounts))

    overdue_amount = (sum((i['amount'] for i in overdue_transactions), ZERO) +
                      sum((i['amount'] for i in overdue_fixed_costs), ZERO))

    return {
        'overdue_transactions': overdue_transactions,
        'overdue_fixed_costs': overdue_fixed_costs,
        'upcoming_transactions': upcoming_transactions,
        'upcoming_fixed_costs': upcoming_fixed_costs,
        'overdue_count': len(overdue_transactions) + len(overdue_fixed_costs),
        'overdue_amount': overdue_amount,
    }


def summarize_by_category(transactions: List[Dict[str, Any]],
                          categories: Dict[str, str],
                          paid_outflow: Decimal) -> List[Dict[str, Any]]:
    """
    Agrupa saídas pagas por nome de categoria, da maior para a menor.
    """
    groups = OrderedDict()
    for t in transactions:
        if not _is(t, TransactionModel.PAID, TransactionModel.OUTFLOW):
            continue
        name = resolve_name(categories, t.get('category_id'), NO_CATEGORY)
        group = groups.setdefault(name, {'category': name, 'total': ZERO, 'count': 0})
        group['total'] += to_amount(t.get('amount'))
        group['count'] += 1

    for group in groups.values():
        group['percentage'] = (group['total'] / paid_outflow * 100) if paid_outflow > 0 else ZERO

    return sorted(groups.values(), key=lambda g: g['total'], reverse=True)


def summarize_by_account(transactions: List[Dict[str, Any]],
                         accounts: Dict[str, str]) -> List[Dict[str, Any]]:
    """
    Agrupa todos os lançamentos por conta; entradas/saídas contam só os pagos.
    """
    groups = OrderedDict()
    for t in transactions:
        name = resolve_name(accounts, t.get('account_id'), NO_ACCOUNT)
        group = groups.setdefault(name, {'account': name, 'inflow': ZERO, 'outflow': ZERO})
        if _is(t, TransactionModel.PAID, TransactionModel.INFLOW):
            group['inflow'] += to_amount(t.get('amount'))
        elif _is(t, TransactionModel.PAID, TransactionModel.OUTFLOW):
            group['outflow'] += to_amount(t.get('amount'))

    for group in groups.values():
        group['net'] = group['inflow'] - group['outflow']

    return sorted(groups.values(), key=lambda g: g['net'], reverse=True)


def compute_monthly_projection(transactions: List[Dict[str, Any]],
                               current_balance: Decimal,
                               reference: date) -> Dict[str, Any]:
    """
    Projeta o saldo no fim do mês com os pendentes entre hoje e o último dia.
    """
    month_end = last_day_of_month(reference)

    def in_window(t):
        due = to_date(t.get('date'))
        return due is not None and reference <= due <= month_end

    remaining_expenses = sum_amounts(
        t for t in transactions
        if _is(t, TransactionModel.PENDING, TransactionModel.OUTFLOW) and in_window(t)
    )
    remaining_income = sum_amounts(
        t for t in transactions
        if _is(t, TransactionModel.PENDING, TransactionModel.INFLOW) and in_window(t)
    )

    return {
        'start_date': reference,
        'end_date': month_end,
        'remaining_expenses': remaining_expenses,
        'remaining_income': remaining_income,
        'projected_end_of_month_balance': current_balance + remaining_income - remaining_expenses,
        'days_remaining': (month_end - reference).days,
    }


def compute_aggregate(transactions: List[Dict[str, Any]],
                      fixed_costs: List[Dict[str, Any]],
                      accounts: List[Dict[str, Any]],
                      categories: List[Dict[str, Any]],
                      reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
    """
    Calcula tudo de uma vez: saldos, vencidos, resumos e projeção do mês.

    Não altera os documentos recebidos. Listas vazias resultam em zeros.

    Args:
        transactions: Lançamentos (já filtrados por período, se for o caso)
        fixed_costs: Custos fixos
        accounts: Contas (para resolver nomes)
        categories: Categorias (para resolver nomes)
        reference_date: Data de referência ("hoje"); padrão é hoje no fuso configurado

    Returns:
        Dict com o snapshot dos cálculos
    """
    reference = to_date(reference_date) or today()
    category_names = build_name_map(categories)
    account_names = build_name_map(accounts)

    snapshot = {'reference_date': reference}
    snapshot.update(compute_balances(transactions))
    snapshot.update(classify_due_items(transactions, fixed_costs, reference, category_names, account_names))

    by_category = summarize_by_category(transactions, category_names, snapshot['paid_outflow'])
    snapshot['categories'] = by_category
    snapshot['largest_expense_category'] = by_category[0]['category'] if by_category else None
    snapshot['largest_expense_amount'] = by_category[0]['total'] if by_category else ZERO

    by_account = summarize_by_account(transactions, account_names)
    snapshot['accounts'] = by_account
    snapshot['largest_balance_account'] = by_account[0]['account'] if by_account else None
    snapshot['largest_balance_amount'] = by_account[0]['net'] if by_account else ZERO

    snapshot['monthly_projection'] = compute_monthly_projection(
        transactions, snapshot['current_balance'], reference
    )

    return snapshot


def compute_current_balance(transactions: List[Dict[str, Any]]) -> Decimal:
    """Apenas o saldo atual (entradas pagas - saídas pagas)."""
    return compute_balances(transactions)['current_balance']


def compute_total_overdue(transactions: List[Dict[str, Any]],
                          reference_date: Optional[DateLike] = None) -> Decimal:
    """Apenas o total de saídas pendentes vencidas."""
    reference = to_date(reference_date) or today()
    return sum_amounts(
        t for t in transactions
        if _is(t, TransactionModel.PENDING, TransactionModel.OUTFLOW)
        and to_date(t.get('date')) is not None
        and to_date(t.get('date')) < reference
    )


# ==================== SERVICE ====================

class CalculadoraService:
    """
    Service que carrega os dados do MongoDB e executa os cálculos.

    Exemplo de uso:
        service = CalculadoraService()
        snapshot = service.calcular_tudo(reference_date='2026-01-15')
    """

    def __init__(self, transaction_repo=None, custo_fixo_repo=None,
                 conta_repo=None, categoria_repo=None, receita_repo=None):
        self.transaction_repo = transaction_repo or TransactionRepository()
        self.custo_fixo_repo = custo_fixo_repo or CustoFixoRepository()
        self.conta_repo = conta_repo or ContaRepository()
        self.categoria_repo = categoria_repo or CategoriaRepository()
        self._receita_repo = receita_repo

    @property
    def receita_repo(self):
        # Só conecta na collection de receitas se ela for usada
        if self._receita_repo is None:
            self._receita_repo = ReceitaRepository()
        return self._receita_repo

    def load_records(self, start_date=None, end_date=None) -> Dict[str, List[Dict[str, Any]]]:
        """
        Busca todos os dados necessários para os cálculos.

        Erros do MongoDB não são tratados aqui: quem chama decide.

        Args:
            start_date: Filtro inicial da data dos lançamentos (opcional)
            end_date: Filtro final da data dos lançamentos (opcional)

        Returns:
            Dict com transactions, fixed_costs, accounts e categories
        """
        transactions = self.transaction_repo.find_by_period(start_date, end_date)

        if settings.FINANCE_INCLUDE_INCOMES_IN_REPORTS:
            receitas = self.receita_repo.find_by_period(start_date, end_date)
            transactions = transactions + [ReceitaModel.income_as_transaction(r) for r in receitas]

        records = {
            'transactions': transactions,
            'fixed_costs': self.custo_fixo_repo.find_all(),
            'accounts': self.conta_repo.find_all(),
            'categories': self.categoria_repo.find_all(),
        }

        logger.debug(
            f"[CALCULADORA] {len(records['transactions'])} lançamentos, "
            f"{len(records['fixed_costs'])} custos fixos carregados"
        )
        return records

    def calcular_tudo(self, reference_date: Optional[DateLike] = None,
                      start_date=None, end_date=None) -> Dict[str, Any]:
        """
        Carrega os dados e calcula o snapshot completo.

        Returns:
            Dict com o snapshot (ver compute_aggregate)
        """
        records = self.load_records(start_date, end_date)
        return compute_aggregate(
            records['transactions'],
            records['fixed_costs'],
            records['accounts'],
            records['categories'],
            reference_date=reference_date,
        )

    def saldo_atual(self) -> Decimal:
        return compute_current_balance(self.transaction_repo.find_all())

    def total_vencido(self, reference_date: Optional[DateLike] = None) -> Decimal:
        return compute_total_overdue(self.transaction_repo.find_all(), reference_date)
