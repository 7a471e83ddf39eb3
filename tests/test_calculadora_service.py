import copy
import unittest
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from django.test import override_settings

from finance.services.calculadora_service import (
    CalculadoraService, NO_ACCOUNT, NO_CATEGORY, NOT_FOUND,
    compute_aggregate, compute_current_balance, compute_total_overdue
)
from tests.helpers import REFERENCE, make_fixed_cost, make_named, make_transaction


def aggregate(transactions=(), fixed_costs=(), accounts=(), categories=()):
    return compute_aggregate(
        list(transactions), list(fixed_costs), list(accounts), list(categories),
        reference_date=REFERENCE
    )


class TestBalances(unittest.TestCase):

    def test_current_balance_paid_only(self):
        """Entrada paga de 1000 e saída paga de 400 resultam em saldo 600"""
        snapshot = aggregate([
            make_transaction(1000, 'inflow', 'paid'),
            make_transaction(400, 'outflow', 'paid'),
        ])
        self.assertEqual(snapshot['current_balance'], Decimal('600'))
        self.assertEqual(snapshot['paid_inflow'], Decimal('1000'))
        self.assertEqual(snapshot['paid_outflow'], Decimal('400'))

    def test_projected_balance_includes_pending(self):
        snapshot = aggregate([
            make_transaction(1000, 'inflow', 'paid'),
            make_transaction(400, 'outflow', 'paid'),
            make_transaction(300, 'inflow', 'pending', days=3),
            make_transaction(150, 'outflow', 'pending', days=4),
        ])
        self.assertEqual(snapshot['pending_inflow'], Decimal('300'))
        self.assertEqual(snapshot['pending_outflow'], Decimal('150'))
        self.assertEqual(snapshot['projected_balance'], Decimal('750'))
        self.assertEqual(
            snapshot['projected_balance'],
            snapshot['current_balance'] + snapshot['pending_inflow'] - snapshot['pending_outflow']
        )

    def test_cancelled_ignored_in_balances(self):
        snapshot = aggregate([
            make_transaction(1000, 'inflow', 'paid'),
            make_transaction(500, 'outflow', 'cancelled', days=-90),
        ])
        self.assertEqual(snapshot['current_balance'], Decimal('1000'))
        self.assertEqual(snapshot['projected_balance'], Decimal('1000'))
        self.assertEqual(snapshot['overdue_count'], 0)
        self.assertEqual(snapshot['total_transactions'], 2)
        self.assertEqual(snapshot['paid_count'], 1)
        self.assertEqual(snapshot['pending_count'], 0)

    def test_decimal_sums_are_exact(self):
        snapshot = aggregate([
            make_transaction('0.10', 'inflow', 'paid'),
            make_transaction('0.20', 'inflow', 'paid'),
        ])
        self.assertEqual(snapshot['paid_inflow'], Decimal('0.30'))

    def test_empty_input(self):
        snapshot = aggregate()
        self.assertEqual(snapshot['current_balance'], Decimal('0'))
        self.assertEqual(snapshot['projected_balance'], Decimal('0'))
        self.assertEqual(snapshot['overdue_count'], 0)
        self.assertEqual(snapshot['overdue_amount'], Decimal('0'))
        self.assertEqual(snapshot['categories'], [])
        self.assertEqual(snapshot['accounts'], [])
        self.assertIsNone(snapshot['largest_expense_category'])
        self.assertEqual(snapshot['largest_expense_amount'], Decimal('0'))
        self.assertIsNone(snapshot['largest_balance_account'])


class TestOverdueAndUpcoming(unittest.TestCase):

    def test_overdue_medium_priority(self):
        snapshot = aggregate([make_transaction(100, 'outflow', 'pending', days=-10)])
        self.assertEqual(len(snapshot['overdue_transactions']), 1)
        item = snapshot['overdue_transactions'][0]
        self.assertEqual(item['days_late'], 10)
        self.assertEqual(item['priority'], 'MEDIUM')
        self.assertEqual(item['kind'], 'transaction')

    def test_overdue_high_priority(self):
        snapshot = aggregate([make_transaction(100, 'outflow', 'pending', days=-35)])
        self.assertEqual(snapshot['overdue_transactions'][0]['priority'], 'HIGH')

    def test_thirty_days_late_is_still_medium(self):
        snapshot = aggregate([make_transaction(100, 'outflow', 'pending', days=-30)])
        self.assertEqual(snapshot['overdue_transactions'][0]['priority'], 'MEDIUM')

    def test_due_today_is_upcoming_not_overdue(self):
        snapshot = aggregate([make_transaction(100, 'outflow', 'pending', days=0)])
        self.assertEqual(snapshot['overdue_transactions'], [])
        self.assertEqual(len(snapshot['upcoming_transactions']), 1)
        item = snapshot['upcoming_transactions'][0]
        self.assertEqual(item['priority'], 'TODAY')
        self.assertEqual(item['days_until_due'], 0)

    def test_upcoming_window_is_seven_days(self):
        snapshot = aggregate([
            make_transaction(10, 'outflow', 'pending', days=7),
            make_transaction(20, 'outflow', 'pending', days=8),
        ])
        self.assertEqual(len(snapshot['upcoming_transactions']), 1)
        item = snapshot['upcoming_transactions'][0]
        self.assertEqual(item['priority'], 'UPCOMING')
        self.assertEqual(item['days_until_due'], 7)

    def test_pending_inflow_never_overdue(self):
        snapshot = aggregate([make_transaction(100, 'inflow', 'pending', days=-40)])
        self.assertEqual(snapshot['overdue_transactions'], [])

    def test_fixed_cost_overdue(self):
        """Custo fixo vencido há 5 dias aparece na lista de vencidos"""
        cost = make_fixed_cost(250, days=-5, description='Internet')
        snapshot = aggregate(fixed_costs=[cost])
        self.assertEqual(len(snapshot['overdue_fixed_costs']), 1)
        item = snapshot['overdue_fixed_costs'][0]
        self.assertEqual(item['days_late'], 5)
        self.assertEqual(item['kind'], 'fixed_cost')
        self.assertEqual(item['id'], str(cost['_id']))
        self.assertEqual(snapshot['overdue_count'], 1)
        self.assertEqual(snapshot['overdue_amount'], Decimal('250'))

    def test_fixed_cost_upcoming(self):
        snapshot = aggregate(fixed_costs=[make_fixed_cost(99, days=3)])
        self.assertEqual(snapshot['overdue_fixed_costs'], [])
        self.assertEqual(len(snapshot['upcoming_fixed_costs']), 1)
        self.assertEqual(snapshot['upcoming_fixed_costs'][0]['days_until_due'], 3)

    def test_overdue_totals_combine_transactions_and_fixed_costs(self):
        snapshot = aggregate(
            [make_transaction(100, 'outflow', 'pending', days=-2)],
            [make_fixed_cost(50, days=-1)],
        )
        self.assertEqual(snapshot['overdue_count'], 2)
        self.assertEqual(snapshot['overdue_amount'], Decimal('150'))

    def test_names_resolved_with_placeholder(self):
        food = make_named('Food')
        account = make_named('Carteira')
        snapshot = aggregate(
            [
                make_transaction(10, 'outflow', 'pending', days=-1,
                                 category_id=str(food['_id']), account_id=str(account['_id'])),
                make_transaction(20, 'outflow', 'pending', days=-2, category_id='inexistente'),
            ],
            accounts=[account],
            categories=[food],
        )
        first, second = snapshot['overdue_transactions']
        self.assertEqual(first['category'], 'Food')
        self.assertEqual(first['account'], 'Carteira')
        self.assertEqual(second['category'], NOT_FOUND)
        self.assertEqual(second['account'], NOT_FOUND)


class TestRollups(unittest.TestCase):

    def setUp(self):
        self.food = make_named('Food')
        self.transport = make_named('Transport')

    def test_category_concentration(self):
        snapshot = aggregate(
            [
                make_transaction(500, category_id=str(self.food['_id'])),
                make_transaction(300, category_id=str(self.food['_id'])),
                make_transaction(200, category_id=str(self.transport['_id'])),
            ],
            categories=[self.food, self.transport],
        )
        food, transport = snapshot['categories']
        self.assertEqual(food['category'], 'Food')
        self.assertEqual(food['total'], Decimal('800'))
        self.assertEqual(food['count'], 2)
        self.assertEqual(food['percentage'], 80.0)
        self.assertEqual(transport['percentage'], 20.0)
        self.assertEqual(snapshot['largest_expense_category'], 'Food')
        self.assertEqual(snapshot['largest_expense_amount'], Decimal('800'))

    def test_category_percentages_sum_back_to_outflow(self):
        transactions = [
            make_transaction('33.33', category_id=str(self.food['_id'])),
            make_transaction('66.67', category_id=str(self.transport['_id'])),
            make_transaction('10.00'),
        ]
        snapshot = aggregate(transactions, categories=[self.food, self.transport])
        rebuilt = sum(c['percentage'] * snapshot['paid_outflow'] / 100 for c in snapshot['categories'])
        self.assertAlmostEqual(float(rebuilt), float(snapshot['paid_outflow']), places=6)

    def test_missing_category_uses_no_category(self):
        snapshot = aggregate([make_transaction(50, category_id='sumiu')])
        self.assertEqual(snapshot['categories'][0]['category'], NO_CATEGORY)

    def test_category_rollup_only_paid_outflow(self):
        snapshot = aggregate(
            [
                make_transaction(100, 'inflow', 'paid', category_id=str(self.food['_id'])),
                make_transaction(100, 'outflow', 'pending', days=2, category_id=str(self.food['_id'])),
            ],
            categories=[self.food],
        )
        self.assertEqual(snapshot['categories'], [])

    def test_account_rollup_sorted_by_net(self):
        checking = make_named('Corrente')
        card = make_named('Cartão')
        snapshot = aggregate(
            [
                make_transaction(1000, 'inflow', account_id=str(checking['_id'])),
                make_transaction(200, 'outflow', account_id=str(checking['_id'])),
                make_transaction(300, 'outflow', account_id=str(card['_id'])),
                make_transaction(999, 'outflow', 'pending', days=1, account_id=str(card['_id'])),
                make_transaction(10, 'outflow'),
            ],
            accounts=[checking, card],
        )
        names = [a['account'] for a in snapshot['accounts']]
        self.assertEqual(names, ['Corrente', NO_ACCOUNT, 'Cartão'])
        self.assertEqual(snapshot['accounts'][0]['net'], Decimal('800'))
        self.assertEqual(snapshot['accounts'][2]['outflow'], Decimal('300'))
        self.assertEqual(snapshot['largest_balance_account'], 'Corrente')
        self.assertEqual(snapshot['largest_balance_amount'], Decimal('800'))


class TestMonthlyProjection(unittest.TestCase):

    def test_window_until_end_of_month(self):
        snapshot = aggregate([
            make_transaction(1000, 'inflow', 'paid'),
            make_transaction(200, 'outflow', 'pending', days=0),
            make_transaction(100, 'outflow', 'pending', days=16),   # 31/01
            make_transaction(700, 'outflow', 'pending', days=17),   # fevereiro
            make_transaction(50, 'inflow', 'pending', days=5),
            make_transaction(80, 'outflow', 'pending', days=-1),    # vencido, fora da janela
        ])
        projection = snapshot['monthly_projection']
        self.assertEqual(projection['start_date'], REFERENCE)
        self.assertEqual(projection['end_date'], date(2026, 1, 31))
        self.assertEqual(projection['days_remaining'], 16)
        self.assertEqual(projection['remaining_expenses'], Decimal('300'))
        self.assertEqual(projection['remaining_income'], Decimal('50'))
        self.assertEqual(projection['projected_end_of_month_balance'], Decimal('750'))


class TestDeterminism(unittest.TestCase):

    def test_idempotent_and_does_not_mutate_input(self):
        food = make_named('Food')
        transactions = [
            make_transaction(100, 'outflow', 'pending', days=-40, category_id=str(food['_id'])),
            make_transaction(500, 'inflow', 'paid'),
            make_transaction(70, 'outflow', 'paid', category_id=str(food['_id'])),
        ]
        fixed_costs = [make_fixed_cost(30, days=-3)]
        original = copy.deepcopy(transactions)

        first = aggregate(transactions, fixed_costs, categories=[food])
        second = aggregate(transactions, fixed_costs, categories=[food])

        self.assertEqual(first, second)
        self.assertEqual(transactions, original)


class TestSimpleFunctions(unittest.TestCase):

    def test_compute_current_balance(self):
        transactions = [
            make_transaction(300, 'inflow', 'paid'),
            make_transaction(100, 'outflow', 'paid'),
            make_transaction(999, 'inflow', 'pending'),
        ]
        self.assertEqual(compute_current_balance(transactions), Decimal('200'))

    def test_compute_total_overdue(self):
        transactions = [
            make_transaction(40, 'outflow', 'pending', days=-1),
            make_transaction(60, 'outflow', 'pending', days=-20),
            make_transaction(100, 'outflow', 'pending', days=0),
            make_transaction(100, 'outflow', 'paid', days=-5),
        ]
        self.assertEqual(compute_total_overdue(transactions, REFERENCE), Decimal('100'))


class TestCalculadoraService(unittest.TestCase):

    def setUp(self):
        self.transaction_repo = MagicMock()
        self.custo_fixo_repo = MagicMock()
        self.conta_repo = MagicMock()
        self.categoria_repo = MagicMock()
        self.receita_repo = MagicMock()

        self.transaction_repo.find_by_period.return_value = [make_transaction(100, 'inflow', 'paid')]
        self.custo_fixo_repo.find_all.return_value = []
        self.conta_repo.find_all.return_value = []
        self.categoria_repo.find_all.return_value = []
        self.receita_repo.find_by_period.return_value = [{
            '_id': 'r1', 'description': 'Freela', 'amount': Decimal('50'),
            'date': make_transaction(0)['date'], 'status': 'paid',
            'category_id': 'c', 'account_id': 'a',
        }]

        self.service = CalculadoraService(
            transaction_repo=self.transaction_repo,
            custo_fixo_repo=self.custo_fixo_repo,
            conta_repo=self.conta_repo,
            categoria_repo=self.categoria_repo,
            receita_repo=self.receita_repo,
        )

    @override_settings(FINANCE_INCLUDE_INCOMES_IN_REPORTS=False)
    def test_incomes_ignored_by_default(self):
        snapshot = self.service.calcular_tudo(reference_date=REFERENCE)
        self.assertEqual(snapshot['current_balance'], Decimal('100'))
        self.receita_repo.find_by_period.assert_not_called()

    @override_settings(FINANCE_INCLUDE_INCOMES_IN_REPORTS=True)
    def test_incomes_merged_when_enabled(self):
        snapshot = self.service.calcular_tudo(reference_date=REFERENCE)
        self.assertEqual(snapshot['current_balance'], Decimal('150'))
        self.assertEqual(snapshot['total_transactions'], 2)

    def test_period_passed_to_repository(self):
        self.service.load_records('inicio', 'fim')
        self.transaction_repo.find_by_period.assert_called_once_with('inicio', 'fim')
