import unittest
from unittest.mock import MagicMock

from bson import ObjectId

from finance.models.banco_model import BancoModel
from finance.models.categoria_model import CategoriaModel
from finance.services.carga_service import COLLECTIONS, CargaService
from finance.services.database_service import DatabaseService
from tests.helpers import REFERENCE


def make_repositories(existing_codes=False):
    """Um MagicMock por collection; create_many devolve os próprios documentos."""
    repos = {}
    for name in COLLECTIONS:
        repo = MagicMock()
        repo.create_many.side_effect = lambda documents: documents
        repo.delete_all.return_value = 0
        repo.count.return_value = 0
        repo.find_by_codes.return_value = []
        if existing_codes:
            repo.find_by_code.side_effect = lambda code: {'_id': ObjectId(), 'code': code}
        else:
            repo.find_by_code.return_value = None
        repos[name] = repo
    return repos


class TestCargaService(unittest.TestCase):

    def setUp(self):
        self.repos = make_repositories()
        self.service = CargaService(self.repos)

    def inserted(self, name):
        return self.repos[name].create_many.call_args[0][0]

    def test_resolves_codes_inside_payload(self):
        result = self.service.load({
            'banks': [{'code': '341', 'name': 'Itaú'}],
            'categories': [{'code': 'mercado', 'name': 'Supermercado'}],
            'accounts': [{'code': 'cc1', 'name': 'Corrente', 'bank_code': '341'}],
            'transactions': [{
                'description': 'Compras', 'amount': '150.00', 'date': '2026-01-10',
                'direction': 'outflow', 'category_code': 'MERCADO', 'account_code': 'cc1',
            }],
        })

        bank = self.inserted('banks')[0]
        category = self.inserted('categories')[0]
        account = self.inserted('accounts')[0]
        transaction = self.inserted('transactions')[0]

        self.assertEqual(account['bank_id'], str(bank['_id']))
        self.assertEqual(transaction['category_id'], str(category['_id']))
        self.assertEqual(transaction['account_id'], str(account['_id']))
        self.assertEqual(result['total'], 4)
        self.assertFalse(result['cleared'])
        self.assertEqual(result['inserted']['fixed_costs'], 0)

    def test_resolves_codes_against_database(self):
        stored_id = ObjectId()
        self.repos['categories'].find_by_code.return_value = {'_id': stored_id, 'code': 'ALUGUEL'}

        self.service.load({'fixed_costs': [{
            'description': 'Aluguel', 'amount': '1500', 'due_date': '2026-01-05',
            'category_code': 'ALUGUEL',
        }]})

        self.assertEqual(self.inserted('fixed_costs')[0]['category_id'], str(stored_id))
        self.repos['categories'].find_by_code.assert_called_once_with('ALUGUEL')

    def test_unknown_code_aborts_before_writing(self):
        with self.assertRaises(ValueError) as ctx:
            self.service.load({
                'banks': [{'code': '341', 'name': 'Itaú'}],
                'transactions': [{
                    'description': 'Compras', 'amount': '10', 'date': '2026-01-10',
                    'direction': 'outflow', 'category_code': 'XYZ',
                }],
            })
        self.assertEqual(str(ctx.exception), "Lançamento 1: category_code 'XYZ' não encontrado.")
        for repo in self.repos.values():
            repo.create_many.assert_not_called()

    def test_stored_code_aborts_before_writing(self):
        self.repos['categories'].find_by_codes.return_value = [{'_id': ObjectId(), 'code': 'FOOD'}]

        with self.assertRaises(ValueError) as ctx:
            self.service.load({
                'banks': [{'code': '999', 'name': 'Banco Novo'}],
                'categories': [{'code': 'food', 'name': 'Alimentação'}],
            })

        self.assertEqual(str(ctx.exception), "Categoria: código 'FOOD' já existe.")
        self.repos['categories'].find_by_codes.assert_called_once_with(['FOOD'])
        for repo in self.repos.values():
            repo.create_many.assert_not_called()

    def test_clear_before_skips_stored_code_check(self):
        self.repos['banks'].find_by_codes.return_value = [{'_id': ObjectId(), 'code': '341'}]

        result = self.service.load({'clear_before': True, 'banks': [{'code': '341', 'name': 'Itaú'}]})

        self.assertEqual(result['inserted']['banks'], 1)
        self.repos['banks'].find_by_codes.assert_not_called()

    def test_clear_before_ignores_stored_codes(self):
        self.repos['banks'].find_by_code.return_value = {'_id': ObjectId(), 'code': '341'}

        with self.assertRaises(ValueError):
            self.service.load({
                'clear_before': True,
                'accounts': [{'code': 'cc1', 'name': 'Corrente', 'bank_code': '341'}],
            })
        self.repos['banks'].find_by_code.assert_not_called()
        self.repos['banks'].delete_all.assert_not_called()

    def test_clear_before_without_data(self):
        result = self.service.load({'clear_before': True})
        self.assertTrue(result['cleared'])
        self.assertEqual(result['total'], 0)
        for repo in self.repos.values():
            repo.delete_all.assert_called_once_with()

    def test_repeated_codes(self):
        with self.assertRaises(ValueError) as ctx:
            self.service.load({'categories': [
                {'code': 'LAZER', 'name': 'Lazer'},
                {'code': 'lazer', 'name': 'Lazer 2'},
            ]})
        self.assertIn('LAZER', str(ctx.exception))

    def test_empty_payload(self):
        with self.assertRaises(ValueError) as ctx:
            self.service.load({})
        self.assertEqual(str(ctx.exception), "Nenhum dado fornecido para carga.")

    def test_payload_must_be_object(self):
        with self.assertRaises(ValueError):
            self.service.load([{'code': '341'}])

    def test_collection_must_be_list(self):
        with self.assertRaises(ValueError):
            self.service.load({'banks': {'code': '341', 'name': 'Itaú'}})

    def test_status(self):
        for position, name in enumerate(COLLECTIONS, start=1):
            self.repos[name].count.return_value = position
        status = self.service.status()
        self.assertEqual(status['banks'], 1)
        self.assertEqual(status['total'], sum(range(1, len(COLLECTIONS) + 1)))


class TestDatabaseService(unittest.TestCase):

    def test_reset_recreates_everything(self):
        repos = make_repositories()
        service = DatabaseService(CargaService(repos))

        result = service.reset(reference_date=REFERENCE)

        for repo in repos.values():
            repo.delete_all.assert_called_once_with()
        created = result['created']
        self.assertEqual(created['banks'], len(BancoModel.get_bancos_padrao()))
        self.assertEqual(created['categories'], len(CategoriaModel.get_categorias_predefinidas()))
        self.assertEqual(created['accounts'], 4)
        self.assertEqual(created['fixed_costs'], 6)
        self.assertEqual(created['transactions'], 7)
        self.assertEqual(created['incomes'], 2)
        self.assertEqual(result['total_created'], sum(created.values()))
        self.assertEqual(result['cleared_collections'][:3], ['banks', 'categories', 'accounts'])

    def test_sample_data_uses_reference_month(self):
        repos = make_repositories()
        DatabaseService(CargaService(repos)).reset(reference_date=REFERENCE)

        dates = [t['date'] for t in repos['transactions'].create_many.call_args[0][0]]
        self.assertTrue(all((d.year, d.month) in ((2026, 1), (2025, 12)) for d in dates))
        self.assertEqual(sum(1 for d in dates if d.month == 12), 2)

    def test_reset_keeping_configuration(self):
        repos = make_repositories(existing_codes=True)
        service = DatabaseService(CargaService(repos))

        result = service.reset(keep_configuration=True, reference_date=REFERENCE)

        for name in ('banks', 'categories', 'accounts'):
            repos[name].delete_all.assert_not_called()
            self.assertEqual(result['created'][name], 0)
        for name in ('fixed_costs', 'transactions', 'incomes'):
            repos[name].delete_all.assert_called_once_with()
        self.assertEqual(result['total_created'], 15)
        self.assertEqual(result['cleared_collections'], ['fixed_costs', 'transactions', 'incomes'])

    def test_status_ready(self):
        repos = make_repositories()
        for name in ('banks', 'categories', 'accounts'):
            repos[name].count.return_value = 1
        status = DatabaseService(CargaService(repos)).status()
        self.assertTrue(status['ready'])
        self.assertEqual(status['total'], 3)

    def test_status_not_ready(self):
        repos = make_repositories()
        repos['banks'].count.return_value = 2
        status = DatabaseService(CargaService(repos)).status()
        self.assertFalse(status['ready'])
        self.assertEqual(status['message'], "Sistema precisa de configuração inicial")

    def test_clear_all(self):
        repos = make_repositories()
        result = DatabaseService(CargaService(repos)).clear_all()
        self.assertEqual(result['removed'], {name: 0 for name in COLLECTIONS})
