import unittest
from unittest.mock import MagicMock

from finance.models.categoria_model import CategoriaModel
from finance.services.banco_service import BancoService
from finance.services.categoria_service import CategoriaService
from finance.services.conta_service import ContaService
from finance.services.custo_fixo_service import CustoFixoService
from finance.services.receita_service import ReceitaService


def echo_create_many(documents):
    for position, document in enumerate(documents):
        document['_id'] = f'id{position}'
    return documents


class TestBancoService(unittest.TestCase):

    def setUp(self):
        self.repo = MagicMock()
        self.repo.create_many.side_effect = echo_create_many
        self.service = BancoService(banco_repo=self.repo)

    def test_create_duplicate_code(self):
        self.repo.find_by_code.return_value = {'_id': 'x', 'code': '341'}
        with self.assertRaises(ValueError) as ctx:
            self.service.create({'code': '341', 'name': 'Itaú'})
        self.assertIn('341', str(ctx.exception))
        self.repo.create.assert_not_called()

    def test_update_checks_code_excluding_itself(self):
        self.repo.find_by_id.return_value = {'_id': 'b1', 'code': '341'}
        self.repo.find_by_code.return_value = None
        self.repo.replace.return_value = True

        self.assertTrue(self.service.update('b1', {'code': '341', 'name': 'Itaú Unibanco'}))
        self.repo.find_by_code.assert_called_once_with('341', exclude_id='b1')

    def test_update_missing(self):
        self.repo.find_by_id.return_value = None
        self.assertFalse(self.service.update('b1', {'code': '341', 'name': 'Itaú'}))

    def test_delete_delegates(self):
        self.repo.delete.return_value = False
        self.assertFalse(self.service.delete('b1'))

    def test_list_sorted_by_code(self):
        self.service.list()
        self.repo.find_all.assert_called_once_with(sort=('code', 1))

    def test_create_batch(self):
        self.repo.find_by_codes.return_value = []
        created = self.service.create_batch([
            {'code': '341', 'name': 'Itaú'},
            {'code': '260', 'name': 'Nubank'},
        ])
        self.assertEqual([b['code'] for b in created], ['341', '260'])

    def test_create_batch_empty(self):
        with self.assertRaises(ValueError):
            self.service.create_batch([])

    def test_create_batch_repeated_codes(self):
        with self.assertRaises(ValueError) as ctx:
            self.service.create_batch([
                {'code': '341', 'name': 'Itaú'},
                {'code': '341', 'name': 'Itaú de novo'},
            ])
        self.assertIn('duplicados', str(ctx.exception))
        self.repo.create_many.assert_not_called()

    def test_create_batch_existing_codes(self):
        self.repo.find_by_codes.return_value = [{'code': '260'}]
        with self.assertRaises(ValueError) as ctx:
            self.service.create_batch([{'code': '260', 'name': 'Nubank'}])
        self.assertIn('260', str(ctx.exception))
        self.repo.create_many.assert_not_called()


class TestCategoriaService(unittest.TestCase):

    def test_popular_categorias_only_missing(self):
        repo = MagicMock()
        repo.create_many.side_effect = echo_create_many
        repo.find_by_code.side_effect = lambda code: {'code': code} if code == 'SALARIO' else None

        created = CategoriaService(categoria_repo=repo).popular_categorias_predefinidas()

        codes = [c['code'] for c in created]
        self.assertNotIn('SALARIO', codes)
        self.assertEqual(len(codes), len(CategoriaModel.get_categorias_predefinidas()) - 1)

    def test_list_uses_ordered_query(self):
        repo = MagicMock()
        CategoriaService(categoria_repo=repo).list()
        repo.find_all_ordered.assert_called_once_with()


class TestContaService(unittest.TestCase):

    def test_create_invalid_type(self):
        repo = MagicMock()
        with self.assertRaises(ValueError):
            ContaService(conta_repo=repo).create({
                'name': 'Conta', 'code': 'C1', 'type': 'investimento', 'bank_id': 'b1'
            })
        repo.create.assert_not_called()

    def test_list_by_bank(self):
        repo = MagicMock()
        ContaService(conta_repo=repo).list_by_bank('b1')
        repo.find_by_bank.assert_called_once_with('b1')


class TestCustoFixoService(unittest.TestCase):

    def test_total_and_list(self):
        repo = MagicMock()
        service = CustoFixoService(custo_fixo_repo=repo)
        service.total()
        service.list()
        repo.get_total.assert_called_once_with()
        repo.find_all_by_due_date.assert_called_once_with()


class TestReceitaService(unittest.TestCase):

    def setUp(self):
        self.repo = MagicMock()
        self.repo.create_many.side_effect = echo_create_many
        self.service = ReceitaService(receita_repo=self.repo)

    def test_create_batch_reports_position(self):
        with self.assertRaises(ValueError) as ctx:
            self.service.create_batch([
                {'description': 'Freela', 'amount': 10, 'date': '2026-01-01',
                 'account_id': 'a1', 'category_id': 'c1'},
                {'description': 'Bônus', 'amount': 10, 'date': '2026-01-01'},
            ])
        self.assertTrue(str(ctx.exception).startswith('Receita 2:'))
        self.repo.create_many.assert_not_called()

    def test_create_batch(self):
        created = self.service.create_batch([
            {'description': 'Freela', 'amount': '10', 'date': '2026-01-01',
             'account_id': 'a1', 'category_id': 'c1'},
        ])
        self.assertEqual(len(created), 1)
        self.assertEqual(created[0]['status'], 'pending')

    def test_create_batch_not_a_list(self):
        with self.assertRaises(ValueError):
            self.service.create_batch({'description': 'Freela'})
