"""
Service de carga de dados via JSON.

Localização: finance/services/carga_service.py

Recebe em um único corpo JSON bancos, categorias, contas, custos fixos,
receitas e lançamentos. Referências podem vir por ID (bank_id,
category_id, account_id) ou por código (bank_code, category_code,
account_code), resolvidos contra a própria carga e contra o banco.

Todo o conteúdo é validado antes de qualquer gravação.
"""
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId

from core.decorators import audit_log
from finance.models.banco_model import BancoModel
from finance.models.categoria_model import CategoriaModel
from finance.models.conta_model import ContaModel
from finance.models.custo_fixo_model import CustoFixoModel
from finance.models.receita_model import ReceitaModel
from finance.models.transaction_model import TransactionModel
from finance.repositories import get_repositories
from finance.services.base_service import ensure_payload

logger = logging.getLogger(__name__)

# Ordem de inserção (pais antes dos filhos)
COLLECTIONS = ('banks', 'categories', 'accounts', 'fixed_costs', 'incomes', 'transactions')

LABELS = {
    'banks': 'Banco',
    'categories': 'Categoria',
    'accounts': 'Conta',
    'fixed_costs': 'Custo fixo',
    'incomes': 'Receita',
    'transactions': 'Lançamento',
}


class CargaService:
    """
    Service de carga em lote e status das collections.

    Exemplo de uso:
        service = CargaService()
        resultado = service.load({
            'clear_before': True,
            'banks': [{'code': '341', 'name': 'Itaú'}],
            'accounts': [{'code': 'CC1', 'name': 'Corrente', 'bank_code': '341'}],
        })
    """

    def __init__(self, repositories: Optional[Dict[str, Any]] = None):
        self.repos = repositories or get_repositories()

    # ==================== VALIDAÇÃO ====================

    @staticmethod
    def _items(payload: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
        items = payload.get(name) or []
        if not isinstance(items, list):
            raise ValueError(f"O campo '{name}' deve ser uma lista.")
        for item in items:
            ensure_payload(item)
        return items

    def _with_reference(self, item: Dict[str, Any], id_field: str, code_field: str,
                        known: Dict[str, str], collection: str, use_store: bool) -> Dict[str, Any]:
        """
        Preenche o ID da referência a partir do código, quando só o código veio.

        Raises:
            ValueError: Se o código não existir na carga nem no banco
        """
        if item.get(id_field) or not item.get(code_field):
            return item

        code = str(item[code_field]).strip().upper()
        ref = known.get(code)
        if ref is None and use_store:
            document = self.repos[collection].find_by_code(code)
            ref = str(document['_id']) if document else None
        if ref is None:
            raise ValueError(f"{code_field} '{code}' não encontrado.")

        return dict(item, **{id_field: ref})

    @staticmethod
    def _unique_codes(documents: List[Dict[str, Any]], name: str) -> Dict[str, str]:
        """
        Mapa código -> ID dos documentos da carga.

        Raises:
            ValueError: Se houver códigos repetidos
        """
        codes = {}
        for document in documents:
            code = document['code']
            if code in codes:
                raise ValueError(f"{LABELS[name]}: código '{code}' repetido na carga.")
            codes[code] = str(document['_id'])
        return codes

    def _check_stored_codes(self, codes: Dict[str, str], name: str):
        """
        Raises:
            ValueError: Se algum código da carga já existir no banco
        """
        existing = self.repos[name].find_by_codes(list(codes))
        if existing:
            found = sorted(str(document['code']) for document in existing)
            raise ValueError(f"{LABELS[name]}: código '{found[0]}' já existe.")

    def build_documents(self, payload: Dict[str, Any], use_store: bool = True) -> Dict[str, List[Dict[str, Any]]]:
        """
        Valida a carga e monta os documentos (com _id já definido).

        Args:
            payload: Corpo da carga
            use_store: Se códigos podem ser resolvidos contra o banco

        Returns:
            Dict collection -> documentos prontos para inserir

        Raises:
            ValueError: Primeiro erro de validação encontrado (com a posição)
        """
        builders = {
            'banks': BancoModel.create_banco_data,
            'categories': CategoriaModel.create_categoria_data,
            'accounts': ContaModel.create_conta_data,
            'fixed_costs': CustoFixoModel.create_custo_fixo_data,
            'incomes': ReceitaModel.create_receita_data,
            'transactions': TransactionModel.create_transaction_data,
        }
        known = {'banks': {}, 'categories': {}, 'accounts': {}}
        documents = {}

        for name in COLLECTIONS:
            built = []
            for position, item in enumerate(self._items(payload, name), start=1):
                try:
                    if name == 'accounts':
                        item = self._with_reference(item, 'bank_id', 'bank_code',
                                                    known['banks'], 'banks', use_store)
                    elif name in ('fixed_costs', 'incomes', 'transactions'):
                        item = self._with_reference(item, 'category_id', 'category_code',
                                                    known['categories'], 'categories', use_store)
                        item = self._with_reference(item, 'account_id', 'account_code',
                                                    known['accounts'], 'accounts', use_store)
                    document = builders[name](item)
                except ValueError as e:
                    raise ValueError(f"{LABELS[name]} {position}: {e}") from e

                document['_id'] = ObjectId()
                built.append(document)

            if name in known:
                known[name] = self._unique_codes(built, name)
                if use_store and known[name]:
                    self._check_stored_codes(known[name], name)
            documents[name] = built

        return documents

    # ==================== OPERAÇÕES ====================

    @audit_log(action='load', entity='bulk')
    def load(self, payload: Any) -> Dict[str, Any]:
        """
        Executa a carga.

        Args:
            payload: Dict com clear_before (opcional) e as listas por collection

        Returns:
            Dict com cleared, inserted (por collection) e total

        Raises:
            ValueError: Corpo inválido, vazio ou com itens inválidos
        """
        payload = ensure_payload(payload)
        clear_before = bool(payload.get('clear_before', False))

        if not clear_before and not any(payload.get(name) for name in COLLECTIONS):
            raise ValueError("Nenhum dado fornecido para carga.")

        documents = self.build_documents(payload, use_store=not clear_before)

        if clear_before:
            self.clear_all()

        inserted = {}
        for name in COLLECTIONS:
            inserted[name] = len(self.repos[name].create_many(documents[name]))

        total = sum(inserted.values())
        logger.info(f"[CARGA] Carga concluída: {total} documentos inseridos")

        return {
            'cleared': clear_before,
            'inserted': inserted,
            'total': total,
        }

    def clear_all(self) -> Dict[str, int]:
        """Esvazia todas as collections. Retorna removidos por collection."""
        removed = {name: self.repos[name].delete_all() for name in COLLECTIONS}
        logger.info(f"[CARGA] Collections esvaziadas: {removed}")
        return removed

    def status(self) -> Dict[str, int]:
        """Quantidade de documentos por collection."""
        counts = {name: self.repos[name].count() for name in COLLECTIONS}
        counts['total'] = sum(counts.values())
        return counts
