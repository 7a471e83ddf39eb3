"""
Service para cadastro de bancos.

Localização: finance/services/banco_service.py
"""
import logging
from typing import List, Dict, Any

from core.decorators import audit_log
from finance.models.banco_model import BancoModel
from finance.repositories.banco_repository import BancoRepository
from finance.services.base_service import CrudService, audited, ensure_payload_list

logger = logging.getLogger(__name__)


@audited
class BancoService(CrudService):
    """
    Service para gerenciar bancos.

    Exemplo de uso:
        service = BancoService()
        banco = service.create({'code': '341', 'name': 'Itaú'})
    """

    entity = 'bank'
    label = 'banco'
    unique_code = True
    default_sort = ('code', 1)

    def __init__(self, banco_repo=None):
        super().__init__(banco_repo or BancoRepository())

    def build(self, payload, existing=None):
        return BancoModel.create_banco_data(payload, existing)

    @audit_log(action='create_batch', entity='bank')
    def create_batch(self, payload: Any) -> List[Dict[str, Any]]:
        """
        Cria vários bancos de uma vez.

        Args:
            payload: Lista de bancos

        Returns:
            Lista de bancos criados

        Raises:
            ValueError: Lista vazia, códigos repetidos na lista ou já cadastrados
        """
        items = ensure_payload_list(payload, 'banco')
        bancos = [self.build(item) for item in items]

        codes = [b['code'] for b in bancos]
        repeated = sorted({c for c in codes if codes.count(c) > 1})
        if repeated:
            raise ValueError(f"Códigos duplicados na lista: {', '.join(repeated)}")

        existing = self.repo.find_by_codes(codes)
        if existing:
            found = ', '.join(sorted(b['code'] for b in existing))
            raise ValueError(f"Códigos já cadastrados: {found}")

        created = self.repo.create_many(bancos)
        logger.info(f"[BANCOS] {len(created)} bancos criados em lote")
        return created
