"""
Service para lógica de transações financeiras (lançamentos).

Localização: finance/services/transaction_service.py

Este service contém a lógica de negócio relacionada a transações.
Ele usa o TransactionRepository para acessar dados, mas adiciona
validações e regras de negócio, incluindo a atualização automática de
status dos lançamentos muito atrasados.
"""
import logging
from typing import List, Dict, Any, Optional
from decimal import Decimal

from django.conf import settings
from pymongo.errors import PyMongoError

from core.decorators import audit_log
from core.utils.dates import DateLike, now, start_of_day, to_date, today
from finance.models.transaction_model import TransactionModel
from finance.repositories.transaction_repository import TransactionRepository
from finance.services.base_service import CrudService, audited

logger = logging.getLogger(__name__)


@audited
class TransactionService(CrudService):
    """
    Service para gerenciar transações financeiras.

    Exemplo de uso:
        service = TransactionService()
        transaction = service.create({
            'description': 'Aluguel',
            'amount': '1200.00',
            'date': '2026-01-10',
            'direction': 'outflow',
        })
    """

    entity = 'transaction'
    label = 'lançamento'
    default_sort = ('date', -1)

    def __init__(self, transaction_repo=None):
        super().__init__(transaction_repo or TransactionRepository())

    def build(self, payload, existing=None):
        return TransactionModel.create_transaction_data(payload, existing)

    def balance(self) -> Dict[str, Decimal]:
        """
        Saldo de todos os lançamentos (entradas - saídas), independente do status.

        Returns:
            Dict com inflow, outflow e balance
        """
        return self.repo.get_summary()

    @audit_log(action='status_sweep', entity='transaction')
    def run_overdue_cancellation_sweep(self, reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Cancela lançamentos pendentes com mais de N dias de atraso
        (settings.FINANCE_CANCEL_AFTER_DAYS, padrão 60).

        Cada lançamento é gravado separadamente; uma falha em um deles é
        registrada e não interrompe os demais.

        Args:
            reference_date: Data de referência; padrão é hoje

        Returns:
            Dict com updated, updated_ids, failed e results (um por lançamento)
        """
        reference = to_date(reference_date) or today()
        limit_days = settings.FINANCE_CANCEL_AFTER_DAYS

        pendentes = self.repo.find_pending_before(start_of_day(reference))

        results: List[Dict[str, Any]] = []
        for lancamento in pendentes:
            days_late = (reference - to_date(lancamento['date'])).days
            if days_late <= limit_days:
                continue

            lancamento_id = str(lancamento['_id'])
            updated = dict(lancamento)
            updated['status'] = TransactionModel.CANCELLED
            updated['updated_at'] = now()

            try:
                matched = self.repo.replace(lancamento_id, updated)
            except PyMongoError as e:
                logger.error(f"[SWEEP] Erro ao cancelar lançamento {lancamento_id}: {e}", exc_info=True)
                results.append({'id': lancamento_id, 'success': False, 'error': str(e)})
                continue

            if matched:
                results.append({'id': lancamento_id, 'success': True, 'error': None})
            else:
                logger.warning(f"[SWEEP] Lançamento {lancamento_id} não encontrado ao atualizar")
                results.append({'id': lancamento_id, 'success': False, 'error': 'Lançamento não encontrado'})

        updated_ids = [r['id'] for r in results if r['success']]
        failed = [{'id': r['id'], 'error': r['error']} for r in results if not r['success']]

        logger.info(
            f"[SWEEP] {len(pendentes)} pendentes vencidos, {len(updated_ids)} cancelados, "
            f"{len(failed)} falhas (referência {reference})"
        )

        return {
            'updated': len(updated_ids),
            'updated_ids': updated_ids,
            'failed': failed,
            'results': results,
        }
