"""
Decorator para auditoria e logging.

Localização: core/decorators/audit_log.py

Decorator para logar ações de escrita automaticamente (início, sucesso e
falha) no logger 'audit'.
"""
import logging
from functools import wraps
from typing import Callable

logger = logging.getLogger('audit')


def _entity_id(action, args, kwargs, result):
    """Tenta descobrir o ID da entidade a partir do resultado ou dos argumentos."""
    if isinstance(result, dict) and result.get('_id') is not None:
        return str(result['_id'])
    for key in ('document_id', 'entity_id'):
        if kwargs.get(key):
            return str(kwargs[key])
    # update/delete de service: (self, document_id, ...)
    if action in ('update', 'delete') and len(args) > 1 and isinstance(args[1], str):
        return args[1]
    return None


def audit_log(action: str, entity: str):
    """
    Decorator para logar ações automaticamente.

    Args:
        action: Tipo de ação ('create', 'update', 'reset', etc.)
        entity: Entidade relacionada ('bank', 'transaction', etc.)

    Exemplo de uso:
        @audit_log(action='create', entity='bank')
        def create(self, payload):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                result = func(*args, **kwargs)
            except ValueError as e:
                # Erro de validação: não é falha do sistema
                logger.warning(f"[AUDIT] {action} {entity} rejeitado: {e}")
                raise
            except Exception:
                logger.error(f"[AUDIT] {action} {entity} falhou", exc_info=True)
                raise

            entity_id = _entity_id(action, args, kwargs, result)
            if entity_id:
                logger.info(f"[AUDIT] {action} {entity} id={entity_id}")
            else:
                logger.info(f"[AUDIT] {action} {entity}")
            return result

        return wrapper
    return decorator
