"""
Decorators do core.

Localização: core/decorators/

Decorators para auditoria e para as views da API.
"""
from .audit_log import audit_log
from .api import (
    api_view, error_response, success_response, no_content,
    read_json, reference_date_from
)

__all__ = [
    'audit_log', 'api_view', 'error_response', 'success_response',
    'no_content', 'read_json', 'reference_date_from',
]
