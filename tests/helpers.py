"""
Fábricas de documentos usadas nos testes.

Os documentos têm o mesmo formato dos gravados no MongoDB (Decimal nos
valores, datetime naive nas datas).
"""
from datetime import date, datetime, timedelta
from decimal import Decimal

from bson import ObjectId

REFERENCE = date(2026, 1, 15)


def days_from_reference(days: int) -> datetime:
    """Datetime à meia-noite, 'days' dias a partir da data de referência."""
    return datetime.combine(REFERENCE + timedelta(days=days), datetime.min.time())


def make_transaction(amount, direction='outflow', status='paid', days=0,
                     category_id=None, account_id=None, description='Lançamento'):
    return {
        '_id': ObjectId(),
        'description': description,
        'amount': Decimal(str(amount)),
        'date': days_from_reference(days),
        'direction': direction,
        'status': status,
        'category_id': category_id or '',
        'account_id': account_id or '',
    }


def make_fixed_cost(amount, days=0, category_id=None, description='Custo fixo'):
    return {
        '_id': ObjectId(),
        'description': description,
        'amount': Decimal(str(amount)),
        'due_date': days_from_reference(days),
        'category_id': category_id or '',
        'account_id': '',
    }


def make_named(name, code=None):
    """Categoria ou conta mínima (apenas _id, code e name)."""
    return {'_id': ObjectId(), 'code': code or name.upper(), 'name': name}
