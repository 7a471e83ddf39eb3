"""
Serialização de documentos do MongoDB para JSON.

Localização: core/utils/serializers.py

Converte tipos do BSON/Python que o JsonResponse não entende:
- ObjectId -> str
- Decimal -> float (valores monetários, apenas na saída)
- datetime/date -> ISO 8601
- '_id' -> 'id'
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Any

from bson import ObjectId


def to_json(value: Any) -> Any:
    """
    Converte recursivamente um valor para tipos serializáveis em JSON.

    Args:
        value: dict, lista ou valor simples

    Returns:
        Estrutura equivalente apenas com tipos JSON
    """
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            result['id' if key == '_id' else key] = to_json(item)
        return result
    if isinstance(value, (list, tuple, set)):
        return [to_json(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
