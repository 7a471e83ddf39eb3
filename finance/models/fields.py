"""
Validação de campos comuns aos modelos financeiros.

Localização: finance/models/fields.py

Todas as funções levantam ValueError com mensagem pronta para o cliente.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from core.utils.dates import parse_date, now


def required_text(payload: Dict[str, Any], field: str, label: str) -> str:
    value = payload.get(field)
    if value is None or not str(value).strip():
        raise ValueError(f"{label} é obrigatório")
    return str(value).strip()


def optional_text(payload: Dict[str, Any], field: str) -> str:
    value = payload.get(field)
    return str(value).strip() if value is not None else ''


def parse_amount(value: Any, label: str = 'Valor', allow_negative: bool = False) -> Decimal:
    """
    Converte o valor para Decimal.

    Valores de lançamentos são sempre magnitudes (o sinal vem da direção);
    allow_negative existe para saldos iniciais de conta.

    Raises:
        ValueError: Se ausente, não numérico ou negativo (quando não permitido)
    """
    if value is None or value == '':
        raise ValueError(f"{label} é obrigatório")
    if isinstance(value, bool):
        raise ValueError(f"{label} inválido")
    text = str(value).strip()
    if isinstance(value, str):
        text = text.replace(',', '.')
    try:
        # str() evita herdar a imprecisão binária de floats
        amount = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"{label} inválido: {value}") from e
    if not amount.is_finite():
        raise ValueError(f"{label} inválido: {value}")
    if amount < 0 and not allow_negative:
        raise ValueError(f"{label} não pode ser negativo")
    return amount


def required_date(payload: Dict[str, Any], field: str, label: str) -> datetime:
    value = parse_date(payload.get(field))
    if value is None:
        raise ValueError(f"{label} é obrigatória")
    return value


def choice(value: Any, choices: Dict[str, str], label: str, default: Optional[str] = None) -> str:
    """
    Normaliza um valor enumerado aceitando apelidos (ex.: 'Saída' -> 'outflow').

    Args:
        value: Valor recebido
        choices: Mapa apelido (minúsculo) -> valor canônico
        label: Nome do campo para mensagens
        default: Valor usado quando ausente (None = obrigatório)
    """
    if value is None or value == '':
        if default is None:
            raise ValueError(f"{label} é obrigatório")
        return default

    key = str(value).strip().lower()
    if key not in choices:
        valid = ', '.join(sorted(set(choices.values())))
        raise ValueError(f"{label} inválido: '{value}'. Valores aceitos: {valid}")
    return choices[key]


def timestamps(existing: Optional[Dict[str, Any]] = None) -> Dict[str, datetime]:
    """created_at/updated_at, preservando created_at de um documento existente."""
    current = now()
    created_at = existing.get('created_at') if existing else None
    return {
        'created_at': created_at or current,
        'updated_at': current,
    }
