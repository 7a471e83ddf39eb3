"""
Utilitários de datas.

Localização: core/utils/dates.py

"Hoje" é sempre calculado no fuso configurado em settings.TIME_ZONE
(padrão America/Sao_Paulo). Datas gravadas no MongoDB são naive.
"""
import calendar
from datetime import datetime, date, time
from typing import Optional, Tuple, Union

import pytz
from dateutil import parser
from django.conf import settings

DateLike = Union[date, datetime, str]


def get_timezone():
    """Retorna o timezone pytz configurado."""
    return pytz.timezone(settings.TIME_ZONE)


def now() -> datetime:
    """Data/hora atual no fuso configurado, sem tzinfo (formato gravado no banco)."""
    return datetime.now(get_timezone()).replace(tzinfo=None)


def today() -> date:
    """Data de hoje no fuso configurado."""
    return datetime.now(get_timezone()).date()


def parse_date(value: Optional[DateLike]) -> Optional[datetime]:
    """
    Converte string/date/datetime em datetime naive.

    Aceita ISO (2026-01-13, 2026-01-13T10:00:00-03:00) e o formato
    brasileiro dd/mm/aaaa. Datas com fuso são convertidas para o fuso
    configurado.

    Raises:
        ValueError: Se a string não for uma data válida
    """
    if value is None or value == '':
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        try:
            # ISO primeiro; depois dia/mês/ano
            if len(text) >= 10 and text[4] == '-':
                dt = parser.isoparse(text)
            else:
                dt = parser.parse(text, dayfirst=True)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Formato de data inválido: {value}") from e
    else:
        raise ValueError(f"Formato de data inválido: {value!r}")

    if dt.tzinfo is not None:
        dt = dt.astimezone(get_timezone()).replace(tzinfo=None)
    return dt


def to_date(value: Optional[DateLike]) -> Optional[date]:
    """Normaliza para date (sem componente de hora)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_date(value)
    return parsed.date() if parsed else None


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(to_date(value), time.min)


def end_of_day(value: DateLike) -> datetime:
    """Último instante do dia (limite superior inclusivo de filtros)."""
    return datetime.combine(to_date(value), time.max)


def last_day_of_month(value: DateLike) -> date:
    day = to_date(value)
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """
    Retorna (primeiro instante, último instante) do mês.

    Raises:
        ValueError: Se mês/ano inválidos
    """
    first = date(year, month, 1)
    return start_of_day(first), end_of_day(last_day_of_month(first))


def format_br(value: Optional[DateLike]) -> str:
    """Formata data no padrão brasileiro dd/mm/aaaa."""
    day = to_date(value)
    return day.strftime('%d/%m/%Y') if day else 'N/A'
