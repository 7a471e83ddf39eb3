"""
Service de alertas financeiros.

Localização: finance/services/alert_service.py

Avalia regras independentes sobre o snapshot calculado pela calculadora
e devolve a lista de alertas na ordem das regras.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from core.utils.dates import DateLike, format_br, to_date, today
from finance.services.calculadora_service import ZERO, to_amount

logger = logging.getLogger(__name__)

KIND_CRITICAL = 'critical'
KIND_WARNING = 'warning'
KIND_INFORMATIONAL = 'informational'

ALERT_KINDS = (KIND_CRITICAL, KIND_WARNING, KIND_INFORMATIONAL)

SEVERELY_OVERDUE_DAYS = 30
PENDING_DOMINANCE_FACTOR = 2
CATEGORY_CONCENTRATION_PERCENT = 50


def _alert(kind: str, title: str, message: str,
           details: Optional[List[str]] = None,
           total_amount: Decimal = ZERO) -> Dict[str, Any]:
    return {
        'kind': kind,
        'title': title,
        'message': message,
        'details': details or [],
        'total_amount': total_amount,
    }


def _format_money(value: Decimal) -> str:
    return f"R$ {value:.2f}"


# ==================== REGRAS ====================

def _severely_overdue_rule(snapshot: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    items = [
        i for i in snapshot.get('overdue_transactions', [])
        if i['days_late'] > SEVERELY_OVERDUE_DAYS
    ]
    if not items:
        return None

    total = sum((i['amount'] for i in items), ZERO)
    details = [
        f"- {i['description']}: {_format_money(i['amount'])} "
        f"({format_br(i['due_date'])}, {i['days_late']} dias)"
        for i in items
    ]
    return _alert(
        KIND_CRITICAL,
        'Lançamentos muito atrasados',
        f"{len(items)} lançamento(s) com mais de {SEVERELY_OVERDUE_DAYS} dias de atraso "
        f"totalizando {_format_money(total)}",
        details,
        total,
    )


def _negative_projection_rule(snapshot: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    projected = snapshot.get('projected_balance', ZERO)
    if projected >= 0:
        return None
    return _alert(
        KIND_WARNING,
        'Saldo projetado negativo',
        f"Considerando os pendentes, o saldo projetado é de {_format_money(projected)}",
        total_amount=projected,
    )


def _pending_dominance_rule(snapshot: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    pending_outflow = snapshot.get('pending_outflow', ZERO)
    pending_inflow = snapshot.get('pending_inflow', ZERO)
    if pending_outflow <= pending_inflow * PENDING_DOMINANCE_FACTOR:
        return None
    return _alert(
        KIND_WARNING,
        'Despesas pendentes elevadas',
        f"Despesas pendentes ({_format_money(pending_outflow)}) superam o dobro "
        f"das receitas pendentes ({_format_money(pending_inflow)})",
        total_amount=pending_outflow,
    )


def _negative_month_end_rule(snapshot: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    projection = snapshot.get('monthly_projection') or {}
    month_end_balance = projection.get('projected_end_of_month_balance', ZERO)
    if month_end_balance >= 0:
        return None
    return _alert(
        KIND_WARNING,
        'Projeção do mês negativa',
        f"O saldo previsto para {format_br(projection.get('end_date'))} é de "
        f"{_format_money(month_end_balance)}",
        total_amount=month_end_balance,
    )


def _category_concentration_rule(snapshot: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    categories = snapshot.get('categories') or []
    if not categories:
        return None

    largest = categories[0]
    if largest['percentage'] <= CATEGORY_CONCENTRATION_PERCENT:
        return None
    return _alert(
        KIND_INFORMATIONAL,
        'Concentração de gastos',
        f"A categoria {largest['category']} representa {largest['percentage']:.1f}% "
        f"dos gastos pagos",
        total_amount=largest['total'],
    )


def _overdue_fixed_costs_rule(fixed_costs: List[Dict[str, Any]],
                              reference) -> Optional[Dict[str, Any]]:
    overdue = []
    for c in fixed_costs:
        due = to_date(c.get('due_date'))
        if due is not None and due < reference:
            overdue.append((c, due))
    if not overdue:
        return None

    total = sum((to_amount(c.get('amount')) for c, _ in overdue), ZERO)
    details = [
        f"- {c.get('description', '')}: {_format_money(to_amount(c.get('amount')))} "
        f"(venceu em {format_br(due)})"
        for c, due in overdue
    ]
    return _alert(
        KIND_CRITICAL,
        'Custos fixos vencidos',
        f"{len(overdue)} custo(s) fixo(s) vencido(s) totalizando {_format_money(total)}",
        details,
        total,
    )


def evaluate_alerts(snapshot: Dict[str, Any],
                    fixed_costs: List[Dict[str, Any]],
                    reference_date: Optional[DateLike] = None) -> List[Dict[str, Any]]:
    """
    Avalia todas as regras de alerta.

    As regras são independentes e não guardam estado; a ordem da lista
    devolvida é a ordem de exibição.

    Args:
        snapshot: Resultado de compute_aggregate
        fixed_costs: Custos fixos (a regra de vencidos lê os documentos)
        reference_date: Data de referência; padrão é a do snapshot

    Returns:
        Lista de alertas {kind, title, message, details, total_amount}
    """
    reference = to_date(reference_date) or to_date(snapshot.get('reference_date')) or today()

    candidates = [
        _severely_overdue_rule(snapshot),
        _negative_projection_rule(snapshot),
        _pending_dominance_rule(snapshot),
        _negative_month_end_rule(snapshot),
        _category_concentration_rule(snapshot),
        _overdue_fixed_costs_rule(fixed_costs, reference),
    ]
    alerts = [a for a in candidates if a is not None]

    if alerts:
        logger.info(f"[ALERTAS] {len(alerts)} alerta(s) gerado(s) para {reference}")
    return alerts


def split_alerts(alerts: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Separa alertas críticos dos demais, preservando a ordem."""
    critical = [a for a in alerts if a['kind'] == KIND_CRITICAL]
    others = [a for a in alerts if a['kind'] != KIND_CRITICAL]
    return critical, others
