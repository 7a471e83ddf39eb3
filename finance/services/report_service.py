"""
Service para geração de relatórios financeiros.

Localização: finance/services/report_service.py

Fachada usada pelas views da calculadora e do relatório: carrega os dados,
executa a calculadora e os alertas e monta as respostas (relatório
completo, dashboards, resumos, vencidos e atualização de status).
"""
import logging
from typing import Dict, Any, List, Optional

from django.conf import settings

from core.utils.dates import (
    DateLike, end_of_day, format_br, month_bounds, now, parse_date,
    start_of_day, to_date, today
)
from finance.models.transaction_model import TransactionModel
from finance.services.alert_service import evaluate_alerts, split_alerts
from finance.services.calculadora_service import (
    CalculadoraService, NOT_FOUND, ZERO, build_name_map, compute_aggregate,
    resolve_name, to_amount
)
from finance.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

QUICK_SUMMARY_ALERTS = 3
LATEST_TRANSACTIONS = 10

DIRECTION_LABELS = {
    TransactionModel.INFLOW: 'Entrada',
    TransactionModel.OUTFLOW: 'Saída',
}


class ReportService:
    """
    Service para gerar relatórios financeiros.

    Exemplo de uso:
        service = ReportService()
        relatorio = service.generate_report('2026-01-01', '2026-01-31')
    """

    def __init__(self, calculadora_service=None, transaction_service=None):
        self.calculadora = calculadora_service or CalculadoraService()
        self._transaction_service = transaction_service

    @property
    def transaction_service(self):
        if self._transaction_service is None:
            self._transaction_service = TransactionService(self.calculadora.transaction_repo)
        return self._transaction_service

    @property
    def top_n(self) -> int:
        return settings.FINANCE_TOP_N

    # ==================== CÁLCULO BASE ====================

    def _compute(self, start=None, end=None, reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Carrega os dados do período e calcula snapshot e alertas.

        Returns:
            Dict com records, snapshot, alerts e reference
        """
        reference = to_date(reference_date) or today()
        records = self.calculadora.load_records(start, end)

        snapshot = compute_aggregate(
            records['transactions'],
            records['fixed_costs'],
            records['accounts'],
            records['categories'],
            reference_date=reference,
        )
        alerts = evaluate_alerts(snapshot, records['fixed_costs'], reference)

        return {
            'records': records,
            'snapshot': snapshot,
            'alerts': alerts,
            'reference': reference,
        }

    @staticmethod
    def _parse_period(start_date: Optional[DateLike], end_date: Optional[DateLike]):
        """
        Normaliza o período: início do dia inicial até o último instante do dia final.

        Raises:
            ValueError: Se datas inválidas ou início depois do fim
        """
        start = parse_date(start_date)
        end = parse_date(end_date)
        start = start_of_day(start) if start else None
        end = end_of_day(end) if end else None

        if start and end and start > end:
            raise ValueError("A data inicial deve ser anterior ou igual à data final.")
        return start, end

    @staticmethod
    def _summary(snapshot: Dict[str, Any]) -> Dict[str, Any]:
        keys = (
            'paid_inflow', 'paid_outflow', 'current_balance',
            'pending_inflow', 'pending_outflow', 'projected_balance',
            'total_transactions', 'paid_count', 'pending_count',
            'overdue_count', 'overdue_amount',
        )
        return {key: snapshot[key] for key in keys}

    @staticmethod
    def _detailed_transactions(transactions: List[Dict[str, Any]],
                               records: Dict[str, Any],
                               reference) -> List[Dict[str, Any]]:
        """
        Lista detalhada de lançamentos (mais recentes primeiro) com nomes
        resolvidos e indicação de vencido.
        """
        categories = build_name_map(records['categories'])
        accounts = build_name_map(records['accounts'])

        detailed = []
        for t in transactions:
            day = to_date(t.get('date'))
            is_overdue = (
                t.get('status') == TransactionModel.PENDING
                and t.get('direction') == TransactionModel.OUTFLOW
                and day is not None
                and day < reference
            )
            detailed.append({
                'id': str(t.get('_id', '')),
                'description': t.get('description', ''),
                'amount': to_amount(t.get('amount')),
                'date': t.get('date'),
                'direction': t.get('direction'),
                'direction_label': DIRECTION_LABELS.get(t.get('direction'), t.get('direction')),
                'status': t.get('status'),
                'category': resolve_name(categories, t.get('category_id'), NOT_FOUND),
                'account': resolve_name(accounts, t.get('account_id'), NOT_FOUND),
                'is_overdue': is_overdue,
            })

        # Sem data vão para o fim
        detailed.sort(key=lambda item: (item['date'] is not None, item['date'] or 0), reverse=True)
        return detailed

    # ==================== RELATÓRIO ====================

    def generate_report(self, start_date: Optional[DateLike] = None,
                        end_date: Optional[DateLike] = None,
                        reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Gera o relatório completo do período.

        Args:
            start_date: Data inicial (inclusiva, opcional)
            end_date: Data final (inclusiva até o fim do dia, opcional)
            reference_date: Data de referência ("hoje")

        Returns:
            Dict com period, summary, snapshot, alerts, listas detalhadas,
            report_text e metadata

        Raises:
            ValueError: Se o período for inválido
        """
        start, end = self._parse_period(start_date, end_date)
        computed = self._compute(start, end, reference_date)
        snapshot = computed['snapshot']
        records = computed['records']

        transactions = records['transactions']
        if start or end:
            period = {'start_date': start, 'end_date': end}
        elif transactions:
            dates = [t['date'] for t in transactions if t.get('date')]
            period = {
                'start_date': min(dates) if dates else None,
                'end_date': max(dates) if dates else None,
            }
        else:
            period = {'start_date': None, 'end_date': None}

        report = {
            'period': period,
            'summary': self._summary(snapshot),
            'snapshot': snapshot,
            'alerts': computed['alerts'],
            'overdue_transactions': snapshot['overdue_transactions'],
            'overdue_fixed_costs': snapshot['overdue_fixed_costs'],
            'upcoming_transactions': snapshot['upcoming_transactions'],
            'upcoming_fixed_costs': snapshot['upcoming_fixed_costs'],
            'categories': snapshot['categories'],
            'accounts': snapshot['accounts'],
            'monthly_projection': snapshot['monthly_projection'],
            'transactions': self._detailed_transactions(transactions, records, computed['reference']),
            'metadata': {
                'generated_at': now(),
                'reference_date': computed['reference'],
                'format': 'json',
            },
        }
        report['report_text'] = self._build_report_text(report)

        logger.info(
            f"[RELATORIO] Relatório gerado: {snapshot['total_transactions']} lançamentos, "
            f"{len(computed['alerts'])} alertas"
        )
        return report

    def _build_report_text(self, report: Dict[str, Any]) -> str:
        """
        Constrói o texto do relatório a partir dos dados calculados.

        Args:
            report: Relatório já montado

        Returns:
            String com o texto do relatório
        """
        summary = report['summary']
        period = report['period']

        lines = []
        lines.append("📊 RELATÓRIO FINANCEIRO")
        lines.append(f"Período: {format_br(period['start_date'])} a {format_br(period['end_date'])}")
        lines.append("=" * 50)
        lines.append("")

        lines.append("💰 RESUMO FINANCEIRO")
        lines.append("-" * 50)
        lines.append(f"Entradas pagas: R$ {summary['paid_inflow']:.2f}")
        lines.append(f"Saídas pagas: R$ {summary['paid_outflow']:.2f}")
        lines.append(f"Saldo atual: R$ {summary['current_balance']:.2f}")
        lines.append(f"Saldo projetado: R$ {summary['projected_balance']:.2f}")
        lines.append("")

        lines.append("⏰ VENCIDOS")
        lines.append("-" * 50)
        lines.append(f"Itens vencidos: {summary['overdue_count']}")
        lines.append(f"Valor vencido: R$ {summary['overdue_amount']:.2f}")
        lines.append("")

        categories = report['categories']
        if categories:
            largest = categories[0]
            lines.append("📈 ANÁLISES")
            lines.append("-" * 50)
            lines.append(f"Categoria com Maior Gasto: {largest['category']}")
            lines.append(f"  Valor: R$ {largest['total']:.2f} ({largest['percentage']:.1f}%)")
            lines.append("")

        if report['alerts']:
            lines.append("💡 ALERTAS")
            lines.append("-" * 50)
            for alert in report['alerts']:
                lines.append(f"{alert['title']}: {alert['message']}")
            lines.append("")

        lines.append("=" * 50)
        lines.append(f"Relatório gerado em: {report['metadata']['generated_at'].strftime('%d/%m/%Y %H:%M:%S')}")

        return "\n".join(lines)

    # ==================== DASHBOARDS E RESUMOS ====================

    def calcular_tudo(self, reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """Snapshot completo de todos os lançamentos, com os alertas."""
        computed = self._compute(reference_date=reference_date)
        result = dict(computed['snapshot'])
        result['alerts'] = computed['alerts']
        return result

    def get_alerts(self, reference_date: Optional[DateLike] = None) -> List[Dict[str, Any]]:
        return self._compute(reference_date=reference_date)['alerts']

    def get_dashboard(self, reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Dashboard resumido: status, principais alertas, categorias e vencidos.
        """
        computed = self._compute(reference_date=reference_date)
        snapshot = computed['snapshot']
        alerts = computed['alerts']

        top_overdue = sorted(
            snapshot['overdue_transactions'],
            key=lambda item: item['days_late'],
            reverse=True
        )

        return {
            'reference_date': computed['reference'],
            'status': {
                'current_balance': snapshot['current_balance'],
                'projected_balance': snapshot['projected_balance'],
                'overdue_count': snapshot['overdue_count'],
                'overdue_amount': snapshot['overdue_amount'],
                'has_alerts': bool(alerts),
                'alert_count': len(alerts),
            },
            'alerts': alerts[:self.top_n],
            'top_categories': snapshot['categories'][:self.top_n],
            'top_overdue': top_overdue[:self.top_n],
            'projection': snapshot['monthly_projection'],
        }

    def get_monthly_dashboard(self, month: Optional[int] = None,
                              year: Optional[int] = None,
                              reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Dashboard de um mês (padrão: mês da data de referência).

        Raises:
            ValueError: Se mês/ano inválidos
        """
        reference = to_date(reference_date) or today()
        month = reference.month if month is None else month
        year = reference.year if year is None else year

        if not 1 <= month <= 12:
            raise ValueError("Mês deve estar entre 1 e 12.")
        if not 1 <= year <= 9999:
            raise ValueError("Ano inválido.")

        start, end = month_bounds(year, month)
        report = self.generate_report(start, end, reference)
        critical, others = split_alerts(report['alerts'])

        return {
            'month': month,
            'year': year,
            'period': report['period'],
            'summary': report['summary'],
            'critical_alerts': critical,
            'other_alerts': others,
            'top_categories': report['categories'][:self.top_n],
            'top_accounts': report['accounts'][:self.top_n],
            'latest_transactions': report['transactions'][:LATEST_TRANSACTIONS],
            'monthly_projection': report['monthly_projection'],
        }

    def get_quick_summary(self, start_date: Optional[DateLike] = None,
                          end_date: Optional[DateLike] = None,
                          reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """Resumo rápido: saldos, vencidos e os três primeiros alertas."""
        start, end = self._parse_period(start_date, end_date)
        computed = self._compute(start, end, reference_date)
        snapshot = computed['snapshot']

        return {
            'current_balance': snapshot['current_balance'],
            'projected_balance': snapshot['projected_balance'],
            'overdue_count': snapshot['overdue_count'],
            'overdue_amount': snapshot['overdue_amount'],
            'largest_expense_category': snapshot['largest_expense_category'],
            'largest_expense_amount': snapshot['largest_expense_amount'],
            'alerts': computed['alerts'][:QUICK_SUMMARY_ALERTS],
            'alert_count': len(computed['alerts']),
        }

    def get_overdue(self, reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """Vencidos e a vencer (lançamentos e custos fixos) com totais."""
        snapshot = self._compute(reference_date=reference_date)['snapshot']

        total_transactions = sum((i['amount'] for i in snapshot['overdue_transactions']), ZERO)
        total_fixed_costs = sum((i['amount'] for i in snapshot['overdue_fixed_costs']), ZERO)

        return {
            'reference_date': snapshot['reference_date'],
            'overdue_transactions': snapshot['overdue_transactions'],
            'overdue_fixed_costs': snapshot['overdue_fixed_costs'],
            'upcoming_transactions': snapshot['upcoming_transactions'],
            'upcoming_fixed_costs': snapshot['upcoming_fixed_costs'],
            'total_overdue_transactions': total_transactions,
            'total_overdue_fixed_costs': total_fixed_costs,
            'overdue_count': snapshot['overdue_count'],
            'overdue_amount': snapshot['overdue_amount'],
        }

    def get_category_summary(self, reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        snapshot = self._compute(reference_date=reference_date)['snapshot']
        return {
            'categories': snapshot['categories'],
            'paid_outflow': snapshot['paid_outflow'],
            'largest_expense_category': snapshot['largest_expense_category'],
            'largest_expense_amount': snapshot['largest_expense_amount'],
        }

    def get_current_balance(self):
        return self.calculadora.saldo_atual()

    def get_total_overdue(self, reference_date: Optional[DateLike] = None):
        return self.calculadora.total_vencido(reference_date)

    # ==================== ATUALIZAÇÃO DE STATUS ====================

    def run_status_sweep(self, reference_date: Optional[DateLike] = None) -> Dict[str, Any]:
        """Cancela lançamentos pendentes muito atrasados (ver TransactionService)."""
        return self.transaction_service.run_overdue_cancellation_sweep(reference_date)
