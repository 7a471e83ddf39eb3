"""
Views da calculadora, do relatório e de manutenção do banco.

Localização: finance/report_views.py

Todas as views de cálculo aceitam ?data_referencia=AAAA-MM-DD para
substituir a data de hoje.
"""
import logging

from core.decorators import (
    api_view, read_json, reference_date_from, success_response
)
from finance.services.carga_service import CargaService
from finance.services.database_service import DatabaseService
from finance.services.report_service import ReportService

logger = logging.getLogger(__name__)


def _int_param(request, name: str):
    """
    Lê um parâmetro inteiro opcional da query string.

    Raises:
        ValueError: Se o valor não for inteiro
    """
    value = request.GET.get(name)
    if value in (None, ''):
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Parâmetro '{name}' deve ser um número inteiro.") from e


def _bool_param(request, name: str) -> bool:
    return request.GET.get(name, '').strip().lower() in ('1', 'true', 'sim', 'yes')


# ========================================
# CALCULADORA
# ========================================

@api_view(['GET'])
def calcular_tudo_view(request):
    """
    Snapshot completo: saldos, vencidos, resumos, projeção e alertas.

    GET /api/calculadora/calcular-tudo/
    """
    result = ReportService().calcular_tudo(reference_date_from(request))
    return success_response(result, message='Cálculos realizados com sucesso')


@api_view(['GET'])
def saldo_atual_view(request):
    """GET /api/calculadora/saldo-atual/"""
    return success_response({'current_balance': ReportService().get_current_balance()})


@api_view(['GET'])
def total_vencido_view(request):
    """GET /api/calculadora/total-vencido/"""
    total = ReportService().get_total_overdue(reference_date_from(request))
    return success_response({'total_overdue': total})


@api_view(['GET'])
def resumo_rapido_view(request):
    """GET /api/calculadora/resumo-rapido/"""
    return success_response(ReportService().get_quick_summary(reference_date=reference_date_from(request)))


@api_view(['GET'])
def vencidos_detalhados_view(request):
    """GET /api/calculadora/vencidos-detalhados/"""
    return success_response(ReportService().get_overdue(reference_date_from(request)))


@api_view(['GET'])
def resumo_categoria_view(request):
    """GET /api/calculadora/resumo-categoria/"""
    return success_response(ReportService().get_category_summary(reference_date_from(request)))


@api_view(['GET'])
def calculadora_dashboard_view(request):
    """GET /api/calculadora/dashboard/"""
    return success_response(ReportService().get_dashboard(reference_date_from(request)))


# ========================================
# RELATÓRIO
# ========================================

@api_view(['GET'])
def relatorio_view(request):
    """
    Relatório completo do período.

    GET /api/relatorio/?data_inicio=2026-01-01&data_fim=2026-01-31
    """
    report = ReportService().generate_report(
        start_date=request.GET.get('data_inicio') or None,
        end_date=request.GET.get('data_fim') or None,
        reference_date=reference_date_from(request),
    )
    return success_response(report)


@api_view(['GET'])
def alertas_view(request):
    """GET /api/relatorio/alertas/"""
    alerts = ReportService().get_alerts(reference_date_from(request))
    return success_response(alerts, count=len(alerts))


@api_view(['GET'])
def resumo_view(request):
    """
    Resumo rápido do período.

    GET /api/relatorio/resumo/?data_inicio=&data_fim=
    """
    summary = ReportService().get_quick_summary(
        start_date=request.GET.get('data_inicio') or None,
        end_date=request.GET.get('data_fim') or None,
        reference_date=reference_date_from(request),
    )
    return success_response(summary)


@api_view(['GET'])
def vencidos_view(request):
    """GET /api/relatorio/vencidos/"""
    return success_response(ReportService().get_overdue(reference_date_from(request)))


@api_view(['GET'])
def relatorio_dashboard_view(request):
    """
    Dashboard mensal.

    GET /api/relatorio/dashboard/?mes=1&ano=2026
    """
    dashboard = ReportService().get_monthly_dashboard(
        month=_int_param(request, 'mes'),
        year=_int_param(request, 'ano'),
        reference_date=reference_date_from(request),
    )
    return success_response(dashboard)


@api_view(['POST'])
def atualizar_status_view(request):
    """
    Cancela lançamentos pendentes muito atrasados.

    POST /api/relatorio/atualizar-status/
    """
    result = ReportService().run_status_sweep(reference_date_from(request))
    return success_response(
        result,
        message=f"{result['updated']} lançamento(s) atualizado(s)"
    )


# ========================================
# CARGA E MANUTENÇÃO
# ========================================

@api_view(['POST'])
def carga_json_view(request):
    """
    Carga de dados via JSON.

    POST /api/carga/json/
    Body: {"clear_before": false, "banks": [...], "accounts": [...], ...}
    """
    result = CargaService().load(read_json(request))
    return success_response(result, message='Carga concluída com sucesso!')


@api_view(['GET'])
def carga_status_view(request):
    """GET /api/carga/status/"""
    return success_response(CargaService().status())


@api_view(['POST'])
def reset_completo_view(request):
    """
    Limpa o banco e recria dados padrão e de exemplo.

    POST /api/database/reset-completo/?manter_configuracoes=true
    """
    result = DatabaseService().reset(
        keep_configuration=_bool_param(request, 'manter_configuracoes'),
        reference_date=reference_date_from(request),
    )
    return success_response(result, message=result['message'])


@api_view(['POST'])
def limpar_tudo_view(request):
    """POST /api/database/limpar-tudo/"""
    result = DatabaseService().clear_all()
    return success_response(result, message=result['message'])


@api_view(['POST'])
def criar_dados_view(request):
    """POST /api/database/criar-dados/"""
    result = DatabaseService().seed_defaults(reference_date_from(request))
    return success_response(result, message=result['message'])


@api_view(['GET'])
def database_status_view(request):
    """GET /api/database/status/"""
    return success_response(DatabaseService().status())
