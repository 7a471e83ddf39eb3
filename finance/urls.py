"""
URLs do app finance.

Localização: finance/urls.py

Define as rotas da API financeira (incluídas em /api/ por api/urls.py).
Rotas fixas como 'carga/' e 'total/' vêm antes das rotas com ID.
"""
from django.urls import path
from . import views
from . import report_views

app_name = 'finance'

urlpatterns = [
    # Bancos
    path('bancos/', views.bancos_view, name='bancos'),
    path('bancos/carga/', views.bancos_carga_view, name='bancos-carga'),
    path('bancos/<str:document_id>/', views.banco_detail_view, name='banco-detail'),
    path('bancos/<str:document_id>/contas/', views.contas_por_banco_view, name='banco-contas'),

    # Contas
    path('contas/', views.contas_view, name='contas'),
    path('contas/<str:document_id>/', views.conta_detail_view, name='conta-detail'),

    # Categorias
    path('categorias/', views.categorias_view, name='categorias'),
    path('categorias/popular/', views.categorias_popular_view, name='categorias-popular'),
    path('categorias/<str:document_id>/', views.categoria_detail_view, name='categoria-detail'),

    # Custos fixos
    path('custos-fixos/', views.custos_fixos_view, name='custos-fixos'),
    path('custos-fixos/total/', views.custos_fixos_total_view, name='custos-fixos-total'),
    path('custos-fixos/<str:document_id>/', views.custo_fixo_detail_view, name='custo-fixo-detail'),

    # Lançamentos
    path('lancamentos/', views.lancamentos_view, name='lancamentos'),
    path('lancamentos/saldo/', views.lancamentos_saldo_view, name='lancamentos-saldo'),
    path('lancamentos/<str:document_id>/', views.lancamento_detail_view, name='lancamento-detail'),

    # Receitas
    path('receitas/', views.receitas_view, name='receitas'),
    path('receitas/total/', views.receitas_total_view, name='receitas-total'),
    path('receitas/carga/', views.receitas_carga_view, name='receitas-carga'),
    path('receitas/<str:document_id>/', views.receita_detail_view, name='receita-detail'),

    # Calculadora
    path('calculadora/calcular-tudo/', report_views.calcular_tudo_view, name='calcular-tudo'),
    path('calculadora/saldo-atual/', report_views.saldo_atual_view, name='saldo-atual'),
    path('calculadora/total-vencido/', report_views.total_vencido_view, name='total-vencido'),
    path('calculadora/resumo-rapido/', report_views.resumo_rapido_view, name='resumo-rapido'),
    path('calculadora/vencidos-detalhados/', report_views.vencidos_detalhados_view, name='vencidos-detalhados'),
    path('calculadora/resumo-categoria/', report_views.resumo_categoria_view, name='resumo-categoria'),
    path('calculadora/dashboard/', report_views.calculadora_dashboard_view, name='calculadora-dashboard'),

    # Relatório
    path('relatorio/', report_views.relatorio_view, name='relatorio'),
    path('relatorio/alertas/', report_views.alertas_view, name='relatorio-alertas'),
    path('relatorio/resumo/', report_views.resumo_view, name='relatorio-resumo'),
    path('relatorio/vencidos/', report_views.vencidos_view, name='relatorio-vencidos'),
    path('relatorio/dashboard/', report_views.relatorio_dashboard_view, name='relatorio-dashboard'),
    path('relatorio/atualizar-status/', report_views.atualizar_status_view, name='atualizar-status'),

    # Carga e manutenção
    path('carga/json/', report_views.carga_json_view, name='carga-json'),
    path('carga/status/', report_views.carga_status_view, name='carga-status'),
    path('database/reset-completo/', report_views.reset_completo_view, name='reset-completo'),
    path('database/limpar-tudo/', report_views.limpar_tudo_view, name='limpar-tudo'),
    path('database/criar-dados/', report_views.criar_dados_view, name='criar-dados'),
    path('database/status/', report_views.database_status_view, name='database-status'),
]
