"""
Services do app finance.

Localização: finance/services/

Services contêm a lógica de negócio da aplicação.
Eles:
- Orquestram chamadas a repositories
- Aplicam regras de negócio
- Validam dados

NÃO devem acessar diretamente o MongoDB, apenas via repositories.
A calculadora e os alertas são funções puras sobre os documentos.
"""
from .banco_service import BancoService
from .conta_service import ContaService
from .categoria_service import CategoriaService
from .custo_fixo_service import CustoFixoService
from .transaction_service import TransactionService
from .receita_service import ReceitaService
from .calculadora_service import CalculadoraService, compute_aggregate
from .alert_service import evaluate_alerts
from .report_service import ReportService
from .carga_service import CargaService
from .database_service import DatabaseService

__all__ = [
    'BancoService', 'ContaService', 'CategoriaService', 'CustoFixoService',
    'TransactionService', 'ReceitaService', 'CalculadoraService', 'ReportService',
    'CargaService', 'DatabaseService', 'compute_aggregate', 'evaluate_alerts',
]
