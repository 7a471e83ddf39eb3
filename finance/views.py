"""
Views da API de cadastros do app finance.

Localização: finance/views.py

Endpoints JSON de bancos, contas, categorias, custos fixos, lançamentos
e receitas. Toda a lógica fica nos services; as views apenas leem a
requisição e montam a resposta.
"""
import logging

from core.decorators import (
    api_view, error_response, no_content, read_json, success_response
)
from finance.services.banco_service import BancoService
from finance.services.categoria_service import CategoriaService
from finance.services.conta_service import ContaService
from finance.services.custo_fixo_service import CustoFixoService
from finance.services.receita_service import ReceitaService
from finance.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)


def crud_views(get_service, label: str):
    """
    Cria o par de views (coleção e detalhe) de um cadastro.

    Args:
        get_service: Função que instancia o service (resolvida a cada requisição)
        label: Nome da entidade nas mensagens ('Banco', 'Conta', ...)

    Returns:
        Tupla (collection_view, detail_view)
    """

    @api_view(['GET', 'POST'])
    def collection_view(request):
        """
        GET: lista todos
        POST: cria (201)
        """
        service = get_service()

        if request.method == 'GET':
            documents = service.list()
            return success_response(documents, count=len(documents))

        document = service.create(read_json(request))
        logger.info(f"[API] {label} criado(a): {document['_id']}")
        return success_response(document, status=201)

    @api_view(['GET', 'PUT', 'DELETE'])
    def detail_view(request, document_id):
        """
        GET: busca por ID (404 se não existir)
        PUT: substitui (204)
        DELETE: remove (204)
        """
        service = get_service()
        not_found = error_response(f'{label} não encontrado(a).', 404)

        if request.method == 'GET':
            document = service.get(document_id)
            return success_response(document) if document else not_found

        if request.method == 'PUT':
            updated = service.update(document_id, read_json(request))
            return no_content() if updated else not_found

        deleted = service.delete(document_id)
        return no_content() if deleted else not_found

    return collection_view, detail_view


# ========================================
# CADASTROS
# ========================================

bancos_view, banco_detail_view = crud_views(lambda: BancoService(), 'Banco')
contas_view, conta_detail_view = crud_views(lambda: ContaService(), 'Conta')
categorias_view, categoria_detail_view = crud_views(lambda: CategoriaService(), 'Categoria')
custos_fixos_view, custo_fixo_detail_view = crud_views(lambda: CustoFixoService(), 'Custo fixo')
lancamentos_view, lancamento_detail_view = crud_views(lambda: TransactionService(), 'Lançamento')
receitas_view, receita_detail_view = crud_views(lambda: ReceitaService(), 'Receita')


@api_view(['POST'])
def bancos_carga_view(request):
    """
    Cria vários bancos de uma vez.

    POST /api/bancos/carga/
    Body: [{"code": "341", "name": "Itaú"}, ...]
    """
    created = BancoService().create_batch(read_json(request))
    return success_response(created, status=201, count=len(created))


@api_view(['GET'])
def contas_por_banco_view(request, document_id):
    """GET /api/bancos/<id>/contas/"""
    contas = ContaService().list_by_bank(document_id)
    return success_response(contas, count=len(contas))


@api_view(['POST'])
def categorias_popular_view(request):
    """
    Cria as categorias pré-definidas que ainda não existem.

    POST /api/categorias/popular/
    """
    created = CategoriaService().popular_categorias_predefinidas()
    return success_response(created, status=201, count=len(created))


@api_view(['GET'])
def custos_fixos_total_view(request):
    """GET /api/custos-fixos/total/"""
    return success_response({'total': CustoFixoService().total()})


@api_view(['GET'])
def lancamentos_saldo_view(request):
    """
    Saldo de todos os lançamentos (entradas - saídas, qualquer status).

    GET /api/lancamentos/saldo/
    """
    return success_response(TransactionService().balance())


@api_view(['GET'])
def receitas_total_view(request):
    """GET /api/receitas/total/"""
    return success_response({'total': ReceitaService().total()})


@api_view(['POST'])
def receitas_carga_view(request):
    """
    Cria várias receitas de uma vez (account_id e category_id obrigatórios).

    POST /api/receitas/carga/
    """
    created = ReceitaService().create_batch(read_json(request))
    return success_response(created, status=201, count=len(created))
