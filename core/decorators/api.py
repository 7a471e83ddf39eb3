"""
Decorator e respostas padrão das views da API JSON.

Localização: core/decorators/api.py
"""
import json
import logging
from functools import wraps
from typing import Any

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.utils.dates import parse_date, to_date
from core.utils.serializers import to_json

logger = logging.getLogger(__name__)


def error_response(message: str, status: int) -> JsonResponse:
    return JsonResponse(
        {'success': False, 'message': message},
        status=status,
        json_dumps_params={'ensure_ascii': False}
    )


def success_response(data: Any = None, status: int = 200, **extra) -> JsonResponse:
    """Resposta de sucesso com os dados já convertidos para JSON."""
    body = {'success': True, 'data': to_json(data)}
    body.update(to_json(extra))
    return JsonResponse(body, status=status, json_dumps_params={'ensure_ascii': False})


def no_content() -> HttpResponse:
    return HttpResponse(status=204)


def read_json(request) -> Any:
    """
    Lê o corpo JSON da requisição.

    Raises:
        ValueError: Se o corpo estiver vazio ou não for JSON válido
    """
    if not request.body:
        raise ValueError('O corpo da requisição não pode ser vazio.')
    try:
        return json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f'JSON inválido: {e}') from e


def reference_date_from(request):
    """
    Data de referência opcional (?data_referencia=AAAA-MM-DD).

    Raises:
        ValueError: Se a data for inválida
    """
    value = request.GET.get('data_referencia')
    return to_date(parse_date(value)) if value else None


def api_view(methods):
    """
    Decorator para endpoints da API.

    - Rejeita métodos não listados com 405
    - ValueError (validação) vira 400
    - Chave duplicada no MongoDB vira 400
    - Qualquer outro erro vira 500 e é logado com stacktrace

    Exemplo de uso:
        @api_view(['GET', 'POST'])
        def bancos_view(request):
            ...
    """
    def decorator(view_func):
        @csrf_exempt
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if request.method not in methods:
                return error_response('Método não permitido', 405)

            try:
                return view_func(request, *args, **kwargs)
            except ValueError as e:
                return error_response(str(e), 400)
            except DuplicateKeyError as e:
                logger.warning(f"[API] Chave duplicada em {request.path}: {e}")
                return error_response('Já existe um registro com esse código.', 400)
            except PyMongoError as e:
                logger.error(f"[API] Erro no MongoDB em {request.method} {request.path}: {e}", exc_info=True)
                return error_response(f'Erro ao acessar o banco de dados: {e}', 500)
            except Exception as e:
                logger.error(f"[API] Erro inesperado em {request.method} {request.path}: {e}", exc_info=True)
                return error_response(f'Erro interno: {e}', 500)
        return wrapper
    return decorator
