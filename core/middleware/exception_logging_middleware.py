"""
Middleware para capturar e logar exceções não tratadas.

Localização: core/middleware/exception_logging_middleware.py

Este middleware registra no log exceções que escaparam das views e, para
rotas da API, responde com JSON em vez da página de erro do Django.
"""
import logging

from django.http import JsonResponse

logger = logging.getLogger(__name__)


class ExceptionLoggingMiddleware:
    """
    Middleware para capturar exceções não tratadas e logá-las.

    Deve ser adicionado após outros middlewares para capturar exceções.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        return response

    def process_exception(self, request, exception):
        """
        Processa exceções não tratadas.

        Args:
            request: Request object
            exception: Exception capturada

        Returns:
            JsonResponse 500 para /api/, None nas demais rotas
            (deixa Django tratar a exceção normalmente)
        """
        logger.error(
            f"[EXCEPTION] {type(exception).__name__} em {request.method} {request.path}: {exception}",
            exc_info=(type(exception), exception, exception.__traceback__)
        )

        if request.path.startswith('/api/'):
            return JsonResponse(
                {'success': False, 'message': f'Erro interno: {exception}'},
                status=500,
                json_dumps_params={'ensure_ascii': False}
            )
        return None
