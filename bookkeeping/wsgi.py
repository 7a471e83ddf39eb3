"""
WSGI config do projeto bookkeeping.

Expõe a variável ``application`` usada pelos servidores WSGI.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'bookkeeping.settings')

application = get_wsgi_application()
