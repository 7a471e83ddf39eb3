"""
Configurações do projeto bookkeeping.

Localização: bookkeeping/settings.py

Todas as configurações sensíveis vêm de variáveis de ambiente (.env).
O projeto não usa o ORM do Django: os dados ficam no MongoDB e são
acessados via repositories (core/database.py).
"""
import os
import urllib.parse
from pathlib import Path

from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv())

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'sim', 'on')


SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'dev-only-insecure-key')

DEBUG = _env_bool('DJANGO_DEBUG', False)

ALLOWED_HOSTS = [h.strip() for h in os.getenv('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h.strip()]

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',
    'core',
    'finance',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'core.middleware.ExceptionLoggingMiddleware',
]

ROOT_URLCONF = 'bookkeeping.urls'

WSGI_APPLICATION = 'bookkeeping.wsgi.application'

# Sem ORM: toda persistência é feita no MongoDB
DATABASES = {}

# ==================== MONGODB ====================

MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'financas')

MONGO_URI = os.getenv('MONGO_URI')
if not MONGO_URI:
    _mongo_user = os.getenv('MONGO_USER')
    _mongo_pass = os.getenv('MONGO_PASS')
    _mongo_host = os.getenv('MONGO_HOST', 'localhost:27017')
    if _mongo_user and _mongo_pass:
        MONGO_URI = "mongodb+srv://%s:%s@%s/?retryWrites=true&w=majority" % (
            urllib.parse.quote_plus(_mongo_user),
            urllib.parse.quote_plus(_mongo_pass),
            _mongo_host,
        )
    else:
        MONGO_URI = 'mongodb://%s/' % _mongo_host

MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', '5000'))

# ==================== REGRAS FINANCEIRAS ====================

# Receitas entram nos relatórios como lançamentos de entrada
FINANCE_INCLUDE_INCOMES_IN_REPORTS = _env_bool('FINANCE_INCLUDE_INCOMES_IN_REPORTS', False)

# Lançamentos pendentes com mais dias de atraso que isso são cancelados
FINANCE_CANCEL_AFTER_DAYS = int(os.getenv('FINANCE_CANCEL_AFTER_DAYS', '60'))

# Quantidade de itens nas listas resumidas (dashboard)
FINANCE_TOP_N = int(os.getenv('FINANCE_TOP_N', '5'))

# ==================== INTERNACIONALIZAÇÃO ====================

LANGUAGE_CODE = 'pt-br'

TIME_ZONE = os.getenv('TIME_ZONE', 'America/Sao_Paulo')

USE_I18N = True

USE_TZ = False

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ==================== LOGGING ====================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
        'pymongo': {
            'level': 'WARNING',
        },
    },
}
