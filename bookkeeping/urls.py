"""
URL configuration for bookkeeping project.

Estrutura de URLs:
- /api/ - Endpoints da API (delegado para apps)
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('api.urls')),  # URLs da API
]
