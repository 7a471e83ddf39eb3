"""
Utilitários do core.

Localização: core/utils/

Funções auxiliares sem acesso a banco (datas, serialização).
"""
