"""
Utilitários do Portal Pedagógico Angola
=======================================

Este módulo contém funções auxiliares e decoradores:
- decorators: Controle de permissões para rotas
- helpers: Validação, datas, senhas temporárias, imagens
- ai, library, docx_export, drive, mailer: Integrações externas
- seed, maintenance: Dados iniciais e limpeza diária
"""

from .decorators import (
    admin_required,
    approved_user_required,
    owner_or_admin_required,
    check_user_permissions,
    resolve_user_id,
    check_owner
)

from .helpers import (
    get_payload,
    validate_email,
    validate_phone,
    validate_password,
    generate_temp_password,
    parse_datetime,
    normalize_logo
)

# Lista de todas as funções disponíveis para import
__all__ = [
    # Decoradores de permissão
    'admin_required',
    'approved_user_required',
    'owner_or_admin_required',
    'check_user_permissions',
    'resolve_user_id',
    'check_owner',

    # Funções auxiliares
    'get_payload',
    'validate_email',
    'validate_phone',
    'validate_password',
    'generate_temp_password',
    'parse_datetime',
    'normalize_logo'
]

# Versão do módulo
__version__ = '1.0.0'
