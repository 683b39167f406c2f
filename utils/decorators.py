"""
Decoradores de Permissão - Portal Pedagógico Angola
===================================================

Decoradores para controlar acesso às rotas da API:
- admin_required: Apenas administradores
- approved_user_required: Usuários ativos (qualquer tipo)
- owner_or_admin_required: O próprio professor ativo (user_id da rota) ou administrador

Todas as recusas respondem JSON ({'error': ...}) com 401 ou 403.
"""

from functools import wraps
from flask import jsonify, abort
from flask_login import current_user


def _denied(message, status):
    return jsonify({'error': message}), status


def _account_refusal():
    """Resposta 403 para conta pendente, suspensa ou expirada (None se pode continuar)"""
    if current_user.is_admin:
        return None

    if current_user.is_pending:
        return _denied('Sua conta ainda não foi aprovada. Aguarde a aprovação de um administrador.', 403)
    if current_user.is_suspended:
        return _denied('Sua conta está suspensa. Contacte o suporte.', 403)
    if current_user.is_expired():
        return _denied('Sua assinatura expirou. Por favor, renove seu plano.', 403)
    return None


def admin_required(f):
    """
    Decorador que exige usuário administrador
    Uso: @admin_required
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return _denied('Você precisa fazer login para acessar este recurso.', 401)

        if not current_user.is_admin:
            return _denied('Acesso negado. Esta área é restrita a administradores.', 403)

        return f(*args, **kwargs)

    return decorated_function


def approved_user_required(f):
    """
    Decorador que exige conta ativa (administradores passam sempre)
    Uso: @approved_user_required
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return _denied('Você precisa fazer login para acessar este recurso.', 401)

        refused = _account_refusal()
        if refused:
            return refused

        return f(*args, **kwargs)

    return decorated_function


def owner_or_admin_required(f):
    """
    Decorador que exige que o user_id da rota seja o do usuário logado
    Uso: @owner_or_admin_required (a função deve receber user_id)
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return _denied('Você precisa fazer login para acessar este recurso.', 401)

        user_id = kwargs.get('user_id')
        if user_id is None:
            abort(404)

        if not check_user_permissions(user_id):
            return _denied('Você não tem permissão para acessar dados de outro professor.', 403)

        refused = _account_refusal()
        if refused:
            return refused

        return f(*args, **kwargs)

    return decorated_function


def check_user_permissions(user_id):
    """
    Verifica se o usuário logado pode agir sobre os dados de user_id

    Args:
        user_id: Id do professor dono dos dados

    Returns:
        bool: True se é o próprio professor ou administrador
    """
    if not current_user.is_authenticated:
        return False

    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        return False

    return current_user.is_admin or current_user.id == user_id


def resolve_user_id(value):
    """
    Resolve o userId enviado no corpo do pedido

    Sem valor usa o usuário logado; um id de outro professor só é aceito
    para administradores (senão aborta com 403).
    """
    if value in (None, ''):
        return current_user.id

    if not check_user_permissions(value):
        abort(403, description='Você não tem permissão para acessar dados de outro professor.')

    return int(value)


def check_owner(record):
    """Aborta com 404/403 se o registro não existe ou pertence a outro professor"""
    if record is None:
        abort(404, description='Registro não encontrado')

    if not check_user_permissions(record.user_id):
        abort(403, description='Você não tem permissão para alterar este registro.')

    return record
