"""
Rotas de Administração - Portal Pedagógico Angola
=================================================

Responsável por:
- Listagem de professores
- Ativação, suspensão, pacote de planos e validade da assinatura
- Remoção de contas
"""

import logging
from datetime import datetime

from flask import Blueprint, jsonify
from flask_login import current_user

from extensions import db
from models.user import User, USER_STATUSES, STATUS_ATIVO
from utils.decorators import admin_required
from utils.helpers import (
    get_payload, parse_datetime, parse_optional_int, format_datetime
)
from utils.mailer import send_mail, is_configured, MailError

logger = logging.getLogger(__name__)

# Criar blueprint para rotas de administração
admin = Blueprint('admin', __name__)


def activation_message(user, temp_password=None):
    """Mensagem enviada ao professor quando o acesso é aprovado"""
    message = "Acesso permitido. Bem-vindo(a) ao Portal Pedagógico Angola (PPA)."
    if temp_password:
        message += f" A sua Senha é {temp_password}"
    else:
        message += " Utilize a senha definida no registo."
    if user.data_expiracao:
        message += f" Acesso válido até {format_datetime(user.data_expiracao, 'date')}."
    return message


@admin.route('/users')
@admin_required
def list_users():
    """Professores, pendentes primeiro e depois os mais recentes"""
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    users.sort(key=lambda u: not u.is_pending)
    return jsonify([u.to_dict() for u in users])


@admin.route('/update-user', methods=['POST'])
@admin_required
def update_user():
    data = get_payload()
    user = db.session.get(User, data.get('id') or 0)
    if not user:
        return jsonify({'error': 'Usuário não encontrado'}), 404

    status = data.get('status', user.status)
    if status not in USER_STATUSES:
        return jsonify({'error': 'Estado inválido'}), 400

    try:
        if 'data_expiracao' in data:
            user.data_expiracao = parse_datetime(data['data_expiracao'], end_of_day=True)
        if 'limite_planos' in data:
            user.limite_planos = parse_optional_int(data['limite_planos'])
    except (TypeError, ValueError):
        return jsonify({'error': 'Data de expiração ou limite de planos inválido'}), 400

    if 'plano_tipo' in data:
        user.plano_tipo = data['plano_tipo']

    was_pending = user.is_pending
    temp_password = None
    if status == STATUS_ATIVO:
        temp_password = user.activate()
    else:
        user.status = status
    user.data_ativacao = datetime.utcnow()

    message = None
    if temp_password or (was_pending and status == STATUS_ATIVO):
        message = activation_message(user, temp_password)

    db.session.commit()

    if message and user.email and is_configured():
        try:
            send_mail("Acesso aprovado - Portal Pedagógico Angola", message, to=user.email)
        except MailError:
            logger.exception("Não foi possível enviar a mensagem de ativação a %s", user.email)

    logger.info("Conta %s atualizada: estado=%s", user.display_name, user.status)
    return jsonify({'success': True, 'activationMessage': message, 'user': user.to_dict()})


@admin.route('/users/<int:user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({'error': 'Usuário não encontrado'}), 404

    if user.id == current_user.id:
        return jsonify({'error': 'Não é possível apagar a própria conta.'}), 400

    db.session.delete(user)
    db.session.commit()
    logger.info("Conta removida: %s", user.display_name)
    return jsonify({'success': True})
