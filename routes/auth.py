"""
Rotas de Autenticação - Portal Pedagógico Angola
================================================

Responsável por:
- Login com e-mail ou telefone
- Registro com aprovação pendente
- Pedido de acesso por e-mail ao administrador
- Recuperação de senha (senha temporária entregue pelo suporte)
- Logout e dados do usuário logado
"""

import logging

from flask import Blueprint, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import IntegrityError

from extensions import db
from models.user import User, STATUS_PENDENTE
from utils.helpers import get_payload, validate_email, validate_phone, validate_password, generate_temp_password
from utils.mailer import send_admin_notification, send_mail, is_configured, get_smtp_settings, MailError

logger = logging.getLogger(__name__)

# Criar blueprint para rotas de autenticação
auth = Blueprint('auth', __name__)


def find_by_identifier(identifier):
    """Busca usuário pelo e-mail ou telefone"""
    identifier = (identifier or '').strip()
    if not identifier:
        return None
    return User.query.filter(
        (User.email == identifier.lower()) | (User.telefone == identifier)
    ).first()


def _access_request_text(data):
    return (
        "Novo pedido de acesso ao Portal Pedagógico Angola:\n\n"
        f"Nome: {data.get('professor_nome') or ''}\n"
        f"Escola: {data.get('escola') or ''}\n"
        f"Província: {data.get('provincia') or ''}\n"
        f"Município: {data.get('municipio') or ''}\n"
        f"E-mail: {data.get('email') or 'N/A'}\n"
        f"Telefone: {data.get('telefone') or 'N/A'}\n\n"
        "Por favor, revise o pedido no painel administrativo."
    )


@auth.route('/login', methods=['POST'])
def login():
    """Login com identificador (e-mail ou telefone) e senha"""
    data = get_payload()
    user = find_by_identifier(data.get('identifier'))

    if not user or not user.check_password(data.get('password')):
        return jsonify({'error': 'Credenciais inválidas'}), 401

    if not user.is_admin:
        if user.is_expired():
            return jsonify({'error': 'Sua assinatura expirou. Por favor, renove seu plano.'}), 403
        if user.is_pending:
            return jsonify({'error': 'Sua conta ainda não foi aprovada. Aguarde a aprovação de um administrador.'}), 403
        if user.is_suspended:
            return jsonify({'error': 'Sua conta está suspensa. Contacte o suporte.'}), 403

    login_user(user, remember=bool(data.get('remember')))
    logger.info("Login: %s", user.display_name)
    return jsonify({'user': user.to_dict()})


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})


@auth.route('/me')
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})


@auth.route('/register', methods=['POST'])
def register():
    """Registro de professor (fica Pendente até aprovação)"""
    data = get_payload()
    email = (data.get('email') or '').strip().lower() or None
    telefone = (data.get('telefone') or '').strip() or None
    password = data.get('password') or ''

    # Lista de erros
    errors = []

    if not email and not telefone:
        errors.append('Informe um e-mail ou um telefone.')
    if email and not validate_email(email):
        errors.append('Formato de email inválido.')
    if telefone and not validate_phone(telefone):
        errors.append('Formato de telefone inválido.')

    is_valid, password_message = validate_password(password)
    if not is_valid:
        errors.append(password_message)

    if errors:
        return jsonify({'error': ' '.join(errors), 'errors': errors}), 400

    if find_by_identifier(email) or find_by_identifier(telefone):
        return jsonify({'error': 'E-mail ou Telefone já cadastrado'}), 400

    new_user = User(
        email=email,
        telefone=telefone,
        status=STATUS_PENDENTE,
        escola=data.get('escola'),
        professor_nome=data.get('professor_nome'),
        provincia=data.get('provincia'),
        municipio=data.get('municipio')
    )
    new_user.set_password(password)

    try:
        db.session.add(new_user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'error': 'E-mail ou Telefone já cadastrado'}), 400

    send_admin_notification(
        f"Novo Registo Pendente: {new_user.display_name}",
        _access_request_text(data)
    )
    return jsonify({'id': new_user.id})


@auth.route('/request-email', methods=['POST'])
def request_email():
    """Envia ao administrador um pedido de acesso"""
    data = get_payload()
    subject = f"Novo Pedido de Acesso: {data.get('professor_nome') or ''}"
    text = _access_request_text(data)

    smtp = get_smtp_settings()
    if not is_configured(smtp):
        logger.info("SMTP não configurado, pedido de acesso registrado no log:\n%s", text)
        return jsonify({'success': True, 'message': 'Pedido registrado (Modo Simulação - SMTP não configurado)'})

    try:
        send_mail(subject, text, smtp=smtp)
    except MailError:
        logger.exception("Erro ao enviar pedido de acesso")
        return jsonify({'error': 'Erro ao enviar e-mail. Verifique as configurações SMTP ou tente WhatsApp/SMS.'}), 500

    return jsonify({'success': True})


@auth.route('/forgot-password', methods=['POST'])
def forgot_password():
    """Gera senha temporária; o suporte entrega-a ao professor"""
    data = get_payload()
    user = find_by_identifier(data.get('identifier'))

    if not user:
        return jsonify({'error': 'Usuário não encontrado'}), 404

    temp_password = generate_temp_password()
    user.set_password(temp_password)
    db.session.commit()

    send_admin_notification(
        f"Recuperação de Senha: {user.display_name}",
        f"Usuário: {user.display_name}\n"
        f"E-mail: {user.email or 'N/A'}\n"
        f"Telefone: {user.telefone or 'N/A'}\n\n"
        f"Senha temporária: {temp_password}"
    )

    return jsonify({
        'success': True,
        'message': 'Uma nova senha foi gerada. Entre em contato com o suporte para recebê-la.'
    })
