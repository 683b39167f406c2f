"""
Notificações por E-mail - Portal Pedagógico Angola
==================================================

Envio de e-mails ao administrador via SMTP. As configurações guardadas
no painel (tabela settings) têm prioridade sobre as variáveis de ambiente.
Sem usuário/senha SMTP as mensagens são apenas registradas no log.
"""

import logging
import smtplib
from email.mime.text import MIMEText

from flask import current_app

from models.setting import Setting

logger = logging.getLogger(__name__)

SMTP_KEYS = ('smtp_host', 'smtp_port', 'smtp_secure', 'smtp_user', 'smtp_pass', 'admin_email')
DEFAULT_SMTP_PORT = 587


class MailError(Exception):
    """Falha ao entregar um e-mail"""


def parse_smtp_port(value):
    """Porta SMTP válida (1-65535) ou a porta padrão, registrando valores inválidos"""
    if value in (None, ''):
        return DEFAULT_SMTP_PORT

    try:
        port = int(str(value).strip())
    except ValueError:
        port = 0

    if not 1 <= port <= 65535:
        logger.warning("Porta SMTP inválida (%r), usando %s", value, DEFAULT_SMTP_PORT)
        return DEFAULT_SMTP_PORT
    return port


def get_smtp_settings():
    """
    Junta configurações SMTP do banco e do app.config

    Returns:
        dict: host, port, secure, user, password, admin_email
    """
    stored = {key: value for key, value in Setting.get_all().items() if key in SMTP_KEYS and value}
    config = current_app.config

    user = stored.get('smtp_user') or config.get('SMTP_USER')
    secure = stored.get('smtp_secure')
    if secure is None:
        secure = config.get('SMTP_SECURE', False)
    else:
        secure = secure == 'true'

    return {
        'host': stored.get('smtp_host') or config.get('SMTP_HOST'),
        'port': parse_smtp_port(stored.get('smtp_port') or config.get('SMTP_PORT')),
        'secure': bool(secure),
        'user': user,
        'password': stored.get('smtp_pass') or config.get('SMTP_PASS'),
        'admin_email': stored.get('admin_email') or config.get('ADMIN_EMAIL') or user,
    }


def is_configured(smtp=None):
    smtp = smtp or get_smtp_settings()
    return bool(smtp['user'] and smtp['password'])


def send_mail(subject, body, to=None, smtp=None):
    """
    Envia e-mail de texto simples

    Args:
        subject (str): Assunto
        body (str): Corpo da mensagem
        to (str): Destinatário (padrão: e-mail do administrador)

    Raises:
        MailError: SMTP não configurado ou falha no envio
    """
    smtp = smtp or get_smtp_settings()
    if not is_configured(smtp):
        raise MailError('SMTP não configurado')

    message = MIMEText(body, 'plain', 'utf-8')
    message['Subject'] = subject
    message['From'] = smtp['user']
    message['To'] = to or smtp['admin_email']

    try:
        if smtp['secure']:
            server = smtplib.SMTP_SSL(smtp['host'], smtp['port'], timeout=20)
        else:
            server = smtplib.SMTP(smtp['host'], smtp['port'], timeout=20)
        with server:
            if not smtp['secure']:
                server.starttls()
            server.login(smtp['user'], smtp['password'])
            server.send_message(message)
    except (smtplib.SMTPException, OSError) as e:
        raise MailError(str(e)) from e


def send_admin_notification(subject, text):
    """
    Notifica o administrador (melhor esforço, nunca levanta exceção)

    Returns:
        bool: True se o e-mail foi entregue ao servidor SMTP
    """
    smtp = get_smtp_settings()
    if not is_configured(smtp):
        logger.info("SMTP não configurado, notificação registrada no log:\nAssunto: %s\n%s", subject, text)
        return False

    try:
        send_mail(subject, text, smtp=smtp)
        return True
    except MailError:
        logger.exception("Erro ao enviar notificação ao administrador")
        return False
