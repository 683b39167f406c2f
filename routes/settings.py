"""
Rotas de Configurações - Portal Pedagógico Angola
=================================================

Responsável por:
- Configurações públicas e logotipo do portal
- Dados padrão do plano e servidor SMTP (administrador)
"""

from flask import Blueprint, jsonify

from extensions import db
from models.setting import Setting
from utils.decorators import admin_required
from utils.helpers import get_payload, normalize_logo

# Campo do pedido → chave na tabela settings
SETTINGS_FIELDS = {
    'escola': 'default_escola',
    'professor': 'default_professor',
    'provincia': 'default_provincia',
    'municipio': 'default_municipio',
    'smtp_host': 'smtp_host',
    'smtp_port': 'smtp_port',
    'smtp_user': 'smtp_user',
    'smtp_pass': 'smtp_pass',
    'admin_email': 'admin_email',
}


def valid_port(value):
    """Porta vazia (usa o padrão) ou inteiro entre 1 e 65535"""
    if value in (None, ''):
        return True
    if isinstance(value, bool):
        return False

    try:
        port = int(str(value).strip())
    except ValueError:
        return False
    return 1 <= port <= 65535


# Criar blueprint para rotas de configurações
settings = Blueprint('settings', __name__)


@settings.route('/settings')
def get_settings():
    return jsonify(Setting.public())


@settings.route('/settings/logo')
def get_logo():
    return jsonify({'logo': Setting.get_value('logo')})


@settings.route('/admin/upload-logo', methods=['POST'])
@admin_required
def upload_logo():
    data = get_payload()
    try:
        logo = normalize_logo(data.get('logo'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    Setting.set_value('logo', logo)
    db.session.commit()
    return jsonify({'success': True, 'logo': logo})


@settings.route('/admin/update-settings', methods=['POST'])
@admin_required
def update_settings():
    """Grava apenas os campos presentes no pedido"""
    data = get_payload()

    if not valid_port(data.get('smtp_port')):
        return jsonify({'error': 'Porta SMTP inválida (use um número entre 1 e 65535)'}), 400

    for field, key in SETTINGS_FIELDS.items():
        if field in data and data[field] is not None:
            Setting.set_value(key, str(data[field]))

    if 'smtp_secure' in data:
        Setting.set_value('smtp_secure', 'true' if data['smtp_secure'] in (True, 'true', 1, '1') else 'false')

    db.session.commit()
    return jsonify({'success': True})
