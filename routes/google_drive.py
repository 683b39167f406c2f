"""
Rotas do Google Drive - Portal Pedagógico Angola
================================================

Responsável por:
- URL de consentimento OAuth
- Página de callback que devolve o código à janela do SPA
- Upload do plano em Markdown
"""

import logging

from flask import Blueprint, jsonify, request, render_template_string

from utils import drive
from utils.decorators import approved_user_required
from utils.helpers import get_payload

logger = logging.getLogger(__name__)

CALLBACK_PAGE = """<html>
  <body>
    <script>
      if (window.opener) {
        window.opener.postMessage({ type: 'GOOGLE_AUTH_SUCCESS', code: {{ code|tojson }} }, '*');
        window.close();
      }
    </script>
    <p>Autenticação concluída. Pode fechar esta janela.</p>
  </body>
</html>"""

# Criar blueprint para rotas do Google Drive
google_drive = Blueprint('google_drive', __name__)


@google_drive.route('/api/auth/google/url')
@approved_user_required
def auth_url():
    return jsonify({'url': drive.build_auth_url()})


@google_drive.route('/auth/google/callback')
def callback():
    return render_template_string(CALLBACK_PAGE, code=request.args.get('code', ''))


@google_drive.route('/api/google/upload', methods=['POST'])
@approved_user_required
def upload():
    data = get_payload()
    if not data.get('code') or not data.get('title'):
        return jsonify({'error': 'Código de autorização e título são obrigatórios'}), 400

    try:
        token = drive.exchange_code(data['code'])
        file_id = drive.upload_markdown(token, data['title'], data.get('content', ''))
    except drive.DriveUploadError:
        logger.exception("Erro ao enviar para o Google Drive")
        return jsonify({'error': 'Erro ao enviar para o Google Drive'}), 500

    return jsonify({'success': True, 'fileId': file_id})
