"""
Integração com Google Drive - Portal Pedagógico Angola
======================================================

Fluxo OAuth simples: o SPA abre a URL de consentimento, recebe o código
na janela de callback e envia-o junto com o plano para upload em Markdown.
"""

import json
import logging
from urllib.parse import urlencode

import requests
from flask import current_app

logger = logging.getLogger(__name__)

AUTH_URL = 'https://accounts.google.com/o/oauth2/v2/auth'
TOKEN_URL = 'https://oauth2.googleapis.com/token'
UPLOAD_URL = 'https://www.googleapis.com/upload/drive/v3/files?uploadType=multipart'
DRIVE_SCOPE = 'https://www.googleapis.com/auth/drive.file'
REQUEST_TIMEOUT = 30


class DriveUploadError(Exception):
    """Falha na troca do código OAuth ou no upload"""


def redirect_uri():
    return f"{current_app.config.get('APP_URL', '').rstrip('/')}/auth/google/callback"


def build_auth_url():
    """URL da tela de consentimento Google (acesso offline ao drive.file)"""
    params = {
        'client_id': current_app.config.get('GOOGLE_CLIENT_ID') or '',
        'redirect_uri': redirect_uri(),
        'response_type': 'code',
        'scope': DRIVE_SCOPE,
        'access_type': 'offline',
        'prompt': 'consent',
    }
    return f'{AUTH_URL}?{urlencode(params)}'


def exchange_code(code):
    """
    Troca o código de autorização por um access token

    Raises:
        DriveUploadError: resposta sem access_token
    """
    try:
        response = requests.post(TOKEN_URL, data={
            'code': code,
            'client_id': current_app.config.get('GOOGLE_CLIENT_ID') or '',
            'client_secret': current_app.config.get('GOOGLE_CLIENT_SECRET') or '',
            'redirect_uri': redirect_uri(),
            'grant_type': 'authorization_code',
        }, timeout=REQUEST_TIMEOUT)
        tokens = response.json()
    except (requests.RequestException, ValueError) as e:
        raise DriveUploadError('Falha ao obter token') from e

    access_token = tokens.get('access_token') if isinstance(tokens, dict) else None
    if not access_token:
        raise DriveUploadError('Falha ao obter token')
    return access_token


def upload_markdown(access_token, title, content):
    """
    Envia o plano como '<title>.md' para o Drive do professor

    Returns:
        str: id do arquivo criado
    """
    metadata = {'name': f'{title}.md', 'mimeType': 'text/markdown'}
    files = {
        'metadata': (None, json.dumps(metadata), 'application/json; charset=UTF-8'),
        'file': (f'{title}.md', (content or '').encode('utf-8'), 'text/markdown'),
    }

    try:
        response = requests.post(
            UPLOAD_URL,
            headers={'Authorization': f'Bearer {access_token}'},
            files=files,
            timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise DriveUploadError('Erro ao enviar para o Google Drive') from e

    return data.get('id')
