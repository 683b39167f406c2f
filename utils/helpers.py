"""
Funções Auxiliares - Portal Pedagógico Angola
=============================================

Funções utilitárias para:
- Validação de dados de registo
- Conversão de datas vindas do SPA
- Senhas temporárias
- Normalização de imagens (logotipo)
- Leitura de JSON dos pedidos
"""

import base64
import binascii
import io
import json
import re
import secrets
import string
from datetime import datetime, timezone

from flask import request
from PIL import Image, UnidentifiedImageError

MAX_LOGO_SIZE = (512, 512)
TEMP_PASSWORD_LENGTH = 8
_DATA_URL_RE = re.compile(r'^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$', re.DOTALL)


def get_payload():
    """Corpo JSON do pedido (dicionário vazio se ausente ou inválido)"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def validate_email(email):
    """
    Valida formato de email

    Args:
        email (str): Email para validar

    Returns:
        bool: True se válido, False caso contrário
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return re.match(pattern, email) is not None


def validate_phone(phone):
    """Telefone com dígitos, espaços, hífens, parênteses ou +"""
    if not phone:
        return False
    digits = re.sub(r'\D', '', phone)
    return bool(re.match(r'^[\d\s\-\(\)\+]+$', phone)) and len(digits) >= 9


def validate_password(password):
    """
    Valida força da senha

    Args:
        password (str): Senha para validar

    Returns:
        tuple: (bool, str) - (é_válida, mensagem)
    """
    if not password:
        return False, "Senha é obrigatória"

    if len(password) < 6:
        return False, "Senha deve ter pelo menos 6 caracteres"

    if len(password) > 128:
        return False, "Senha muito longa"

    return True, "Senha válida"


def generate_temp_password(length=TEMP_PASSWORD_LENGTH):
    """Senha temporária com letras minúsculas e dígitos"""
    alphabet = string.ascii_lowercase + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(length))


def parse_datetime(value, end_of_day=False):
    """
    Converte texto ISO 8601 em datetime UTC sem fuso

    Args:
        value (str): '2026-12-31' ou '2026-12-31T10:00:00Z'
        end_of_day (bool): datas sem hora passam a 23:59:59

    Returns:
        datetime ou None se vazio

    Raises:
        ValueError: formato inválido
    """
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        date_only = len(text) == 10
        parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
        if date_only and end_of_day:
            parsed = parsed.replace(hour=23, minute=59, second=59)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_optional_int(value):
    """Inteiro opcional ('' ou None = sem limite)"""
    if value in (None, ''):
        return None
    return int(value)


def dump_metadata(value):
    """Metadados do plano guardados como texto JSON"""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def normalize_logo(data_url):
    """
    Valida e reduz uma imagem enviada como data URL base64

    Args:
        data_url (str): 'data:image/png;base64,...'

    Returns:
        str: data URL PNG com no máximo MAX_LOGO_SIZE

    Raises:
        ValueError: conteúdo que não é uma imagem válida
    """
    match = _DATA_URL_RE.match(data_url or '')
    if not match:
        raise ValueError('Formato de imagem inválido')

    try:
        raw = base64.b64decode(match.group('data'), validate=True)
    except (binascii.Error, ValueError):
        raise ValueError('Imagem em base64 inválida')

    try:
        with Image.open(io.BytesIO(raw)) as img:
            if img.mode not in ('RGB', 'RGBA'):
                img = img.convert('RGBA')
            img.thumbnail(MAX_LOGO_SIZE, Image.Resampling.LANCZOS)
            output = io.BytesIO()
            img.save(output, 'PNG', optimize=True)
    except Image.DecompressionBombError:
        raise ValueError('Imagem grande demais')
    except (UnidentifiedImageError, OSError):
        raise ValueError('O arquivo enviado não é uma imagem')

    encoded = base64.b64encode(output.getvalue()).decode('ascii')
    return f'data:image/png;base64,{encoded}'


def format_datetime(dt, format_type='full'):
    """
    Formata data/hora para exibição (e-mails e mensagens)

    Args:
        dt (datetime): Data/hora
        format_type (str): 'full', 'date'

    Returns:
        str: Data formatada
    """
    if not dt:
        return 'Data não informada'

    if format_type == 'date':
        return dt.strftime('%d/%m/%Y')
    return dt.strftime('%d/%m/%Y às %H:%M')
