"""
Rotas da Biblioteca - Portal Pedagógico Angola
==============================================

Responsável por:
- Listar a árvore de documentos
- Visualizar arquivos (base64) e extrair texto para a IA
- Upload, criação de pastas e remoção (administrador)
- Servir os arquivos brutos em /biblioteca
"""

import base64
import logging
import os

from flask import Blueprint, jsonify, request, send_from_directory, abort

from utils import library as lib
from utils.decorators import admin_required, approved_user_required
from utils.helpers import get_payload

logger = logging.getLogger(__name__)

# Criar blueprint para rotas da biblioteca
library = Blueprint('library', __name__)


@library.errorhandler(lib.LibraryPathError)
def handle_bad_path(error):
    return jsonify({'error': str(error)}), 400


def _existing_file(filepath):
    full_path = lib.resolve_library_path(filepath)
    if not os.path.isfile(full_path):
        return None
    return full_path


@library.route('/api/library/files')
@approved_user_required
def list_files():
    lib.ensure_library_structure()
    return jsonify(lib.list_tree())


@library.route('/api/library/view/<path:filepath>')
@approved_user_required
def view_file(filepath):
    full_path = _existing_file(filepath)
    if not full_path:
        return jsonify({'error': 'Arquivo não encontrado'}), 404

    with open(full_path, 'rb') as f:
        encoded = base64.b64encode(f.read()).decode('ascii')
    return jsonify({'base64': encoded})


@library.route('/api/library/extract-text/<path:filepath>')
@approved_user_required
def extract_text(filepath):
    full_path = _existing_file(filepath)
    if not full_path:
        return jsonify({'error': 'Arquivo não encontrado'}), 404

    try:
        text = lib.extract_text(full_path)
    except Exception:
        logger.exception("Erro ao extrair texto de %s", filepath)
        return jsonify({'error': 'Erro ao extrair texto do documento'}), 500

    return jsonify({'text': text})


@library.route('/biblioteca/<path:filepath>')
def serve_file(filepath):
    """Arquivos brutos da biblioteca (links diretos do SPA)"""
    full_path = _existing_file(filepath)
    if not full_path:
        abort(404)
    return send_from_directory(os.path.dirname(full_path), os.path.basename(full_path))


@library.route('/api/admin/library/upload', methods=['POST'])
@admin_required
def upload():
    file = request.files.get('file')
    if not file or not file.filename:
        return jsonify({'error': 'Nenhum arquivo enviado'}), 400

    path = lib.save_upload(file, request.form.get('folder', ''))
    logger.info("Arquivo adicionado à biblioteca: %s", path)
    return jsonify({'success': True, 'path': path})


@library.route('/api/admin/library/file', methods=['DELETE'])
@admin_required
def delete_file():
    data = get_payload()
    if not lib.delete_entry(data.get('filepath')):
        return jsonify({'error': 'Arquivo não encontrado'}), 404

    logger.info("Removido da biblioteca: %s", data.get('filepath'))
    return jsonify({'success': True})


@library.route('/api/admin/library/folder', methods=['POST'])
@admin_required
def create_folder():
    data = get_payload()
    if not (data.get('folderpath') or '').strip('/ '):
        return jsonify({'error': 'Informe o nome da pasta'}), 400

    if not lib.create_folder(data['folderpath']):
        return jsonify({'error': 'Pasta já existe'}), 400

    return jsonify({'success': True})
