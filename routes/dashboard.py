"""
Rotas Principais - Portal Pedagógico Angola
===========================================

- Verificação de saúde da API
- Entrega do SPA compilado (quando FRONTEND_DIST existe)
"""

import os
from datetime import datetime

from flask import Blueprint, jsonify, current_app, send_from_directory, abort, request

# Criar blueprint para rotas principais
dashboard = Blueprint('dashboard', __name__)

# Pedidos /api/* sem rota caem aqui e recebem 404 em JSON
ANY_METHOD = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']

NO_CACHE_HEADERS = {
    'Cache-Control': 'no-cache, no-store, must-revalidate',
    'Pragma': 'no-cache',
    'Expires': '0',
}


@dashboard.route('/api/health')
def health():
    return jsonify({'status': 'ok', 'time': datetime.utcnow().isoformat() + 'Z'})


@dashboard.route('/', defaults={'path': ''})
@dashboard.route('/<path:path>', methods=ANY_METHOD)
def spa(path):
    """Arquivos estáticos do SPA; rotas desconhecidas devolvem index.html"""
    dist = current_app.config.get('FRONTEND_DIST')
    if path.startswith('api/') or not dist or not os.path.isdir(dist):
        abort(404)
    if request.method != 'GET':
        abort(405)

    if path and os.path.isfile(os.path.join(dist, path)):
        return send_from_directory(dist, path)

    response = send_from_directory(dist, 'index.html')
    response.headers.update(NO_CACHE_HEADERS)
    return response
