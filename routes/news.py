"""
Rotas de Notícias e Feedback - Portal Pedagógico Angola
=======================================================

Responsável por:
- Mural de notícias (público) e publicação/remoção (administrador)
- Envio de opiniões, críticas e reclamações
- Painel de feedback do administrador
"""

import logging

from flask import Blueprint, jsonify
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.news import News, Feedback, DEFAULT_NEWS_SOURCE, FEEDBACK_TYPES, NEWS_CATEGORIES
from utils.decorators import admin_required, approved_user_required, resolve_user_id
from utils.helpers import get_payload
from utils.mailer import send_admin_notification

logger = logging.getLogger(__name__)

# Criar blueprint para rotas de notícias
news = Blueprint('news', __name__)


@news.route('/news')
def list_news():
    """Notícias ainda válidas, mais recentes primeiro"""
    return jsonify([item.to_dict() for item in News.active().all()])


@news.route('/admin/news', methods=['POST'])
@admin_required
def create_news():
    data = get_payload()
    title = (data.get('title') or '').strip()

    if not title or not data.get('content'):
        return jsonify({'error': 'Título e conteúdo são obrigatórios'}), 400

    try:
        expires_at = News.expiry_from_days(data.get('expires_in_days'))
    except (TypeError, ValueError, OverflowError):
        return jsonify({'error': 'Validade inválida'}), 400

    category = data.get('category') or None
    if category and category not in NEWS_CATEGORIES:
        return jsonify({'error': f"Categoria inválida. Use: {', '.join(NEWS_CATEGORIES)}"}), 400

    try:
        item = News(
            title=title,
            content=data['content'],
            category=category,
            source=data.get('source') or DEFAULT_NEWS_SOURCE,
            expires_at=expires_at
        )
        db.session.add(item)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao publicar notícia")
        return jsonify({'error': 'Erro ao publicar notícia'}), 500

    return jsonify({'success': True, 'id': item.id})


@news.route('/admin/news/<int:news_id>', methods=['DELETE'])
@admin_required
def delete_news(news_id):
    item = db.session.get(News, news_id)
    if item:
        db.session.delete(item)
        db.session.commit()
    return jsonify({'success': True})


# ================================
# FEEDBACK
# ================================

@news.route('/feedback', methods=['POST'])
@approved_user_required
def send_feedback():
    """Regista o feedback e avisa o administrador"""
    data = get_payload()
    user_id = resolve_user_id(data.get('userId'))
    content = (data.get('content') or '').strip()
    feedback_type = (data.get('type') or '').strip().lower()

    if not content:
        return jsonify({'error': 'Escreva a sua mensagem'}), 400
    if feedback_type not in FEEDBACK_TYPES:
        return jsonify({'error': 'Tipo de feedback inválido'}), 400

    try:
        item = Feedback(user_id=user_id, content=content, type=feedback_type)
        db.session.add(item)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao enviar feedback")
        return jsonify({'error': 'Erro ao enviar feedback'}), 500

    author = item.author or current_user
    send_admin_notification(
        f"Novo Feedback Recebido: {feedback_type.upper()}",
        f"Usuário: {author.display_name}\nTipo: {feedback_type}\n\nConteúdo:\n{content}"
    )
    return jsonify({'success': True})


@news.route('/admin/feedback')
@admin_required
def list_feedback():
    items = Feedback.query.order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()
    return jsonify([item.to_dict() for item in items])


@news.route('/admin/feedback/resolve', methods=['POST'])
@admin_required
def resolve_feedback():
    data = get_payload()
    item = db.session.get(Feedback, data.get('id') or 0)
    if not item:
        return jsonify({'error': 'Feedback não encontrado'}), 404

    item.resolve()
    db.session.commit()
    return jsonify({'success': True})
