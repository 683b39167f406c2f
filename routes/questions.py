"""
Rotas do Banco de Questões - Portal Pedagógico Angola
=====================================================

Responsável por:
- Listar os conjuntos de questões do professor
- Guardar questões geradas ou escritas pelo professor
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.question_bank import QuestionBankEntry
from utils.decorators import approved_user_required, owner_or_admin_required, resolve_user_id
from utils.helpers import get_payload

logger = logging.getLogger(__name__)

# Criar blueprint para rotas do banco de questões
questions = Blueprint('questions', __name__)


@questions.route('/<int:user_id>')
@owner_or_admin_required
def list_questions(user_id):
    items = (QuestionBankEntry.query
             .filter_by(user_id=user_id)
             .order_by(QuestionBankEntry.created_at.desc(), QuestionBankEntry.id.desc())
             .all())
    return jsonify([item.to_dict() for item in items])


@questions.route('/save', methods=['POST'])
@approved_user_required
def save():
    data = get_payload()
    user_id = resolve_user_id(data.get('userId'))

    if not data.get('content'):
        return jsonify({'error': 'Conteúdo das questões é obrigatório'}), 400

    try:
        entry = QuestionBankEntry(
            user_id=user_id,
            subject=data.get('subject'),
            classe=data.get('classe'),
            content=data['content']
        )
        db.session.add(entry)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao salvar questões")
        return jsonify({'error': 'Erro ao salvar questões'}), 500

    return jsonify({'success': True, 'id': entry.id})
