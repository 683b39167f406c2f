"""
Rotas de Planos de Aula - Portal Pedagógico Angola
==================================================

Responsável por:
- Histórico de planos do professor
- Guardar, editar e apagar planos
- Desconto de créditos (planos consumidos)
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.plan import PlanHistory, detach_plan_references
from models.user import User
from utils.decorators import approved_user_required, owner_or_admin_required, resolve_user_id, check_owner
from utils.helpers import get_payload, dump_metadata

logger = logging.getLogger(__name__)

# Criar blueprint para rotas de planos
plans = Blueprint('plans', __name__)


@plans.route('/plans/history/<int:user_id>')
@owner_or_admin_required
def history(user_id):
    """Planos do professor, mais recentes primeiro"""
    items = (PlanHistory.query
             .filter_by(user_id=user_id)
             .order_by(PlanHistory.created_at.desc(), PlanHistory.id.desc())
             .all())
    return jsonify([item.to_dict() for item in items])


@plans.route('/plans/save', methods=['POST'])
@approved_user_required
def save():
    data = get_payload()
    user_id = resolve_user_id(data.get('userId'))

    if not data.get('content'):
        return jsonify({'error': 'Conteúdo do plano é obrigatório'}), 400

    try:
        plan = PlanHistory(user_id=user_id, content=data['content'],
                           plan_metadata=dump_metadata(data.get('metadata')))
        db.session.add(plan)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao salvar histórico do plano")
        return jsonify({'error': 'Não foi possível salvar o histórico do plano.'}), 500

    return jsonify({'success': True, 'id': plan.id})


@plans.route('/plans/update', methods=['POST'])
@approved_user_required
def update():
    data = get_payload()
    plan = check_owner(db.session.get(PlanHistory, data.get('id') or 0))

    if not data.get('content'):
        return jsonify({'error': 'Conteúdo do plano é obrigatório'}), 400

    try:
        plan.content = data['content']
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao atualizar plano %s", plan.id)
        return jsonify({'error': 'Erro ao atualizar plano'}), 500

    return jsonify({'success': True})


@plans.route('/plans/<int:plan_id>', methods=['DELETE'])
@approved_user_required
def delete(plan_id):
    plan = check_owner(db.session.get(PlanHistory, plan_id))
    detach_plan_references([plan.id])
    db.session.delete(plan)
    db.session.commit()
    return jsonify({'success': True})


@plans.route('/users/update-credits', methods=['POST'])
@approved_user_required
def update_credits():
    """Desconta um plano gerado (administradores não consomem)"""
    data = get_payload()
    user = db.session.get(User, resolve_user_id(data.get('userId')))
    if not user:
        return jsonify({'error': 'Usuário não encontrado'}), 404

    try:
        user.consume_plan()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao atualizar créditos de %s", user.id)
        return jsonify({'error': 'Não foi possível atualizar os créditos.'}), 500

    return jsonify({'success': True, 'planos_consumidos': user.planos_consumidos})
