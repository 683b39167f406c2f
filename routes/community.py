"""
Rotas da Comunidade - Portal Pedagógico Angola
==============================================

Responsável por:
- Repositório público de planos aprovados
- Partilha de planos (uma vez por plano) e gostos
- Moderação dos planos pendentes (administrador)
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.plan import (
    PlanHistory, CommunityPlan, COMMUNITY_APROVADO, COMMUNITY_PENDENTE, MODERATION_STATUSES
)
from utils.decorators import admin_required, approved_user_required, check_owner
from utils.helpers import get_payload

logger = logging.getLogger(__name__)

# Criar blueprint para rotas da comunidade
community = Blueprint('community', __name__)


@community.route('/community/plans')
@approved_user_required
def list_plans():
    items = (CommunityPlan.query
             .filter_by(status=COMMUNITY_APROVADO)
             .order_by(CommunityPlan.created_at.desc(), CommunityPlan.id.desc())
             .all())
    return jsonify([item.to_dict() for item in items])


@community.route('/community/share', methods=['POST'])
@approved_user_required
def share():
    """Submete um plano do histórico para moderação"""
    data = get_payload()
    plan = check_owner(db.session.get(PlanHistory, data.get('planId') or 0))

    if CommunityPlan.query.filter_by(plan_id=plan.id).first():
        return jsonify({'error': 'Este plano já foi partilhado.'}), 400

    meta = plan.metadata_dict
    try:
        item = CommunityPlan(
            user_id=plan.user_id,
            plan_id=plan.id,
            title=data.get('title') or meta.get('sumario') or meta.get('tema'),
            subject=data.get('subject') or meta.get('disciplina'),
            classe=data.get('classe') or meta.get('classe'),
            content=data.get('content') or plan.content
        )
        db.session.add(item)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao partilhar plano %s", plan.id)
        return jsonify({'error': 'Erro ao partilhar plano.'}), 500

    return jsonify({'success': True, 'id': item.id})


@community.route('/community/like', methods=['POST'])
@approved_user_required
def like():
    data = get_payload()
    item = db.session.get(CommunityPlan, data.get('id') or 0)
    if not item or not item.is_approved:
        return jsonify({'error': 'Plano não encontrado'}), 404

    item.like()
    db.session.commit()
    return jsonify({'success': True, 'likes': item.likes})


@community.route('/admin/community/pending')
@admin_required
def pending():
    """Fila de moderação, mais antigos primeiro"""
    items = (CommunityPlan.query
             .filter_by(status=COMMUNITY_PENDENTE)
             .order_by(CommunityPlan.created_at.asc(), CommunityPlan.id.asc())
             .all())
    return jsonify([item.to_dict(include_contact=True) for item in items])


@community.route('/admin/community/moderate', methods=['POST'])
@admin_required
def moderate():
    data = get_payload()
    status = data.get('status')

    if status not in MODERATION_STATUSES:
        return jsonify({'error': 'Estado inválido (use Aprovado ou Rejeitado)'}), 400

    item = db.session.get(CommunityPlan, data.get('id') or 0)
    if not item:
        return jsonify({'error': 'Plano não encontrado'}), 404

    item.status = status
    db.session.commit()
    logger.info("Plano da comunidade %s marcado como %s", item.id, status)
    return jsonify({'success': True})
