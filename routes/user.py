"""
Rotas de Usuários - Portal Pedagógico Angola
============================================

Responsável por:
- Edição do perfil do professor
- Estatísticas pessoais (planos por mês e por disciplina)
"""

from collections import Counter

from flask import Blueprint, jsonify

from extensions import db
from models.plan import PlanHistory
from models.user import User
from utils.decorators import approved_user_required, owner_or_admin_required, resolve_user_id
from utils.helpers import get_payload

STATS_MONTHS = 6

# Criar blueprint para rotas de usuário
user = Blueprint('user', __name__)


@user.route('/profile/update', methods=['POST'])
@approved_user_required
def update_profile():
    """Atualiza os dados de perfil e devolve o usuário"""
    data = get_payload()
    target = db.session.get(User, resolve_user_id(data.get('id')))
    if not target:
        return jsonify({'error': 'Usuário não encontrado'}), 404

    target.update_profile(data)
    db.session.commit()
    return jsonify({'user': target.to_dict()})


def compute_plan_stats(plans_list, months=STATS_MONTHS):
    """
    Agrupa planos por mês (últimos N meses, em ordem crescente)
    e por disciplina (mais frequentes primeiro)
    """
    by_month = Counter(p.created_at.strftime('%Y-%m') for p in plans_list if p.created_at)
    recent_months = sorted(by_month)[-months:]

    by_subject = Counter(p.subject for p in plans_list if p.subject)

    return {
        'plansByMonth': [{'month': month, 'count': by_month[month]} for month in recent_months],
        'subjectsCount': [{'subject': subject, 'count': count}
                          for subject, count in by_subject.most_common()],
    }


@user.route('/stats/<int:user_id>')
@owner_or_admin_required
def stats(user_id):
    plans_list = PlanHistory.query.filter_by(user_id=user_id).all()
    return jsonify(compute_plan_stats(plans_list))
