"""
Rotas da Turma - Portal Pedagógico Angola
=========================================

Responsável por:
- Alunos do professor (listar, adicionar, remover)
- Calendário de aulas (listar, agendar, remover)
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.classroom import Student, CalendarEvent
from models.plan import PlanHistory
from utils.decorators import approved_user_required, owner_or_admin_required, resolve_user_id, check_owner
from utils.helpers import get_payload

logger = logging.getLogger(__name__)

# Criar blueprint para rotas da turma
classroom = Blueprint('classroom', __name__)


# ================================
# ALUNOS
# ================================

@classroom.route('/students/<int:user_id>')
@owner_or_admin_required
def list_students(user_id):
    students = Student.query.filter_by(user_id=user_id).order_by(Student.name).all()
    return jsonify([s.to_dict() for s in students])


@classroom.route('/students/add', methods=['POST'])
@approved_user_required
def add_student():
    data = get_payload()
    user_id = resolve_user_id(data.get('userId'))
    name = (data.get('name') or '').strip()

    if not name:
        return jsonify({'error': 'Nome do aluno é obrigatório'}), 400

    try:
        student = Student(user_id=user_id, name=name, classe=data.get('classe'))
        db.session.add(student)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao adicionar aluno")
        return jsonify({'error': 'Erro ao adicionar aluno'}), 500

    return jsonify({'success': True, 'id': student.id})


@classroom.route('/students/<int:student_id>', methods=['DELETE'])
@approved_user_required
def delete_student(student_id):
    student = check_owner(db.session.get(Student, student_id))
    db.session.delete(student)
    db.session.commit()
    return jsonify({'success': True})


# ================================
# CALENDÁRIO
# ================================

@classroom.route('/calendar/<int:user_id>')
@owner_or_admin_required
def list_events(user_id):
    events = CalendarEvent.query.filter_by(user_id=user_id).order_by(CalendarEvent.start_date).all()
    return jsonify([e.to_dict() for e in events])


@classroom.route('/calendar/add', methods=['POST'])
@approved_user_required
def add_event():
    data = get_payload()
    user_id = resolve_user_id(data.get('userId'))
    title = (data.get('title') or '').strip()

    if not title or not data.get('start_date'):
        return jsonify({'error': 'Título e data de início são obrigatórios'}), 400

    plan_id = data.get('plan_id') or None
    if plan_id is not None:
        plan = db.session.get(PlanHistory, plan_id)
        if not plan or plan.user_id != user_id:
            return jsonify({'error': 'Plano não encontrado'}), 404

    try:
        event = CalendarEvent(
            user_id=user_id,
            title=title,
            start_date=data.get('start_date'),
            end_date=data.get('end_date') or data.get('start_date'),
            plan_id=plan_id
        )
        db.session.add(event)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Erro ao agendar aula")
        return jsonify({'error': 'Erro ao adicionar evento'}), 500

    return jsonify({'success': True, 'id': event.id})


@classroom.route('/calendar/<int:event_id>', methods=['DELETE'])
@approved_user_required
def delete_event(event_id):
    event = check_owner(db.session.get(CalendarEvent, event_id))
    db.session.delete(event)
    db.session.commit()
    return jsonify({'success': True})
