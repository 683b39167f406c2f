"""
Rotas do Currículo - Portal Pedagógico Angola
=============================================

Responsável por:
- Consulta do programa (linhas e árvore)
- Adição, renomeação e remoção por nível (administrador):
  disciplina, tema, subtema ou sumário
"""

from flask import Blueprint, jsonify

from extensions import db
from models.curriculum import CurriculumEntry, build_curriculum_tree
from utils.decorators import admin_required
from utils.helpers import get_payload

EDIT_LEVELS = ('disciplina', 'tema', 'subtema', 'sumario')

# Criar blueprint para rotas do currículo
curriculum = Blueprint('curriculum', __name__)


def _ordered_entries():
    return CurriculumEntry.query.order_by(CurriculumEntry.id).all()


@curriculum.route('/curriculum')
def list_entries():
    return jsonify([entry.to_dict() for entry in _ordered_entries()])


@curriculum.route('/curriculum/tree')
def tree():
    return jsonify(build_curriculum_tree(_ordered_entries()))


@curriculum.route('/admin/curriculum/add', methods=['POST'])
@admin_required
def add():
    """Cria o subtema ou acrescenta o sumário ao subtema existente"""
    data = get_payload()
    classe, disciplina, tema = data.get('classe'), data.get('disciplina'), data.get('tema')
    subtema = data.get('subtema') or ''
    sumario = data.get('sumario')

    if not classe or not disciplina or not tema:
        return jsonify({'error': 'Classe, disciplina e tema são obrigatórios'}), 400

    entry = CurriculumEntry.find(classe, disciplina, tema, subtema)
    if entry:
        entry.add_sumario(sumario)
    else:
        entry = CurriculumEntry(classe=classe, disciplina=disciplina, tema=tema, subtema=subtema)
        entry.sumarios_list = [sumario] if sumario else []
        db.session.add(entry)

    db.session.commit()
    return jsonify({'success': True})


@curriculum.route('/admin/curriculum/edit', methods=['POST'])
@admin_required
def edit():
    """Renomeia um nível; oldData identifica o nó, newData.name é o novo nome"""
    data = get_payload()
    level = data.get('type')
    old = data.get('oldData') or {}
    new_name = (data.get('newData') or {}).get('name')

    if level not in EDIT_LEVELS or not new_name:
        return jsonify({'error': 'Tipo de edição ou novo nome inválido'}), 400

    classe, disciplina, tema = old.get('classe'), old.get('disciplina'), old.get('tema')
    subtema = old.get('subtema') or ''
    query = CurriculumEntry.query.filter_by(classe=classe, disciplina=disciplina)

    if level == 'disciplina':
        query.update({CurriculumEntry.disciplina: new_name}, synchronize_session=False)
    elif level == 'tema':
        query.filter_by(tema=tema).update({CurriculumEntry.tema: new_name}, synchronize_session=False)
    elif level == 'subtema':
        query.filter_by(tema=tema, subtema=subtema).update(
            {CurriculumEntry.subtema: new_name}, synchronize_session=False)
    else:
        entry = CurriculumEntry.find(classe, disciplina, tema, subtema)
        if entry:
            entry.rename_sumario(old.get('sumario'), new_name)

    db.session.commit()
    return jsonify({'success': True})


@curriculum.route('/admin/curriculum/remove', methods=['POST'])
@admin_required
def remove():
    """Remove o nível mais específico informado (sumário > subtema > tema > disciplina)"""
    data = get_payload()
    classe, disciplina, tema = data.get('classe'), data.get('disciplina'), data.get('tema')
    subtema = data.get('subtema') or ''
    sumario = data.get('sumario')
    query = CurriculumEntry.query.filter_by(classe=classe, disciplina=disciplina)

    if sumario:
        entry = CurriculumEntry.find(classe, disciplina, tema, subtema)
        if entry:
            entry.remove_sumario(sumario)
    elif subtema:
        query.filter_by(tema=tema, subtema=subtema).delete(synchronize_session=False)
    elif tema:
        query.filter_by(tema=tema).delete(synchronize_session=False)
    elif disciplina:
        query.delete(synchronize_session=False)
    else:
        return jsonify({'error': 'Nada para remover'}), 400

    db.session.commit()
    return jsonify({'success': True})
