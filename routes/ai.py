"""
Rotas de IA - Portal Pedagógico Angola
======================================

Responsável por:
- Gerar planos de aula com contexto dos manuais do INIDE da biblioteca
- Gerar bancos de questões
- Sincronizar notícias do MED (administrador)
- Exportar o plano para Word
"""

import json
import logging
from datetime import datetime

from flask import Blueprint, jsonify, send_file
from flask_login import current_user

from extensions import db
from models.plan import PlanHistory
from models.question_bank import QuestionBankEntry
from models.setting import Setting
from utils import ai as ai_service
from utils import library as lib
from utils.decorators import admin_required, approved_user_required
from utils.docx_export import build_plan_docx, DOCX_MIMETYPE, DOCX_FILENAME
from utils.helpers import get_payload
from utils.maintenance import sync_news

logger = logging.getLogger(__name__)

PLAN_FIELDS = ('escola', 'professor', 'disciplina', 'classe', 'trimestre', 'tempo',
               'aula_numero', 'tema', 'subtema', 'sumario')
MAX_QUESTIONS = 50

# Criar blueprint para rotas de IA
ai = Blueprint('ai', __name__)


@ai.errorhandler(ai_service.AIServiceError)
def handle_ai_error(error):
    db.session.rollback()
    return jsonify({'error': f'Falha na chamada à IA: {error}'}), 502


def plan_location(user):
    """Província e município do plano (admin usa os padrões do painel)"""
    if user.is_admin:
        settings = Setting.get_all()
        provincia = settings.get('default_provincia') or user.provincia
        municipio = settings.get('default_municipio') or user.municipio
    else:
        provincia, municipio = user.provincia, user.municipio
    return provincia or 'Não definida', municipio or 'Não definido'


def collect_inide_context(disciplina, classe):
    """Texto dos documentos da biblioteca ligados à disciplina ou classe"""
    context = ''
    for node in lib.find_related_documents(disciplina, classe):
        try:
            text = lib.extract_text(lib.resolve_library_path(node['path']))
        except Exception:
            logger.warning("Não foi possível ler %s para contexto da IA", node['path'], exc_info=True)
            continue
        if text:
            context += f"\n--- CONTEÚDO DO DOCUMENTO OFICIAL: {node['name']} ---\n{text}\n"
    return context


@ai.route('/generate-plan', methods=['POST'])
@approved_user_required
def generate_plan():
    """Gera o plano, guarda no histórico e desconta um crédito"""
    data = get_payload()

    if current_user.has_reached_limit:
        return jsonify({'error': 'Limite de planos atingido. Melhore seu plano.'}), 403

    if not data.get('disciplina') or not data.get('classe'):
        return jsonify({'error': 'Disciplina e classe são obrigatórias'}), 400

    form = {field: data.get(field) or '' for field in PLAN_FIELDS}
    form['escola'] = form['escola'] or current_user.escola or Setting.get_value('default_escola', '')
    form['professor'] = (form['professor'] or current_user.professor_nome
                         or Setting.get_value('default_professor', ''))

    provincia, municipio = plan_location(current_user)
    context = collect_inide_context(form['disciplina'], form['classe'])
    prompt = ai_service.build_plan_prompt(form, provincia, municipio, context)

    content = ai_service.generate_text(prompt)

    metadata = dict(form, provincia=provincia, municipio=municipio,
                    created_at=datetime.utcnow().isoformat())
    plan = PlanHistory(user_id=current_user.id, content=content,
                       plan_metadata=json.dumps(metadata, ensure_ascii=False))
    db.session.add(plan)
    current_user.consume_plan()
    db.session.commit()

    logger.info("Plano gerado para %s (%s, %s)", current_user.display_name, form['disciplina'], form['classe'])
    return jsonify({'content': content, 'plan': plan.to_dict(), 'user': current_user.to_dict()})


@ai.route('/generate-questions', methods=['POST'])
@approved_user_required
def generate_questions():
    data = get_payload()
    subject = (data.get('subject') or '').strip()
    classe = (data.get('classe') or '').strip()
    topic = (data.get('topic') or '').strip()

    if not subject or not classe or not topic:
        return jsonify({'error': 'Disciplina, classe e tema são obrigatórios'}), 400

    try:
        count = int(data.get('count') or 10)
    except (TypeError, ValueError):
        return jsonify({'error': 'Número de questões inválido'}), 400
    count = max(1, min(count, MAX_QUESTIONS))

    content = ai_service.generate_text(ai_service.build_questions_prompt(subject, classe, topic, count))

    entry = QuestionBankEntry(user_id=current_user.id, subject=subject, classe=classe, content=content)
    db.session.add(entry)
    db.session.commit()
    return jsonify({'content': content, 'entry': entry.to_dict()})


@ai.route('/sync-news', methods=['POST'])
@admin_required
def sync_news_route():
    try:
        count = sync_news()
    except ai_service.AIServiceError:
        db.session.rollback()
        logger.exception("Erro na sincronização de notícias")
        return jsonify({'error': 'Erro ao sincronizar notícias com IA'}), 500

    return jsonify({'success': True, 'count': count})


@ai.route('/export-docx', methods=['POST'])
@approved_user_required
def export_docx():
    data = get_payload()
    if not data.get('plano'):
        return jsonify({'error': 'O plano está vazio'}), 400

    return send_file(
        build_plan_docx(data),
        mimetype=DOCX_MIMETYPE,
        as_attachment=True,
        download_name=DOCX_FILENAME
    )
