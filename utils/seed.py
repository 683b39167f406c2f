"""
Dados Iniciais - Portal Pedagógico Angola
=========================================

Executado na inicialização (e nos testes) depois de db.create_all():
- Currículo padrão quando a tabela está vazia
- Notícias de boas-vindas quando não há notícias
- Conta do administrador
"""

import logging

from flask import current_app

from extensions import db
from models.curriculum import CurriculumEntry
from models.news import News
from models.user import User, STATUS_ATIVO
from utils.curriculum_data import iter_curriculum_rows
from utils.helpers import generate_temp_password

logger = logging.getLogger(__name__)

WELCOME_NEWS = [
    ("Novo Calendário Escolar 2026",
     "O MED anunciou as novas datas para o ano lectivo de 2026. Confira na biblioteca.", "MED"),
    ("Dica Pedagógica: Metodologias Ativas",
     "Como engajar alunos do ensino primário usando jogos educativos.", "Pedagogia"),
    ("Atualização do Portal PPA",
     "Novas funcionalidades de estatísticas e perfil detalhado adicionadas.", "Aviso"),
]


def seed_curriculum():
    if CurriculumEntry.query.count() > 0:
        return 0

    count = 0
    for classe, disciplina, tema, subtema, sumarios in iter_curriculum_rows():
        entry = CurriculumEntry(classe=classe, disciplina=disciplina, tema=tema, subtema=subtema)
        entry.sumarios_list = sumarios
        db.session.add(entry)
        count += 1
    logger.info("Currículo inicializado com %d subtemas.", count)
    return count


def seed_news():
    if News.query.count() > 0:
        return 0

    for title, content, category in WELCOME_NEWS:
        db.session.add(News(title=title, content=content, category=category))
    return len(WELCOME_NEWS)


def create_admin_user():
    """Cria o administrador padrão se não existir"""
    email = current_app.config['ADMIN_EMAIL']
    if User.query.filter_by(email=email).first():
        return None

    password = current_app.config.get('ADMIN_PASSWORD')
    if not password:
        password = generate_temp_password(12)
        logger.warning("ADMIN_PASSWORD não definido; senha gerada para %s: %s", email, password)

    admin = User(email=email, is_admin=True, status=STATUS_ATIVO, professor_nome='Administrador')
    admin.set_password(password)
    db.session.add(admin)
    logger.info("Usuário administrador criado: %s", email)
    return admin


def seed_database():
    """Popula os dados iniciais (idempotente)"""
    seed_curriculum()
    seed_news()
    create_admin_user()
    db.session.commit()
