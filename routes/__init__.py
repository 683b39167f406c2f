"""
Rotas do Portal Pedagógico Angola
=================================
Este módulo contém todas as rotas organizadas por funcionalidade:
- auth: Autenticação (login, registro, recuperação de senha)
- plans / user: Planos de aula, créditos, perfil e estatísticas
- classroom / questions: Alunos, calendário e banco de questões
- library: Biblioteca de documentos
- news / community: Notícias, feedback e repositório da comunidade
- ai: Geração por IA e exportação para Word
- google_drive: Upload de planos para o Google Drive
- admin / settings / curriculum: Painel administrativo
- dashboard: Saúde da API e entrega do SPA
"""
from .auth import auth
from .plans import plans
from .user import user
from .classroom import classroom
from .questions import questions
from .library import library
from .news import news
from .community import community
from .ai import ai
from .google_drive import google_drive
from .admin import admin
from .settings import settings
from .curriculum import curriculum
from .dashboard import dashboard

# Lista de todos os blueprints disponíveis
__all__ = [
    'auth',
    'plans',
    'user',
    'classroom',
    'questions',
    'library',
    'news',
    'community',
    'ai',
    'google_drive',
    'admin',
    'settings',
    'curriculum',
    'dashboard'
]

# Versão do módulo
__version__ = '1.0.0'
