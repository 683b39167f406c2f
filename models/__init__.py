"""
Modelos do Banco de Dados - Portal Pedagógico Angola
====================================================

Este módulo contém todos os modelos (estruturas) do banco de dados:
- User: Professores e administradores
- PlanHistory / CommunityPlan: Planos gerados e partilhados
- Student / CalendarEvent: Turma e calendário do professor
- QuestionBankEntry: Banco de questões
- News / Feedback: Notícias e opiniões dos professores
- CurriculumEntry: Programa oficial por classe e disciplina
- Setting: Configurações do portal
"""

from .user import User
from .plan import PlanHistory, CommunityPlan
from .classroom import Student, CalendarEvent
from .question_bank import QuestionBankEntry
from .news import News, Feedback
from .curriculum import CurriculumEntry
from .setting import Setting

# Lista de todos os modelos disponíveis para import
__all__ = [
    'User',
    'PlanHistory',
    'CommunityPlan',
    'Student',
    'CalendarEvent',
    'QuestionBankEntry',
    'News',
    'Feedback',
    'CurriculumEntry',
    'Setting'
]

# Versão do módulo
__version__ = '1.0.0'
