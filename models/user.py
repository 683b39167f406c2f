"""
Modelo de Usuários - Portal Pedagógico Angola
=============================================

Define os professores e administradores do portal:
- Administrador: controle total (moderação, biblioteca, currículo)
- Professor: gera planos, gere turmas, calendário e banco de questões

Estados da conta: Pendente (registo aguardando aprovação), Ativo, Suspenso.
"""

from datetime import datetime
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from extensions import db
from utils.helpers import generate_temp_password

STATUS_PENDENTE = 'Pendente'
STATUS_ATIVO = 'Ativo'
STATUS_SUSPENSO = 'Suspenso'
USER_STATUSES = (STATUS_PENDENTE, STATUS_ATIVO, STATUS_SUSPENSO)

# Campos que o próprio professor pode editar no perfil
PROFILE_FIELDS = (
    'professor_nome', 'numero_agente', 'biografia', 'especializacoes',
    'foto_url', 'escola', 'provincia', 'municipio'
)


class User(UserMixin, db.Model):
    """
    Professor ou administrador do PPA
    Herda de UserMixin para compatibilidade com Flask-Login
    """

    __tablename__ = 'users'

    # Identificação (e-mail ou telefone servem de login)
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=True, index=True)
    telefone = db.Column(db.String(30), unique=True, nullable=True, index=True)
    password_hash = db.Column(db.String(255), nullable=True)

    # Assinatura
    data_ativacao = db.Column(db.DateTime, nullable=True)
    data_expiracao = db.Column(db.DateTime, nullable=True)
    plano_tipo = db.Column(db.String(50), nullable=True)
    limite_planos = db.Column(db.Integer, nullable=True)  # None = ilimitado
    planos_consumidos = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default=STATUS_ATIVO)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)

    # Perfil
    escola = db.Column(db.String(200))
    professor_nome = db.Column(db.String(150))
    provincia = db.Column(db.String(100))
    municipio = db.Column(db.String(100))
    numero_agente = db.Column(db.String(50))
    biografia = db.Column(db.Text)
    especializacoes = db.Column(db.Text)
    foto_url = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    plans = db.relationship('PlanHistory', backref='author', lazy=True, cascade='all, delete-orphan')
    students = db.relationship('Student', backref='teacher', lazy=True, cascade='all, delete-orphan')
    calendar_events = db.relationship('CalendarEvent', backref='owner', lazy=True, cascade='all, delete-orphan')
    question_sets = db.relationship('QuestionBankEntry', backref='author', lazy=True, cascade='all, delete-orphan')
    feedback = db.relationship('Feedback', backref='author', lazy=True, cascade='all, delete-orphan')
    community_plans = db.relationship('CommunityPlan', backref='author', lazy=True, cascade='all, delete-orphan')

    def set_password(self, password):
        """Define nova senha usando hash seguro"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Verifica se a senha fornecida está correta"""
        if not self.password_hash or not password:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def has_password(self):
        return bool(self.password_hash)

    @property
    def display_name(self):
        """Nome usado em notificações e listagens"""
        return self.professor_nome or self.email or self.telefone or f'Usuário {self.id}'

    @property
    def is_pending(self):
        return self.status == STATUS_PENDENTE

    @property
    def is_suspended(self):
        return self.status == STATUS_SUSPENSO

    def is_expired(self, now=None):
        """Assinatura expirada (administradores nunca expiram)"""
        if self.is_admin or not self.data_expiracao:
            return False
        return (now or datetime.utcnow()) > self.data_expiracao

    @property
    def has_reached_limit(self):
        """Verifica se o professor esgotou os planos do seu pacote"""
        if self.is_admin or self.limite_planos is None:
            return False
        return self.planos_consumidos >= self.limite_planos

    def consume_plan(self):
        """Desconta um plano gerado; administradores não consomem créditos"""
        if not self.is_admin:
            self.planos_consumidos = (self.planos_consumidos or 0) + 1

    def activate(self):
        """
        Aprova a conta do professor

        Mantém a senha do registo; só gera uma senha temporária quando a
        conta não tem senha.

        Returns:
            str: Senha temporária gerada, ou None
        """
        self.status = STATUS_ATIVO
        if self.has_password:
            return None

        temp_password = generate_temp_password()
        self.set_password(temp_password)
        return temp_password

    def update_profile(self, data):
        """Atualiza apenas os campos editáveis do perfil"""
        for field in PROFILE_FIELDS:
            if field in data:
                setattr(self, field, data[field])

    def to_dict(self):
        """Serializa o usuário para a API (nunca expõe a senha)"""
        return {
            'id': self.id,
            'email': self.email,
            'telefone': self.telefone,
            'data_ativacao': self.data_ativacao.isoformat() if self.data_ativacao else None,
            'data_expiracao': self.data_expiracao.isoformat() if self.data_expiracao else None,
            'plano_tipo': self.plano_tipo,
            'limite_planos': self.limite_planos,
            'planos_consumidos': self.planos_consumidos or 0,
            'status': self.status,
            'is_admin': 1 if self.is_admin else 0,
            'escola': self.escola,
            'professor_nome': self.professor_nome,
            'provincia': self.provincia,
            'municipio': self.municipio,
            'numero_agente': self.numero_agente,
            'biografia': self.biografia,
            'especializacoes': self.especializacoes,
            'foto_url': self.foto_url,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.display_name} ({self.status})>'
