"""
Modelos de Notícias e Feedback - Portal Pedagógico Angola
=========================================================

- News: avisos do MED, dicas pedagógicas e notícias sincronizadas por IA
- Feedback: opiniões, críticas e reclamações dos professores
"""

from datetime import datetime, timedelta

from extensions import db

DEFAULT_NEWS_SOURCE = 'Portal Pedagógico Angola'
NEWS_CATEGORIES = ('MED', 'Pedagogia', 'Aviso')

FEEDBACK_TYPES = ('opinião', 'crítica', 'reclamação')
FEEDBACK_PENDENTE = 'Pendente'
FEEDBACK_RESOLVIDO = 'Resolvido'


class News(db.Model):
    __tablename__ = 'news'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(300), nullable=False, index=True)
    content = db.Column(db.Text)
    category = db.Column(db.String(50))
    source = db.Column(db.String(200), default=DEFAULT_NEWS_SOURCE)
    is_ai_generated = db.Column(db.Boolean, nullable=False, default=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    expires_at = db.Column(db.DateTime, nullable=True)

    @classmethod
    def active(cls, now=None):
        """Consulta das notícias ainda não expiradas, mais recentes primeiro"""
        now = now or datetime.utcnow()
        return (cls.query
                .filter((cls.expires_at.is_(None)) | (cls.expires_at > now))
                .order_by(cls.date.desc()))

    @staticmethod
    def expiry_from_days(days, now=None):
        """Converte 'expira em N dias' numa data (None se não informado)"""
        if not days:
            return None
        return (now or datetime.utcnow()) + timedelta(days=float(days))

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'category': self.category,
            'source': self.source,
            'is_ai_generated': 1 if self.is_ai_generated else 0,
            'date': self.date.isoformat() if self.date else None,
            'expires_at': self.expires_at.isoformat() if self.expires_at else None,
        }

    def __repr__(self):
        return f'<News {self.title}>'


class Feedback(db.Model):
    __tablename__ = 'feedback'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(30))
    status = db.Column(db.String(20), nullable=False, default=FEEDBACK_PENDENTE)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def resolve(self):
        self.status = FEEDBACK_RESOLVIDO

    def to_dict(self):
        """Inclui os contactos do autor para o painel administrativo"""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'content': self.content,
            'type': self.type,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'professor_nome': self.author.professor_nome if self.author else None,
            'email': self.author.email if self.author else None,
            'telefone': self.author.telefone if self.author else None,
        }

    def __repr__(self):
        return f'<Feedback {self.type} ({self.status})>'
