"""
Modelos de Planos - Portal Pedagógico Angola
============================================

- PlanHistory: planos de aula gerados por cada professor
- CommunityPlan: planos partilhados no repositório da comunidade
"""

import json
from datetime import datetime

from extensions import db

COMMUNITY_PENDENTE = 'Pendente'
COMMUNITY_APROVADO = 'Aprovado'
COMMUNITY_REJEITADO = 'Rejeitado'
MODERATION_STATUSES = (COMMUNITY_APROVADO, COMMUNITY_REJEITADO)


class PlanHistory(db.Model):
    """Plano de aula gerado (conteúdo em Markdown + dados do formulário em JSON)"""

    __tablename__ = 'plans_history'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    content = db.Column(db.Text)
    plan_metadata = db.Column('metadata', db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    @property
    def metadata_dict(self):
        """Metadados do formulário como dicionário (vazio se inválido)"""
        if not self.plan_metadata:
            return {}
        try:
            data = json.loads(self.plan_metadata)
        except (TypeError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def subject(self):
        return self.metadata_dict.get('disciplina')

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'content': self.content,
            'metadata': self.plan_metadata,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<PlanHistory {self.id} user={self.user_id}>'


class CommunityPlan(db.Model):
    """Plano partilhado com a comunidade, sujeito a moderação"""

    __tablename__ = 'community_plans'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    plan_id = db.Column(db.Integer, db.ForeignKey('plans_history.id'), nullable=True, unique=True)
    title = db.Column(db.String(300))
    subject = db.Column(db.String(150))
    classe = db.Column(db.String(50))
    content = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=COMMUNITY_PENDENTE)
    likes = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_approved(self):
        return self.status == COMMUNITY_APROVADO

    def like(self):
        self.likes = (self.likes or 0) + 1

    def to_dict(self, include_contact=False):
        """Serializa o plano com os dados públicos do autor"""
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'plan_id': self.plan_id,
            'title': self.title,
            'subject': self.subject,
            'classe': self.classe,
            'content': self.content,
            'status': self.status,
            'likes': self.likes or 0,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'professor_nome': self.author.professor_nome if self.author else None,
        }
        if include_contact:
            data['email'] = self.author.email if self.author else None
            data['telefone'] = self.author.telefone if self.author else None
        else:
            data['escola'] = self.author.escola if self.author else None
            data['foto_url'] = self.author.foto_url if self.author else None
        return data

    def __repr__(self):
        return f'<CommunityPlan {self.title} ({self.status})>'


def detach_plan_references(plan_ids):
    """Eventos do calendário e planos partilhados perdem a ligação aos planos apagados"""
    from models.classroom import CalendarEvent

    if not plan_ids:
        return
    CalendarEvent.query.filter(CalendarEvent.plan_id.in_(plan_ids)).update(
        {CalendarEvent.plan_id: None}, synchronize_session=False)
    CommunityPlan.query.filter(CommunityPlan.plan_id.in_(plan_ids)).update(
        {CommunityPlan.plan_id: None}, synchronize_session=False)
