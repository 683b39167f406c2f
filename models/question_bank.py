"""
Modelo do Banco de Questões - Portal Pedagógico Angola
======================================================

Cada entrada guarda um conjunto de questões de prova (Markdown com soluções)
gerado para uma disciplina e classe.
"""

from datetime import datetime

from extensions import db


class QuestionBankEntry(db.Model):
    __tablename__ = 'questions_bank'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    subject = db.Column(db.String(150))
    classe = db.Column(db.String(50))
    content = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'subject': self.subject,
            'classe': self.classe,
            'content': self.content,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<QuestionBankEntry {self.subject} {self.classe}>'
