"""
Modelos da Turma - Portal Pedagógico Angola
===========================================

- Student: alunos de cada professor
- CalendarEvent: aulas e eventos no calendário do professor
"""

from extensions import db


class Student(db.Model):
    __tablename__ = 'students'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    classe = db.Column(db.String(50))

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'classe': self.classe,
        }

    def __repr__(self):
        return f'<Student {self.name}>'


class CalendarEvent(db.Model):
    __tablename__ = 'calendar_events'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(300), nullable=False)
    start_date = db.Column(db.String(40))  # ISO 8601 vindo do calendário do SPA
    end_date = db.Column(db.String(40))
    plan_id = db.Column(db.Integer, db.ForeignKey('plans_history.id'), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'start_date': self.start_date,
            'end_date': self.end_date,
            'plan_id': self.plan_id,
        }

    def __repr__(self):
        return f'<CalendarEvent {self.title} {self.start_date}>'
