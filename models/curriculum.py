"""
Modelo do Currículo - Portal Pedagógico Angola
==============================================

Cada linha representa um subtema do programa oficial:
classe → disciplina → tema → subtema, com a lista de sumários em JSON.
"""

import json

from extensions import db


class CurriculumEntry(db.Model):
    __tablename__ = 'curriculum'

    id = db.Column(db.Integer, primary_key=True)
    classe = db.Column(db.String(50), nullable=False, index=True)
    disciplina = db.Column(db.String(150), nullable=False)
    tema = db.Column(db.String(300), nullable=False)
    subtema = db.Column(db.String(300), nullable=False, default='')
    sumarios = db.Column(db.Text, nullable=False, default='[]')  # JSON array

    @classmethod
    def find(cls, classe, disciplina, tema, subtema=''):
        return cls.query.filter_by(
            classe=classe, disciplina=disciplina, tema=tema, subtema=subtema or ''
        ).first()

    @property
    def sumarios_list(self):
        try:
            data = json.loads(self.sumarios or '[]')
        except (TypeError, ValueError):
            return []
        return data if isinstance(data, list) else []

    @sumarios_list.setter
    def sumarios_list(self, values):
        self.sumarios = json.dumps(list(values), ensure_ascii=False)

    def add_sumario(self, sumario):
        """Acrescenta o sumário se ainda não existir; devolve True se alterou"""
        values = self.sumarios_list
        if not sumario or sumario in values:
            return False
        values.append(sumario)
        self.sumarios_list = values
        return True

    def rename_sumario(self, old, new):
        values = self.sumarios_list
        if old not in values:
            return False
        values[values.index(old)] = new
        self.sumarios_list = values
        return True

    def remove_sumario(self, sumario):
        self.sumarios_list = [s for s in self.sumarios_list if s != sumario]

    def to_dict(self):
        return {
            'id': self.id,
            'classe': self.classe,
            'disciplina': self.disciplina,
            'tema': self.tema,
            'subtema': self.subtema,
            'sumarios': self.sumarios_list,
        }

    def __repr__(self):
        return f'<CurriculumEntry {self.classe} / {self.disciplina} / {self.subtema}>'


def build_curriculum_tree(entries):
    """Agrupa as linhas do currículo em classe → disciplina → tema → subtema → sumários"""
    tree = {}
    for entry in entries:
        temas = tree.setdefault(entry.classe, {}).setdefault(entry.disciplina, {})
        temas.setdefault(entry.tema, {})[entry.subtema] = entry.sumarios_list
    return tree
