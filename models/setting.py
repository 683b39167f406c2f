"""
Modelo de Configurações - Portal Pedagógico Angola
==================================================

Pares chave/valor editáveis no painel administrativo
(logotipo, dados padrão do plano, servidor SMTP).
"""

from extensions import db

# Chaves nunca devolvidas pela API pública
SECRET_KEYS = ('smtp_pass',)


class Setting(db.Model):
    __tablename__ = 'settings'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text)

    @classmethod
    def get_all(cls):
        return {row.key: row.value for row in cls.query.all()}

    @classmethod
    def get_value(cls, key, default=None):
        row = db.session.get(cls, key)
        return row.value if row and row.value is not None else default

    @classmethod
    def set_value(cls, key, value):
        """Insere ou substitui (não faz commit)"""
        row = db.session.get(cls, key)
        if row is None:
            row = cls(key=key, value=value)
            db.session.add(row)
        else:
            row.value = value
        return row

    @classmethod
    def public(cls):
        """Configurações sem segredos; indica apenas se há senha SMTP"""
        data = cls.get_all()
        for key in SECRET_KEYS:
            data[f'{key}_set'] = bool(data.pop(key, None))
        return data

    def __repr__(self):
        return f'<Setting {self.key}>'
