"""Fixtures partilhadas dos testes do Portal Pedagógico Angola.

A aplicação é importada uma única vez com banco SQLite em memória;
cada teste recria as tabelas, os dados iniciais e a biblioteca.
"""

import os
import tempfile
from datetime import datetime, timedelta

import pytest

_TMP_ROOT = tempfile.mkdtemp(prefix='ppa-tests-')

# Variáveis lidas na importação de app.py
os.environ.update({
    'DATABASE_URL': 'sqlite://',
    'SECRET_KEY': 'test-secret-key',
    'LIBRARY_PATH': os.path.join(_TMP_ROOT, 'biblioteca'),
    'FRONTEND_DIST': os.path.join(_TMP_ROOT, 'dist-inexistente'),
    'ENABLE_SCHEDULER': 'false',
    'ADMIN_EMAIL': 'admin@ppa.ao',
    'ADMIN_PASSWORD': 'admin-pass',
    'GEMINI_API_KEY': '',
    'SMTP_USER': '',
    'SMTP_PASS': '',
    'GOOGLE_CLIENT_ID': 'client-id-teste',
    'GOOGLE_CLIENT_SECRET': 'client-secret-teste',
    'APP_URL': 'http://localhost:5000',
})

from app import app as flask_app  # noqa: E402
from extensions import db  # noqa: E402
from models.user import User, STATUS_ATIVO  # noqa: E402
from utils.library import ensure_library_structure  # noqa: E402
from utils.seed import seed_database  # noqa: E402

ADMIN_EMAIL = 'admin@ppa.ao'
ADMIN_PASSWORD = 'admin-pass'
DEFAULT_PASSWORD = 'segredo123'


@pytest.fixture
def app(tmp_path):
    """Aplicação com banco limpo e biblioteca num diretório temporário."""
    flask_app.config.update(
        TESTING=True,
        LIBRARY_PATH=str(tmp_path / 'biblioteca'),
        GEMINI_API_KEY='',
    )
    flask_app.extensions.pop('gemini_client', None)

    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        seed_database()
        ensure_library_structure()

    yield flask_app

    with flask_app.app_context():
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Cria um professor e devolve o seu id."""

    def _make_user(email='prof@escola.ao', password=DEFAULT_PASSWORD, **fields):
        fields.setdefault('status', STATUS_ATIVO)
        fields.setdefault('professor_nome', 'Professor Teste')
        with app.app_context():
            user = User(email=email, **fields)
            if password:
                user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


def login(client, identifier, password=DEFAULT_PASSWORD):
    return client.post('/api/auth/login', json={'identifier': identifier, 'password': password})


@pytest.fixture
def teacher_client(client, make_user):
    """Cliente autenticado como professor ativo; o id fica em client.user_id."""
    client.user_id = make_user(provincia='Luanda', municipio='Viana', escola='Escola Primária nº 1')
    response = login(client, 'prof@escola.ao')
    assert response.status_code == 200
    return client


@pytest.fixture
def admin_client(client):
    response = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert response.status_code == 200
    client.user_id = response.get_json()['user']['id']
    return client


def get_user(app, user_id):
    """Lê o usuário num contexto novo (sem cache da sessão)."""
    with app.app_context():
        user = db.session.get(User, user_id)
        db.session.expunge(user)
        return user


def days_ago(days):
    return datetime.utcnow() - timedelta(days=days)


def new_client(app, identifier=ADMIN_EMAIL, password=ADMIN_PASSWORD):
    """Segundo cliente autenticado (por padrão como administrador)."""
    other = app.test_client()
    assert login(other, identifier, password).status_code == 200
    return other
