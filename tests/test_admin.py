"""Testes do painel administrativo: contas, configurações, logotipo e currículo."""

import base64
import io
from datetime import datetime
from unittest.mock import patch

from PIL import Image

from conftest import DEFAULT_PASSWORD, days_ago, get_user, login
from extensions import db
from models.curriculum import CurriculumEntry
from models.setting import Setting
from models.user import User, STATUS_PENDENTE, STATUS_SUSPENSO


def png_data_url(size=(1024, 600)):
    buffer = io.BytesIO()
    Image.new('RGB', size, (0, 120, 60)).save(buffer, 'PNG')
    return 'data:image/png;base64,' + base64.b64encode(buffer.getvalue()).decode('ascii')


class TestUserManagement:
    def test_pending_users_come_first(self, admin_client, make_user):
        make_user(email='ativo@escola.ao')
        make_user(email='pendente@escola.ao', status=STATUS_PENDENTE)

        users = admin_client.get('/api/admin/users').get_json()
        assert users[0]['email'] == 'pendente@escola.ao'
        assert {u['email'] for u in users} >= {'ativo@escola.ao', 'admin@ppa.ao'}

    def test_activation_keeps_registered_password(self, admin_client, make_user, app):
        user_id = make_user(status=STATUS_PENDENTE)

        response = admin_client.post('/api/admin/update-user', json={
            'id': user_id,
            'status': 'Ativo',
            'plano_tipo': 'Mensal',
            'limite_planos': '20',
            'data_expiracao': '2026-12-31',
        })
        body = response.get_json()

        assert response.status_code == 200
        assert 'Acesso permitido' in body['activationMessage']
        assert 'Senha é' not in body['activationMessage']
        assert '31/12/2026' in body['activationMessage']

        user = get_user(app, user_id)
        assert user.status == 'Ativo'
        assert user.limite_planos == 20
        assert user.data_expiracao == datetime(2026, 12, 31, 23, 59, 59)
        assert user.data_ativacao is not None
        assert user.check_password('segredo123')

    def test_activation_generates_password_when_missing(self, admin_client, make_user, app):
        user_id = make_user(password=None, status=STATUS_PENDENTE)

        body = admin_client.post('/api/admin/update-user', json={'id': user_id, 'status': 'Ativo'}).get_json()
        temp_password = body['activationMessage'].split('A sua Senha é ')[1].split()[0]

        assert get_user(app, user_id).check_password(temp_password)

    def test_activation_emails_teacher_when_smtp_is_configured(self, admin_client, make_user):
        user_id = make_user(status=STATUS_PENDENTE)

        with patch('routes.admin.is_configured', return_value=True), \
                patch('routes.admin.send_mail') as send:
            admin_client.post('/api/admin/update-user', json={'id': user_id, 'status': 'Ativo'})

        assert send.call_args.kwargs['to'] == 'prof@escola.ao'

    def test_unlimited_plan_and_suspension(self, admin_client, make_user, app):
        user_id = make_user(limite_planos=5)

        admin_client.post('/api/admin/update-user', json={
            'id': user_id, 'status': STATUS_SUSPENSO, 'limite_planos': ''})

        user = get_user(app, user_id)
        assert user.status == STATUS_SUSPENSO
        assert user.limite_planos is None

    def test_invalid_values(self, admin_client, make_user):
        user_id = make_user()

        bad_status = admin_client.post('/api/admin/update-user', json={'id': user_id, 'status': 'Banido'})
        bad_date = admin_client.post('/api/admin/update-user', json={'id': user_id, 'data_expiracao': 'amanhã'})

        assert bad_status.status_code == 400
        assert bad_date.status_code == 400

    def test_suspended_teacher_loses_access(self, client, make_user, app):
        make_user()
        login(client, 'prof@escola.ao')

        admin = app.test_client()
        login(admin, 'admin@ppa.ao', 'admin-pass')
        user_id = client.get('/api/auth/me').get_json()['user']['id']
        admin.post('/api/admin/update-user', json={'id': user_id, 'status': STATUS_SUSPENSO})

        assert client.post('/api/students/add', json={'name': 'Aluno'}).status_code == 403
        for url in (f'/api/plans/history/{user_id}', f'/api/stats/{user_id}', f'/api/students/{user_id}',
                    f'/api/calendar/{user_id}', f'/api/questions/{user_id}', '/api/library/files',
                    '/api/auth/google/url'):
            response = client.get(url)
            assert response.status_code == 403, url
            assert response.get_json()['error'] == 'Sua conta está suspensa. Contacte o suporte.'

    def test_expired_teacher_loses_read_access(self, client, make_user, app):
        user_id = make_user()
        login(client, 'prof@escola.ao')
        assert client.get(f'/api/plans/history/{user_id}').status_code == 200

        with app.app_context():
            db.session.get(User, user_id).data_expiracao = days_ago(1)
            db.session.commit()

        for url in (f'/api/plans/history/{user_id}', '/api/library/files'):
            response = client.get(url)
            assert response.status_code == 403
            assert 'expirou' in response.get_json()['error']

    def test_reactivating_suspended_teacher_keeps_password(self, admin_client, make_user, app):
        user_id = make_user(status=STATUS_SUSPENSO)

        body = admin_client.post('/api/admin/update-user', json={'id': user_id, 'status': 'Ativo'}).get_json()

        assert body['activationMessage'] is None
        user = get_user(app, user_id)
        assert user.status == 'Ativo'
        assert user.check_password(DEFAULT_PASSWORD)

    def test_delete_user_and_data(self, admin_client, make_user, app):
        user_id = make_user()
        teacher = app.test_client()
        login(teacher, 'prof@escola.ao')
        teacher.post('/api/plans/save', json={'content': '# Plano'})

        assert admin_client.delete(f'/api/admin/users/{user_id}').status_code == 200
        with app.app_context():
            from models.plan import PlanHistory
            assert PlanHistory.query.count() == 0

    def test_admin_cannot_delete_self(self, admin_client):
        assert admin_client.delete(f'/api/admin/users/{admin_client.user_id}').status_code == 400

    def test_teacher_cannot_manage_users(self, teacher_client):
        assert teacher_client.get('/api/admin/users').status_code == 403


class TestSettings:
    def test_update_and_read(self, admin_client, client):
        admin_client.post('/api/admin/update-settings', json={
            'escola': 'Escola Primária do Cazenga',
            'provincia': 'Luanda',
            'smtp_user': 'ppa@gmail.com',
            'smtp_pass': 'senha-app',
            'smtp_secure': True,
        })

        settings = client.get('/api/settings').get_json()
        assert settings['default_escola'] == 'Escola Primária do Cazenga'
        assert settings['smtp_secure'] == 'true'
        assert settings['smtp_pass_set'] is True
        assert 'smtp_pass' not in settings

    def test_settings_override_smtp_config(self, admin_client, app):
        from utils.mailer import get_smtp_settings

        admin_client.post('/api/admin/update-settings', json={
            'smtp_host': 'smtp.escola.ao', 'smtp_port': '465', 'smtp_user': 'u', 'smtp_pass': 'p'})

        with app.app_context():
            smtp = get_smtp_settings()
        assert smtp['host'] == 'smtp.escola.ao'
        assert smtp['port'] == 465
        assert smtp['admin_email'] == 'admin@ppa.ao'

    def test_invalid_smtp_port_is_rejected(self, admin_client, app):
        for port in ('58 7', 'abc', 0, 70000, True):
            response = admin_client.post('/api/admin/update-settings', json={'smtp_port': port, 'escola': 'X'})
            assert response.status_code == 400, port

        with app.app_context():
            assert Setting.get_value('smtp_port') is None
            assert Setting.get_value('default_escola') is None

    def test_stored_bad_smtp_port_falls_back_to_default(self, client, app):
        with app.app_context():
            for key, value in (('smtp_host', 'smtp.escola.ao'), ('smtp_port', '58 7'),
                               ('smtp_user', 'u'), ('smtp_pass', 'p')):
                Setting.set_value(key, value)
            db.session.commit()

        with patch('utils.mailer.smtplib.SMTP') as smtp_class:
            response = client.post('/api/auth/register', json={'telefone': '923111222', 'password': DEFAULT_PASSWORD})

        assert response.status_code == 200
        smtp_class.assert_called_once_with('smtp.escola.ao', 587, timeout=20)

    def test_logo_is_resized(self, admin_client, client, app):
        response = admin_client.post('/api/admin/upload-logo', json={'logo': png_data_url()})
        assert response.status_code == 200

        logo = client.get('/api/settings/logo').get_json()['logo']
        raw = base64.b64decode(logo.split(',', 1)[1])
        with Image.open(io.BytesIO(raw)) as img:
            assert max(img.size) == 512

    def test_invalid_logo(self, admin_client, app):
        response = admin_client.post('/api/admin/upload-logo', json={'logo': 'data:image/png;base64,bm9wZQ=='})

        assert response.status_code == 400
        with app.app_context():
            assert Setting.get_value('logo') is None

    def test_oversized_logo(self, admin_client, app, monkeypatch):
        monkeypatch.setattr(Image, 'MAX_IMAGE_PIXELS', 1000)

        response = admin_client.post('/api/admin/upload-logo', json={'logo': png_data_url()})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Imagem grande demais'
        with app.app_context():
            assert Setting.get_value('logo') is None


class TestCurriculum:
    def test_seeded_tree(self, client):
        tree = client.get('/api/curriculum/tree').get_json()
        assert 'Letra A' in tree['Iniciação']['Língua Portuguesa']['TEMA 2 – A MINHA FAMÍLIA E EU']['Estudo das Vogais']

    def test_add_new_and_append(self, admin_client, app):
        item = {'classe': '7ª Classe', 'disciplina': 'Física', 'tema': 'TEMA 1', 'subtema': 'Movimento'}
        admin_client.post('/api/admin/curriculum/add', json=dict(item, sumario='Velocidade'))
        admin_client.post('/api/admin/curriculum/add', json=dict(item, sumario='Aceleração'))
        admin_client.post('/api/admin/curriculum/add', json=dict(item, sumario='Velocidade'))

        with app.app_context():
            entry = CurriculumEntry.find('7ª Classe', 'Física', 'TEMA 1', 'Movimento')
            assert entry.sumarios_list == ['Velocidade', 'Aceleração']

    def test_add_requires_fields(self, admin_client):
        assert admin_client.post('/api/admin/curriculum/add', json={'classe': '1ª Classe'}).status_code == 400

    def test_rename_levels(self, admin_client, app):
        base = {'classe': 'Iniciação', 'disciplina': 'Matemática', 'tema': 'TEMA 2 – NÚMEROS E OPERAÇÕES',
                'subtema': 'Operações'}
        admin_client.post('/api/admin/curriculum/edit', json={
            'type': 'sumario', 'oldData': dict(base, sumario='Adição até 9'), 'newData': {'name': 'Adição até 10'}})
        admin_client.post('/api/admin/curriculum/edit', json={
            'type': 'disciplina', 'oldData': base, 'newData': {'name': 'Matemática Básica'}})

        with app.app_context():
            db.session.expire_all()
            entry = CurriculumEntry.find('Iniciação', 'Matemática Básica', base['tema'], 'Operações')
            assert entry.sumarios_list[0] == 'Adição até 10'
            assert CurriculumEntry.query.filter_by(classe='Iniciação', disciplina='Matemática').count() == 0

    def test_remove_most_specific_level(self, admin_client, app):
        base = {'classe': 'Iniciação', 'disciplina': 'Estudo do Meio', 'tema': 'TEMA 1 - A DESCOBERTA DE SI PRÓPRIO'}

        admin_client.post('/api/admin/curriculum/remove', json=dict(base, subtema='O Meu Corpo', sumario='Vacinas'))
        admin_client.post('/api/admin/curriculum/remove',
                          json=dict(base, subtema='Higiene e Saúde', sumario='Vacinas'))
        admin_client.post('/api/admin/curriculum/remove', json=dict(base, subtema='O Meu Corpo'))

        with app.app_context():
            rows = CurriculumEntry.query.filter_by(classe='Iniciação', disciplina='Estudo do Meio').all()
            assert [row.subtema for row in rows] == ['Higiene e Saúde']
            assert rows[0].sumarios_list == ['Higiene corporal', 'Higiene alimentar']

    def test_remove_without_target(self, admin_client):
        assert admin_client.post('/api/admin/curriculum/remove', json={}).status_code == 400

    def test_curriculum_admin_only(self, teacher_client):
        response = teacher_client.post('/api/admin/curriculum/add',
                                       json={'classe': 'x', 'disciplina': 'y', 'tema': 'z'})
        assert response.status_code == 403
