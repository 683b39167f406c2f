"""Testes do mural de notícias e do feedback."""

from datetime import datetime, timedelta
from unittest.mock import patch

from conftest import new_client
from extensions import db
from models.news import News, FEEDBACK_RESOLVIDO


class TestNews:
    def test_welcome_news_is_seeded(self, client):
        items = client.get('/api/news').get_json()

        assert len(items) == 3
        assert {item['category'] for item in items} == {'MED', 'Pedagogia', 'Aviso'}
        assert all(item['is_ai_generated'] == 0 for item in items)

    def test_expired_news_is_hidden(self, client, app):
        with app.app_context():
            db.session.add(News(title='Antiga', content='x', expires_at=datetime.utcnow() - timedelta(days=1)))
            db.session.add(News(title='Futura', content='x', expires_at=datetime.utcnow() + timedelta(days=1)))
            db.session.commit()

        titles = [item['title'] for item in client.get('/api/news').get_json()]
        assert 'Antiga' not in titles
        assert 'Futura' in titles

    def test_admin_publishes_and_deletes(self, admin_client, app):
        response = admin_client.post('/api/admin/news', json={
            'title': 'Início do ano lectivo',
            'content': 'As aulas começam a 2 de Fevereiro.',
            'category': 'MED',
            'expires_in_days': 7,
        })
        assert response.status_code == 200
        news_id = response.get_json()['id']

        with app.app_context():
            item = db.session.get(News, news_id)
            assert item.source == 'Portal Pedagógico Angola'
            assert item.expires_at > datetime.utcnow() + timedelta(days=6)

        assert admin_client.delete(f'/api/admin/news/{news_id}').status_code == 200
        with app.app_context():
            assert db.session.get(News, news_id) is None

    def test_title_and_content_are_required(self, admin_client):
        assert admin_client.post('/api/admin/news', json={'title': 'Só título'}).status_code == 400

    def test_invalid_validity(self, admin_client):
        for days in (10 ** 12, 'nunca'):
            response = admin_client.post('/api/admin/news', json={'title': 'x', 'content': 'y', 'expires_in_days': days})
            assert response.status_code == 400
            assert response.get_json()['error'] == 'Validade inválida'

    def test_unknown_category(self, admin_client, app):
        response = admin_client.post('/api/admin/news', json={'title': 'x', 'content': 'y', 'category': 'Desporto'})

        assert response.status_code == 400
        with app.app_context():
            assert News.query.filter_by(title='x').count() == 0

    def test_teacher_cannot_publish(self, teacher_client):
        response = teacher_client.post('/api/admin/news', json={'title': 'x', 'content': 'y'})
        assert response.status_code == 403


class TestFeedback:
    def test_send_and_resolve(self, teacher_client, app):
        with patch('routes.news.send_admin_notification') as notify:
            response = teacher_client.post('/api/feedback', json={'type': 'Crítica', 'content': 'Falta a 7ª classe'})

        assert response.status_code == 200
        notify.assert_called_once()
        assert 'CRÍTICA' in notify.call_args[0][0]

        admin = new_client(app)
        items = admin.get('/api/admin/feedback').get_json()

        assert items[0]['type'] == 'crítica'
        assert items[0]['email'] == 'prof@escola.ao'
        assert items[0]['status'] == 'Pendente'

        assert admin.post('/api/admin/feedback/resolve', json={'id': items[0]['id']}).status_code == 200
        assert admin.get('/api/admin/feedback').get_json()[0]['status'] == FEEDBACK_RESOLVIDO

    def test_invalid_type(self, teacher_client):
        response = teacher_client.post('/api/feedback', json={'type': 'elogio', 'content': 'Muito bom'})
        assert response.status_code == 400

    def test_empty_content(self, teacher_client):
        assert teacher_client.post('/api/feedback', json={'type': 'opinião', 'content': ''}).status_code == 400

    def test_feedback_list_is_admin_only(self, teacher_client):
        assert teacher_client.get('/api/admin/feedback').status_code == 403
