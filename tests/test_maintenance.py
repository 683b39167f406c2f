"""Testes da limpeza diária, dos dados iniciais e das rotas gerais."""

from datetime import datetime, timedelta
from unittest.mock import patch

from conftest import days_ago
from extensions import db
from models.classroom import CalendarEvent
from models.curriculum import CurriculumEntry
from models.news import News
from models.plan import PlanHistory
from models.user import User
from utils import maintenance
from utils.seed import seed_database


class TestCleanup:
    def test_old_plans_and_expired_news_are_removed(self, app, make_user):
        user_id = make_user()
        with app.app_context():
            old = PlanHistory(user_id=user_id, content='antigo', created_at=days_ago(40))
            recent = PlanHistory(user_id=user_id, content='recente', created_at=days_ago(5))
            db.session.add_all([old, recent])
            db.session.flush()
            db.session.add(CalendarEvent(user_id=user_id, title='Aula', start_date='2026-01-10', plan_id=old.id))
            db.session.add(News(title='Expirada', content='x', expires_at=days_ago(1)))
            db.session.commit()

            removed = maintenance.cleanup_old_data()

            assert removed == {'plans': 1, 'news': 1}
            assert [p.content for p in PlanHistory.query.all()] == ['recente']
            db.session.expire_all()
            assert CalendarEvent.query.one().plan_id is None
            assert News.query.filter_by(title='Expirada').count() == 0

    def test_daily_run_skips_sync_without_gemini(self, app):
        with patch.object(maintenance, 'sync_news') as sync:
            maintenance.run_daily_maintenance(app)
        sync.assert_not_called()

    def test_daily_run_logs_sync_failure(self, app):
        app.config['GEMINI_API_KEY'] = 'chave-teste'
        with patch.object(maintenance, 'sync_news', side_effect=maintenance.ai.AIServiceError('falha')) as sync:
            maintenance.run_daily_maintenance(app)
        sync.assert_called_once()

    def test_ai_news_expire_after_two_weeks(self, app, monkeypatch):
        answer = '[{"title": "T", "content": "C", "category": "MED", "source": "S"}]'
        monkeypatch.setattr(maintenance.ai, 'generate_text', lambda prompt, use_search=False: answer)
        now = datetime(2026, 3, 1, 8, 0)

        with app.app_context():
            assert maintenance.sync_news(now=now) == 1
            item = News.query.filter_by(title='T').one()
            assert item.expires_at == now + timedelta(days=14)

    def test_scheduler_registers_daily_job(self, app):
        with patch.object(maintenance, 'BackgroundScheduler') as scheduler_class:
            scheduler = maintenance.start_scheduler(app)

        try:
            assert app.extensions['scheduler'] is scheduler
            args, kwargs = scheduler.add_job.call_args
            assert args == (maintenance.run_daily_maintenance, 'interval')
            assert kwargs['hours'] == 24
            assert kwargs['args'] == [app]
            scheduler.start.assert_called_once()
            scheduler_class.assert_called_once_with(daemon=True)
        finally:
            app.extensions.pop('scheduler', None)


class TestSeed:
    def test_seed_is_idempotent(self, app):
        with app.app_context():
            curriculum_rows = CurriculumEntry.query.count()
            seed_database()

            assert CurriculumEntry.query.count() == curriculum_rows
            assert News.query.count() == 3
            assert User.query.filter_by(is_admin=True).count() == 1


class TestGeneralRoutes:
    def test_health(self, client):
        body = client.get('/api/health').get_json()
        assert body['status'] == 'ok'

    def test_unknown_api_route(self, client):
        response = client.get('/api/nao-existe')

        assert response.status_code == 404
        assert response.get_json() == {'error': 'API endpoint not found: GET /api/nao-existe'}

    def test_spa_is_served_when_built(self, client, app, tmp_path):
        dist = tmp_path / 'dist'
        (dist / 'assets').mkdir(parents=True)
        (dist / 'index.html').write_text('<div id="root"></div>', encoding='utf-8')
        (dist / 'assets' / 'app.js').write_text('console.log(1)', encoding='utf-8')
        original = app.config['FRONTEND_DIST']
        app.config['FRONTEND_DIST'] = str(dist)
        try:
            page = client.get('/painel/planos')
            script = client.get('/assets/app.js')
        finally:
            app.config['FRONTEND_DIST'] = original

        assert '<div id="root">' in page.get_data(as_text=True)
        assert page.headers['Cache-Control'].startswith('no-cache')
        assert script.get_data(as_text=True) == 'console.log(1)'
