"""
Manutenção Diária - Portal Pedagógico Angola
============================================

- Apaga histórico de planos com mais de 30 dias
- Apaga notícias expiradas
- Sincroniza notícias do MED com a IA (quando o Gemini está configurado)

Corre via APScheduler (ENABLE_SCHEDULER) ou pelo comando `flask cleanup`.
"""

import logging
from datetime import datetime, timedelta

from apscheduler.schedulers.background import BackgroundScheduler

from extensions import db
from models.news import News
from models.plan import PlanHistory, detach_plan_references
from utils import ai

logger = logging.getLogger(__name__)

HISTORY_RETENTION_DAYS = 30
AI_NEWS_LIFETIME_DAYS = 14


def cleanup_old_data(now=None):
    """
    Remove planos antigos e notícias expiradas

    Returns:
        dict: {'plans': n, 'news': n} registros apagados
    """
    now = now or datetime.utcnow()
    cutoff = now - timedelta(days=HISTORY_RETENTION_DAYS)

    old_plan_ids = [row.id for row in PlanHistory.query.filter(PlanHistory.created_at < cutoff)]
    if old_plan_ids:
        detach_plan_references(old_plan_ids)
        PlanHistory.query.filter(PlanHistory.id.in_(old_plan_ids)).delete(synchronize_session=False)

    expired_news = News.query.filter(News.expires_at.isnot(None), News.expires_at < now).delete(
        synchronize_session=False)

    db.session.commit()
    return {'plans': len(old_plan_ids), 'news': expired_news}


def sync_news(now=None):
    """
    Pede à IA as notícias recentes da educação em Angola

    Returns:
        int: número de notícias novas (títulos repetidos são ignorados)

    Raises:
        ai.AIServiceError: falha na IA ou resposta inválida
    """
    now = now or datetime.utcnow()
    items = ai.parse_news_items(ai.generate_text(ai.build_news_prompt(), use_search=True))
    expires_at = now + timedelta(days=AI_NEWS_LIFETIME_DAYS)

    seen = set()
    count = 0
    for item in items:
        if item['title'] in seen or News.query.filter_by(title=item['title']).first():
            continue
        seen.add(item['title'])
        db.session.add(News(
            title=item['title'],
            content=item['content'],
            category=item['category'],
            source=item['source'],
            is_ai_generated=True,
            date=now,
            expires_at=expires_at
        ))
        count += 1

    db.session.commit()
    return count


def run_daily_maintenance(app):
    """Tarefa agendada: limpeza + sincronização (erros vão para o log)"""
    with app.app_context():
        logger.info("Executando limpeza diária e sincronização de notícias...")
        removed = cleanup_old_data()
        logger.info("Limpeza concluída: %(plans)d planos, %(news)d notícias removidas.", removed)

        if not ai.is_configured():
            logger.info("Gemini não configurado, sincronização de notícias ignorada.")
            return

        try:
            count = sync_news()
            logger.info("Sincronização automática concluída: %d notícias novas.", count)
        except ai.AIServiceError:
            db.session.rollback()
            logger.exception("Falha na sincronização automática de notícias")


def start_scheduler(app):
    """Agenda a manutenção a cada 24h, com primeira execução imediata"""
    scheduler = BackgroundScheduler(daemon=True)
    scheduler.add_job(
        run_daily_maintenance,
        'interval',
        hours=24,
        args=[app],
        id='daily_maintenance',
        next_run_time=datetime.now(),
        replace_existing=True
    )
    scheduler.start()
    app.extensions['scheduler'] = scheduler
    logger.info("Agendador de manutenção diária iniciado.")
    return scheduler
