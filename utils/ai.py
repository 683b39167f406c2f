"""
Integração com IA (Google Gemini) - Portal Pedagógico Angola
============================================================

Responsável por:
- Montar os prompts (plano de aula no layout oficial, banco de questões, notícias)
- Chamar o modelo Gemini
- Interpretar a resposta JSON da sincronização de notícias
"""

import json
import logging
import re

from flask import current_app
from google import genai
from google.genai.errors import APIError
from google.genai.types import GenerateContentConfig

logger = logging.getLogger(__name__)

WATERMARK = "Gerado por Portal Pedagógico Angola (PPA) - Qualidade INIDE"
NEWS_REQUIRED_FIELDS = ('title', 'content', 'category', 'source')

_FENCE_RE = re.compile(r'^```(?:json)?\s*|\s*```$', re.IGNORECASE)


class AIServiceError(Exception):
    """Falha na chamada ou na resposta do modelo de IA"""


def is_configured():
    return bool(current_app.config.get('GEMINI_API_KEY'))


def get_client():
    """Cliente Gemini reutilizado entre pedidos (guardado em app.extensions)"""
    if not is_configured():
        raise AIServiceError('Chave da API Gemini não configurada')

    client = current_app.extensions.get('gemini_client')
    if client is None:
        client = genai.Client(api_key=current_app.config['GEMINI_API_KEY'])
        current_app.extensions['gemini_client'] = client
    return client


def generate_text(prompt, use_search=False):
    """
    Gera texto com o modelo configurado

    Args:
        prompt (str): Instruções completas
        use_search (bool): ativa a pesquisa Google (grounding)

    Returns:
        str: Texto gerado

    Raises:
        AIServiceError: erro da API ou resposta vazia
    """
    client = get_client()
    config = GenerateContentConfig(tools=[{"google_search": {}}]) if use_search else None

    try:
        response = client.models.generate_content(
            model=current_app.config['GEMINI_MODEL'],
            contents=prompt,
            config=config
        )
    except APIError as e:
        logger.exception("Erro na API do Gemini")
        raise AIServiceError(f'Erro na API do Gemini: {e}') from e

    text = (response.text or '').strip()
    if not text:
        raise AIServiceError('O modelo não devolveu conteúdo')
    return text


def build_plan_prompt(form, provincia, municipio, inide_context=''):
    """Prompt do plano de aula no layout oficial do Ministério da Educação"""
    if inide_context:
        context_block = (
            "Use as seguintes informações extraídas dos manuais oficiais do INIDE como base principal "
            f"para o conteúdo pedagógico:\n{inide_context}"
        )
    else:
        context_block = (
            "Nota: Não foram encontrados manuais específicos na biblioteca local, "
            "use seu conhecimento interno sobre o currículo de Angola."
        )

    return f"""
Você é um especialista em educação angolana. Gere um plano de aula completo e rigoroso baseado no currículo oficial do INIDE (Angola).

{context_block}

LAYOUT OFICIAL ANGOLA - MINISTÉRIO DA EDUCAÇÃO
--------------------------------------------------
Escola: {form.get('escola', '')}
Professor: {form.get('professor', '')}
Província: {provincia}
Município: {municipio}
Disciplina: {form.get('disciplina', '')}
Classe: {form.get('classe', '')}
Trimestre: {form.get('trimestre', '')}
Tempo: {form.get('tempo', '')}
Aula nº: {form.get('aula_numero', '')}
Unidade temática: {form.get('tema', '')}
Subtema: {form.get('subtema', '')}
Sumário: {form.get('sumario', '')}

Se o subtema for amplo, divida em mais de uma aula de 45 minutos.

ESTRUTURA OBRIGATÓRIA DO PLANO:
1. Objetivo Geral do tema (baseado no programa do INIDE)
2. Objetivos da Aula (Operacionalizados)
3. Conteúdo (Fiel aos manuais do INIDE)
4. Material Didáctico
5. Metodologia (Ativa e participativa)
6. Actividades Chave
7. Tipo de Avaliação
8. Procedimentos (O passo a passo detalhado):
    - Introdução (Acolhimento e apresentação ou motivação)
    - Desenvolvimento (Explicação clara e exemplos práticos)
    - Atividades ou exercícios (Para os alunos resolverem)
    - Consolidação (Resumo dos pontos principais)
    - Avaliação (Verificação rápida da aprendizagem)
    - Tarefa para Casa

Linguagem formal pedagógica angolana.
Adicione uma marca d'água textual no final: "{WATERMARK}"

IMPORTANTE: No final do plano, após a marca d'água, adicione uma seção chamada "RECOMENDAÇÕES DA IA PARA O PROFESSOR" com 3 a 5 dicas práticas de como aplicar este plano específico (ex: revisar 3 vezes antes da aula, preparar material X com antecedência, etc).

Formate a resposta em Markdown rico."""


def build_questions_prompt(subject, classe, topic, count):
    return (
        f"Gere um banco de {count} questões de prova para a disciplina de {subject}, {classe}, "
        f"sobre o tema: {topic}.\n"
        "Inclua questões de múltipla escolha e de resposta curta. Forneça também as soluções.\n"
        "Formate em Markdown elegante."
    )


def build_news_prompt():
    return (
        "Pesquise as notícias mais recentes (últimas 24h) sobre o Ministério da Educação de Angola (MED), "
        "Governo de Angola e sindicatos da educação em Angola. Retorne apenas uma lista de notícias em "
        "formato JSON (array), sem texto adicional. Cada notícia deve ter: title, content, "
        "category (MED, Pedagogia ou Aviso), source (nome do site oficial). Verifique a credibilidade "
        "das fontes (apenas sites oficiais .gov.ao ou jornais de renome)."
    )


def parse_news_items(text):
    """
    Interpreta a lista JSON de notícias devolvida pelo modelo

    Aceita blocos ```json ... ``` e ignora itens sem os campos obrigatórios.

    Raises:
        AIServiceError: se o texto não contém uma lista JSON
    """
    cleaned = _FENCE_RE.sub('', (text or '').strip())
    start, end = cleaned.find('['), cleaned.rfind(']')
    if start == -1 or end < start:
        raise AIServiceError('Resposta da IA sem lista de notícias')

    try:
        items = json.loads(cleaned[start:end + 1])
    except ValueError as e:
        raise AIServiceError('Resposta da IA em JSON inválido') from e

    news = []
    for item in items:
        if not isinstance(item, dict):
            continue
        if all(str(item.get(field) or '').strip() for field in NEWS_REQUIRED_FIELDS):
            news.append({field: str(item[field]).strip() for field in NEWS_REQUIRED_FIELDS})
    return news
