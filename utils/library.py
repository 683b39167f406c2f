"""
Biblioteca de Documentos - Portal Pedagógico Angola
===================================================

Árvore de pastas no disco com os programas do ensino primário e os
documentos oficiais (centrais de documentos). Funções para:
- Criar a estrutura padrão de pastas
- Listar a árvore de arquivos
- Resolver caminhos relativos com segurança (sempre dentro da raiz)
- Extrair texto de PDF, DOCX e TXT para contexto da IA
"""

import logging
import os
import shutil

import pdfplumber
from docx import Document
from flask import current_app
from werkzeug.security import safe_join

logger = logging.getLogger(__name__)

FOLDER_DOCS = "Centrais de Documentos"
CLASSES_NOMES = ["Iniciação", "1ª Classe", "2ª Classe", "3ª Classe", "4ª Classe", "5ª Classe", "6ª Classe"]

# Pastas da central de documentos (None = sem subpastas fixas)
ESTRUTURA_DOCS = {
    "Programas do Ensino Primário": CLASSES_NOMES,
    "Cadernos de Avaliação": None,
    "Calendário Escolar": None,
    "Constituição da República": None,
    "Currículo por Níveis": None,
    "Decretos Presidenciais": None,
    "Diário da República": None,
    "Dosificação": None,
    "Estatuto da Carreira Docente": None,
    "Estatuto da Carreira do Ministério da Educação": None,
    "Leis de Bases": None,
    "Regulamento Escolar": None,
    "Outros Documentos": None,
}

LEGACY_FOLDERS = ["Central_Documentos"]
MISPLACED_SUBFOLDERS = ["Centrais de Documentos", "centrais de documentos"]

MAX_EXTRACTED_CHARS = 50000
EXTRACTABLE_EXTENSIONS = {'.pdf', '.docx', '.txt'}


class LibraryPathError(ValueError):
    """Caminho fora da raiz da biblioteca ou nome inválido"""


def library_root():
    return current_app.config['LIBRARY_PATH']


def resolve_library_path(relative_path, root=None):
    """
    Converte um caminho da API ('/Pasta/arquivo.pdf') em caminho absoluto

    Raises:
        LibraryPathError: se o caminho sair da raiz da biblioteca
    """
    root = root or library_root()
    cleaned = (relative_path or '').replace('\\', '/').strip().lstrip('/')
    full_path = safe_join(root, cleaned)
    if full_path is None:
        raise LibraryPathError('Caminho inválido')
    return full_path


def to_library_path(full_path, root=None):
    """Caminho absoluto → caminho da API com '/' inicial"""
    root = root or library_root()
    relative = os.path.relpath(full_path, root).replace(os.sep, '/')
    return '/' + relative


def clean_entry_name(name):
    """
    Nome de arquivo/pasta sem separadores (mantém acentos, ex.: 'Matemática.pdf')

    Raises:
        LibraryPathError: nome vazio ou reservado
    """
    cleaned = os.path.basename((name or '').replace('\\', '/')).strip()
    if cleaned in ('', '.', '..'):
        raise LibraryPathError('Nome de arquivo inválido')
    return cleaned


def ensure_library_structure(root=None):
    """Cria pastas das classes e da central de documentos; remove pastas antigas"""
    root = root or library_root()
    os.makedirs(root, exist_ok=True)

    for legacy in LEGACY_FOLDERS:
        legacy_path = os.path.join(root, legacy)
        if os.path.isdir(legacy_path):
            shutil.rmtree(legacy_path, ignore_errors=True)
            logger.info("Pasta antiga removida da biblioteca: %s", legacy)

    for classe in CLASSES_NOMES:
        os.makedirs(os.path.join(root, classe), exist_ok=True)

    docs_path = os.path.join(root, FOLDER_DOCS)
    for folder, subfolders in ESTRUTURA_DOCS.items():
        folder_path = os.path.join(docs_path, folder)
        os.makedirs(folder_path, exist_ok=True)
        for sub in subfolders or []:
            os.makedirs(os.path.join(folder_path, sub), exist_ok=True)

    programas = os.path.join(docs_path, "Programas do Ensino Primário")
    for unwanted in MISPLACED_SUBFOLDERS:
        unwanted_path = os.path.join(programas, unwanted)
        if os.path.isdir(unwanted_path):
            shutil.rmtree(unwanted_path, ignore_errors=True)


def list_tree(directory=None, root=None):
    """
    Lista recursivamente a biblioteca

    Returns:
        list: [{'name', 'type': 'directory'|'file', 'path', 'children'?}]
    """
    root = root or library_root()
    directory = directory or root
    if not os.path.isdir(directory):
        return []

    nodes = []
    with os.scandir(directory) as entries:
        for entry in sorted(entries, key=lambda e: e.name.lower()):
            node = {'name': entry.name, 'path': to_library_path(entry.path, root)}
            if entry.is_dir():
                node['type'] = 'directory'
                node['children'] = list_tree(entry.path, root)
            else:
                node['type'] = 'file'
            nodes.append(node)
    return nodes


def iter_files(nodes):
    """Percorre a árvore devolvendo apenas os arquivos"""
    for node in nodes:
        if node['type'] == 'file':
            yield node
        else:
            yield from iter_files(node.get('children', []))


def find_related_documents(disciplina, classe, limit=2):
    """Documentos cujo nome menciona a disciplina ou a classe do plano"""
    disciplina = (disciplina or '').lower()
    classe = (classe or '').lower()
    related = []
    for node in iter_files(list_tree()):
        name = node['name'].lower()
        if (disciplina and disciplina in name) or (classe and classe in name):
            related.append(node)
            if len(related) >= limit:
                break
    return related


def save_upload(file_storage, folder=''):
    """
    Grava o arquivo enviado na pasta indicada (criando-a se preciso)

    Returns:
        str: caminho da API do arquivo gravado
    """
    filename = clean_entry_name(file_storage.filename)
    destination = resolve_library_path(folder)
    os.makedirs(destination, exist_ok=True)
    full_path = os.path.join(destination, filename)
    file_storage.save(full_path)
    return to_library_path(full_path)


def delete_entry(relative_path):
    """
    Remove arquivo ou pasta (recursivamente)

    Returns:
        bool: False se não existir
    """
    full_path = resolve_library_path(relative_path)
    if os.path.realpath(full_path) == os.path.realpath(library_root()):
        raise LibraryPathError('Não é possível apagar a raiz da biblioteca')
    if not os.path.lexists(full_path):
        return False
    if os.path.isdir(full_path) and not os.path.islink(full_path):
        shutil.rmtree(full_path)
    else:
        os.remove(full_path)
    return True


def create_folder(relative_path):
    """
    Cria pasta (e intermediárias)

    Returns:
        bool: False se já existir
    """
    full_path = resolve_library_path(relative_path)
    if os.path.exists(full_path):
        return False
    os.makedirs(full_path)
    return True


def extract_text(full_path, max_chars=MAX_EXTRACTED_CHARS):
    """
    Extrai texto de PDF, DOCX ou TXT (outros formatos devolvem '')

    Args:
        full_path (str): Caminho absoluto do arquivo
        max_chars (int): Limite para não sobrecarregar o prompt da IA
    """
    extension = os.path.splitext(full_path)[1].lower()
    text = ''

    if extension == '.pdf':
        with pdfplumber.open(full_path) as pdf:
            text = '\n'.join((page.extract_text() or '') for page in pdf.pages)
    elif extension == '.docx':
        document = Document(full_path)
        text = '\n'.join(paragraph.text for paragraph in document.paragraphs)
    elif extension == '.txt':
        with open(full_path, encoding='utf-8', errors='replace') as f:
            text = f.read()

    return text[:max_chars]
