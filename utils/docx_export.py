"""
Exportação para Word - Portal Pedagógico Angola
===============================================

Monta o documento DOCX do plano de aula no cabeçalho oficial angolano.
"""

import io

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from utils.ai import WATERMARK

DOCX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
DOCX_FILENAME = 'plano_de_aula.docx'

PROVINCIAL_HEADERS = {
    'Luanda': 'GOVERNO PROVINCIAL DE LUANDA',
    'Benguela': 'GOVERNO PROVINCIAL DE BENGUELA',
    'Huambo': 'GOVERNO PROVINCIAL DO HUAMBO',
}


def header_lines(template):
    """Cabeçalho e subcabeçalho conforme o modelo escolhido"""
    header = "MINISTÉRIO DA EDUCAÇÃO" if template == 'Pública' else "REPÚBLICA DE ANGOLA"
    return header, PROVINCIAL_HEADERS.get(template, '')


def _add_bottom_border(paragraph):
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement('w:pBdr')
    bottom = OxmlElement('w:bottom')
    bottom.set(qn('w:val'), 'single')
    bottom.set(qn('w:sz'), '6')
    bottom.set(qn('w:space'), '1')
    bottom.set(qn('w:color'), 'auto')
    borders.append(bottom)
    p_pr.append(borders)


def _add_label(document, label, value):
    paragraph = document.add_paragraph()
    paragraph.add_run(f"{label}: ").bold = True
    paragraph.add_run(str(value))


def build_plan_docx(data):
    """
    Gera o DOCX do plano

    Args:
        data (dict): plano, escola, professor, disciplina, classe, trimestre,
                     aula_numero, tempo, template, provincia, municipio

    Returns:
        io.BytesIO: documento pronto para send_file
    """
    document = Document()
    header, sub_header = header_lines(data.get('template'))

    title = document.add_heading(header, level=1)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    if sub_header:
        document.add_paragraph(sub_header).alignment = WD_ALIGN_PARAGRAPH.CENTER

    document.add_paragraph()
    school = document.add_paragraph()
    school.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = school.add_run(f"ESCOLA: {str(data.get('escola') or '').upper()}")
    run.bold = True
    run.font.size = Pt(12)

    document.add_paragraph()
    plan_title = document.add_paragraph()
    plan_title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = plan_title.add_run("PLANO DE AULA")
    run.bold = True
    run.font.size = Pt(14)
    _add_bottom_border(plan_title)

    document.add_paragraph()
    document.add_paragraph().add_run("DADOS INFORMATIVOS").bold = True
    _add_label(document, "Professor", data.get('professor') or '')
    _add_label(document, "Província", data.get('provincia') or "Não definida")
    _add_label(document, "Município", data.get('municipio') or "Não definido")
    _add_label(document, "Disciplina", data.get('disciplina') or '')
    _add_label(document, "Classe", data.get('classe') or '')
    _add_label(document, "Trimestre", data.get('trimestre') or '')
    _add_label(document, "Aula nº", data.get('aula_numero') or '')
    _add_label(document, "Tempo", f"{data.get('tempo') or ''} min")

    document.add_paragraph()
    development = document.add_paragraph()
    development.add_run("DESENVOLVIMENTO DO PLANO").bold = True
    _add_bottom_border(development)
    document.add_paragraph()

    for line in str(data.get('plano') or '').split('\n'):
        if line.startswith('# '):
            document.add_heading(line[2:], level=2)
        elif line.startswith('## '):
            document.add_heading(line[3:], level=3)
        else:
            document.add_paragraph(line)

    document.add_paragraph()
    signature = document.add_paragraph()
    signature.alignment = WD_ALIGN_PARAGRAPH.CENTER
    signature.add_run("________________________________").bold = True

    teacher = document.add_paragraph()
    teacher.alignment = WD_ALIGN_PARAGRAPH.CENTER
    teacher.add_run("O Professor").font.size = Pt(10)

    document.add_paragraph()
    footer = document.add_paragraph()
    footer.alignment = WD_ALIGN_PARAGRAPH.RIGHT
    run = footer.add_run(WATERMARK)
    run.italic = True
    run.font.size = Pt(8)
    run.font.color.rgb = RGBColor(0x88, 0x88, 0x88)

    output = io.BytesIO()
    document.save(output)
    output.seek(0)
    return output
