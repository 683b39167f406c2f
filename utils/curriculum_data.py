"""
Currículo padrão do ensino primário (Iniciação à 6ª Classe)
============================================================

Carregado na tabela curriculum quando ela está vazia.
Estrutura: classe → disciplina → tema → subtema → [sumários]
"""

CURRICULO = {
    "Iniciação": {
        "Língua Portuguesa": {
            "TEMA 2 – A MINHA FAMÍLIA E EU": {
                "Estudo das Vogais": ["Letra I", "Letra O", "Letra U", "Letra E", "Letra A"],
                "Sons e Ditongos": ["Vogais nasais", "Ditongos orais", "Ditongos nasais"],
            },
            "TEMA 3 – EU VOU À ESCOLA": {
                "Consoantes Iniciais": ["Estudo da letra P", "Estudo da letra B", "Estudo da letra M"],
                "Consoantes Dentais": ["Estudo da letra T", "Estudo da letra D"],
            },
        },
        "Estudo do Meio": {
            "TEMA 1 - A DESCOBERTA DE SI PRÓPRIO": {
                "O Meu Corpo": ["Identificação pessoal", "Partes do corpo", "Órgãos dos sentidos"],
                "Higiene e Saúde": ["Higiene corporal", "Higiene alimentar", "Vacinas"],
            },
        },
        "Matemática": {
            "TEMA 2 – NÚMEROS E OPERAÇÕES": {
                "Números Naturais": ["Números de 1 a 10", "Números de 11 a 20", "A Dezena"],
                "Operações": ["Adição até 9", "Subtracção até 9"],
            },
        },
        "Educação Manual e Plástica": {"TEMA 1": {"Geral": ["Grafismos", "Pintura Livre"]}},
        "Educação Musical": {"TEMA 1": {"Geral": ["Sons da Natureza", "Canções Infantis"]}},
        "Educação Física": {"TEMA 1": {"Geral": ["Esquema Corporal", "Jogos de Perseguição"]}},
    },
    "1ª Classe": {
        "Língua Portuguesa": {
            "TEMA 1 - QUEM SOU EU?": {"Geral": ["Eu sou", "Eu chamo-me", "Identificar pessoas"]},
        },
        "Matemática": {
            "TEMA 2 – NÚMEROS": {"Geral": ["Números até 10", "Adição até 9"]},
        },
        "Estudo do Meio": {
            "TEMA 1": {"Geral": ["O meu corpo", "Higiene"]},
        },
        "Educação Manual e Plástica": {"TEMA 1": {"Geral": ["Recorte e Colagem", "Desenho de Observação"]}},
        "Educação Musical": {"TEMA 1": {"Geral": ["Ritmo e Pulsação", "Hino Nacional"]}},
        "Educação Física": {"TEMA 1": {"Geral": ["Ginástica Básica", "Atletismo Infantil"]}},
    },
    "2ª Classe": {
        "Língua Portuguesa": {"TEMA 1": {"Geral": ["A Minha Escola", "A Minha Família"]}},
        "Matemática": {"TEMA 1": {"Geral": ["Números até 100", "Subtracção"]}},
        "Estudo do Meio": {"TEMA 1": {"Geral": ["A Descoberta de Ti Mesmo"]}},
        "Educação Manual e Plástica": {"TEMA 1": {"Geral": ["Modelagem", "Pintura com Guache"]}},
        "Educação Musical": {"TEMA 1": {"Geral": ["Instrumentos de Percussão", "Melodia"]}},
        "Educação Física": {"TEMA 1": {"Geral": ["Jogos Colectivos", "Equilíbrio"]}},
    },
    "3ª Classe": {
        "Língua Portuguesa": {"TEMA 1": {"Geral": ["Leitura e Compreensão"]}},
        "Matemática": {"TEMA 1": {"Geral": ["Multiplicação", "Divisão"]}},
        "Estudo do Meio": {"TEMA 1": {"Geral": ["Comunidade e Sociedade"]}},
        "Educação Manual e Plástica": {"TEMA 1": {"Geral": ["Artesanato Local", "Teoria das Cores"]}},
        "Educação Musical": {"TEMA 1": {"Geral": ["Flauta de Bisel", "Canto Coral"]}},
        "Educação Física": {"TEMA 1": {"Geral": ["Desportos de Combate (Iniciação)", "Dança Tradicional"]}},
    },
    "4ª Classe": {
        "Língua Portuguesa": {"TEMA 1": {"Geral": ["Gramática Aplicada"]}},
        "Matemática": {"TEMA 1": {"Geral": ["Fracções", "Geometria"]}},
        "Estudo do Meio": {"TEMA 1": {"Geral": ["História de Angola (Iniciação)"]}},
        "Educação Manual e Plástica": {"TEMA 1": {"Geral": ["Perspectiva", "Design de Objectos"]}},
        "Educação Musical": {"TEMA 1": {"Geral": ["Notação Musical", "História da Música Angolana"]}},
        "Educação Física": {"TEMA 1": {"Geral": ["Voleibol", "Basquetebol"]}},
    },
    "5ª Classe": {
        "Língua Portuguesa": {"TEMA 1": {"Geral": ["Produção de Textos"]}},
        "Matemática": {"TEMA 1": {"Geral": ["Números Decimais", "Percentagem"]}},
        "Estudo do Meio": {"TEMA 1": {"Geral": ["Geografia de Angola"]}},
        "História": {"TEMA 1": {"Geral": ["A Chegada dos Portugueses", "Resistência Anticolonial"]}},
        "Geografia": {"TEMA 1": {"Geral": ["Relevo de Angola", "Clima e Vegetação"]}},
        "Educação Moral e Cívica": {"TEMA 1": {"Geral": ["Valores Éticos", "Direitos da Criança"]}},
        "Educação Manual e Plástica": {"TEMA 1": {"Geral": ["Escultura", "Artes Digitais"]}},
        "Educação Musical": {"TEMA 1": {"Geral": ["Harmonia", "Composição Simples"]}},
        "Educação Física": {"TEMA 1": {"Geral": ["Futebol", "Andebol"]}},
    },
    "6ª Classe": {
        "Língua Portuguesa": {"TEMA 1": {"Geral": ["Análise Literária"]}},
        "Matemática": {"TEMA 1": {"Geral": ["Equações", "Estatística"]}},
        "Estudo do Meio": {"TEMA 1": {"Geral": ["Organização Política de Angola"]}},
        "História": {"TEMA 1": {"Geral": ["Independência de Angola", "Figuras Históricas"]}},
        "Geografia": {"TEMA 1": {"Geral": ["Recursos Naturais", "População e Povoamento"]}},
        "Educação Moral e Cívica": {"TEMA 1": {"Geral": ["Cidadania e Democracia", "Símbolos Nacionais"]}},
        "Educação Manual e Plástica": {"TEMA 1": {"Geral": ["História da Arte", "Projecto Final"]}},
        "Educação Musical": {"TEMA 1": {"Geral": ["Grandes Compositores", "Performance"]}},
        "Educação Física": {"TEMA 1": {"Geral": ["Treino de Condição Física", "Arbitragem"]}},
    },
}


def iter_curriculum_rows(curriculo=None):
    """Achata o dicionário em (classe, disciplina, tema, subtema, sumarios)"""
    for classe, disciplinas in (curriculo or CURRICULO).items():
        for disciplina, temas in disciplinas.items():
            for tema, subtemas in temas.items():
                for subtema, sumarios in subtemas.items():
                    yield classe, disciplina, tema, subtema, list(sumarios)
