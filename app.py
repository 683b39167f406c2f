import os
import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException, NotFound
from dotenv import load_dotenv

from extensions import db, migrate, login_manager, cors

# Carregar variáveis de ambiente do arquivo .env
load_dotenv()

# Criar aplicação Flask
app = Flask(__name__)

# ================================
# CONFIGURAÇÕES DO PPA
# ================================

IS_PRODUCTION = os.environ.get('FLASK_ENV') == 'production'


def env_flag(name, default='false'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


# Chave secreta para sessões
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY') or 'ppa-dev-secret-2026'

# Configuração do banco de dados
app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL') or 'sqlite:///ppa.db'

# Fix para PostgreSQL no Render (substitui postgres:// por postgresql://)
if app.config['SQLALCHEMY_DATABASE_URI'].startswith("postgres://"):
    app.config['SQLALCHEMY_DATABASE_URI'] = app.config['SQLALCHEMY_DATABASE_URI'].replace("postgres://",
                                                                                          "postgresql://", 1)

app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('MAX_CONTENT_LENGTH') or 50 * 1024 * 1024)
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# Biblioteca de documentos (volume persistente em produção)
app.config['LIBRARY_PATH'] = os.environ.get('LIBRARY_PATH') or (
    '/app/data/biblioteca' if IS_PRODUCTION else os.path.join(app.root_path, 'public', 'biblioteca')
)
app.config['FRONTEND_DIST'] = os.environ.get('FRONTEND_DIST') or os.path.join(app.root_path, 'dist')

# IA (Google Gemini)
app.config['GEMINI_API_KEY'] = os.environ.get('GEMINI_API_KEY')
app.config['GEMINI_MODEL'] = os.environ.get('GEMINI_MODEL') or 'gemini-2.5-flash'

# SMTP (valores do painel administrativo têm prioridade)
app.config['SMTP_HOST'] = os.environ.get('SMTP_HOST')
app.config['SMTP_PORT'] = os.environ.get('SMTP_PORT') or '587'
app.config['SMTP_SECURE'] = env_flag('SMTP_SECURE')
app.config['SMTP_USER'] = os.environ.get('SMTP_USER')
app.config['SMTP_PASS'] = os.environ.get('SMTP_PASS')

# Conta do administrador (também recebe as notificações)
app.config['ADMIN_EMAIL'] = (os.environ.get('ADMIN_EMAIL') or 'admin@ppa.ao').lower()
app.config['ADMIN_PASSWORD'] = os.environ.get('ADMIN_PASSWORD')

# Google Drive
app.config['GOOGLE_CLIENT_ID'] = os.environ.get('GOOGLE_CLIENT_ID')
app.config['GOOGLE_CLIENT_SECRET'] = os.environ.get('GOOGLE_CLIENT_SECRET')
app.config['APP_URL'] = os.environ.get('APP_URL') or 'http://localhost:5000'

app.config['ENABLE_SCHEDULER'] = env_flag('ENABLE_SCHEDULER')
app.config['CORS_ORIGINS'] = os.environ.get('CORS_ORIGINS') or '*'

# ================================
# LOGGING
# ================================

logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
)
logger = logging.getLogger('ppa')

# ================================
# INICIALIZAR EXTENSÕES
# ================================

# Banco de dados
db.init_app(app)

# Migrações do banco
migrate.init_app(app, db)

# Pedidos do SPA em desenvolvimento (outra porta)
cors.init_app(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}}, supports_credentials=True)

# Sistema de login
login_manager.init_app(app)

# ================================
# IMPORTAR MODELOS DO BANCO
# ================================

from models.user import User


# Função necessária para o Flask-Login carregar usuários
@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'error': 'Você precisa fazer login para acessar este recurso.'}), 401


# ================================
# IMPORTAR E REGISTRAR ROTAS
# ================================

from routes import (
    auth, plans, user, classroom, questions, library, news, community,
    ai, google_drive, admin, settings, curriculum, dashboard
)

# Registrar blueprints (grupos de rotas)
app.register_blueprint(auth, url_prefix='/api/auth')
app.register_blueprint(plans, url_prefix='/api')
app.register_blueprint(user, url_prefix='/api')
app.register_blueprint(classroom, url_prefix='/api')
app.register_blueprint(questions, url_prefix='/api/questions')
app.register_blueprint(library)
app.register_blueprint(news, url_prefix='/api')
app.register_blueprint(community, url_prefix='/api')
app.register_blueprint(ai, url_prefix='/api/ai')
app.register_blueprint(google_drive)
app.register_blueprint(admin, url_prefix='/api/admin')
app.register_blueprint(settings, url_prefix='/api')
app.register_blueprint(curriculum, url_prefix='/api')
app.register_blueprint(dashboard)


# ================================
# RESPOSTAS DE ERRO EM JSON
# ================================

@app.errorhandler(HTTPException)
def handle_http_error(error):
    """Erros da API em JSON; restantes seguem o padrão do Flask"""
    if not request.path.startswith('/api/'):
        return error

    if isinstance(error, NotFound) and error.description == NotFound.description:
        message = f'API endpoint not found: {request.method} {request.path}'
    else:
        message = error.description
    return jsonify({'error': message}), error.code


# ================================
# COMANDOS DE LINHA
# ================================

from utils.library import ensure_library_structure
from utils.maintenance import run_daily_maintenance, start_scheduler
from utils.seed import seed_database


@app.cli.command('cleanup')
def cleanup_command():
    """Limpeza diária: histórico antigo, notícias expiradas e sincronização"""
    run_daily_maintenance(app)


# ================================
# INICIALIZAÇÃO DO BANCO E DADOS
# ================================

with app.app_context():
    # Criar todas as tabelas do banco
    db.create_all()

    # Currículo, notícias iniciais e administrador
    seed_database()

    # Estrutura de pastas da biblioteca
    ensure_library_structure()

    logger.info("Portal Pedagógico Angola inicializado.")

if app.config['ENABLE_SCHEDULER']:
    start_scheduler(app)

# ================================
# EXECUTAR APLICAÇÃO
# ================================

if __name__ == '__main__':
    # Determinar se está em desenvolvimento ou produção
    debug_mode = os.environ.get('FLASK_ENV') == 'development'

    logger.info("Modo: %s", 'Desenvolvimento' if debug_mode else 'Produção')
    logger.info("Banco: %s", app.config['SQLALCHEMY_DATABASE_URI'])

    # Rodar aplicação
    app.run(
        debug=debug_mode,
        host='0.0.0.0',  # Permite acesso externo
        port=int(os.environ.get('PORT', 5000)),  # Porta flexível para deploy
        use_reloader=False
    )
