"""
Extensões Flask - Portal Pedagógico Angola
==========================================

Instâncias únicas das extensões, ligadas à aplicação em app.py.
Os modelos importam `db` daqui para evitar import circular com app.py.
"""

from flask_cors import CORS
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
cors = CORS()
