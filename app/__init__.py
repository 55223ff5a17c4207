from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv
import logging

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()
csrf = CSRFProtect()

def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object('config')
    if test_config:
        app.config.update(test_config)

    # Validate required settings
    if not app.config.get('TESTING'):
        for key in ('SECRET_KEY', 'SQLALCHEMY_DATABASE_URI'):
            if not app.config.get(key):
                raise ValueError(f"Required setting {key} is not set")

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    # Register blueprints
    from app.routes.main import main_bp
    from app.projects.calculator.routes import calculator_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(calculator_bp, url_prefix='/calculator')

    # CLI commands
    from app.projects.calculator.commands import calculator_cli
    app.cli.add_command(calculator_cli)

    # Import models to ensure they're known to Flask-SQLAlchemy
    from app.models import LogEntry
    from app.projects.calculator.models import CalculatorProfile

    return app
