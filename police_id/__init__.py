from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from alembic import command
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')


def env_flag(name, default):
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def create_app(config_overrides=None):
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL') or 'sqlite:///police_system.db'
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['MAX_CONTENT_LENGTH'] = 10 * 1024 * 1024  # photos and flags arrive as data URIs
    app.config['ID_NUMBER_PREFIX'] = os.environ.get('ID_NUMBER_PREFIX') or 'BGR-POL'
    app.config['PUBLIC_BASE_URL'] = os.environ.get('PUBLIC_BASE_URL')
    app.config['AUTO_MIGRATE'] = env_flag('AUTO_MIGRATE', True)
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL') or 'INFO'
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Relative sqlite paths resolve into the instance folder
    os.makedirs(app.instance_path, exist_ok=True)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)

    if app.config['AUTO_MIGRATE']:
        with app.app_context():
            upgrade_schema()

    # Wire the services once; handlers look them up on app.extensions
    from police_id.repository import MemberRepository, ScanLogger, StatsAggregator

    members = MemberRepository(db.session, prefix=app.config['ID_NUMBER_PREFIX'])
    app.extensions['police_id'] = {
        'members': members,
        'scans': ScanLogger(db.session, members),
        'stats': StatsAggregator(db.session),
    }

    from police_id.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from police_id.routes.api import api_bp
    from police_id.routes.verification import verification_bp

    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(verification_bp)

    return app


def upgrade_schema():
    """Apply pending schema revisions. Must run inside an app context."""
    config = migrate.get_config()
    # Keep the application's logging setup; alembic.ini logging is for the CLI
    config.attributes['configure_logger'] = False
    command.upgrade(config, 'head')
    # Drop pooled connections so forked workers open their own
    db.engine.dispose()
