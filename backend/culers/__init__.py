import sqlite3

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine
from werkzeug.exceptions import HTTPException
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with reference checks off; allocation batches rely on them
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS') or '*')

    # Import and register blueprints here
    from culers.main import main
    flask_app.register_blueprint(main)

    from culers.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')

    from culers.api.allocations import allocations
    flask_app.register_blueprint(allocations, url_prefix='/api')

    from culers.api.matches import matches
    flask_app.register_blueprint(matches, url_prefix='/api')

    _register_error_handlers(flask_app)

    from culers.seed import init_db, reset_db

    if flask_app.config.get('AUTO_BOOTSTRAP'):
        with flask_app.app_context():
            init_db()

    @click.command('init-db')
    def init_db_command():
        """Creates missing tables and seeds demo rows if empty."""
        with flask_app.app_context():
            init_db()
            print('Database is initialized.')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            reset_db()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(init_db_command)
    flask_app.cli.add_command(db_reset_command)

    return flask_app


def _register_error_handlers(flask_app):
    from culers.errors import CulersError

    @flask_app.errorhandler(CulersError)
    def handle_culers_error(exc):
        return jsonify({'error': exc.user_message}), exc.status_code

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code
