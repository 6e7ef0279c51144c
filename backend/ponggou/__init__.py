from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

SESSION_EXTENSION = 'ponggou.session'


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = [o.strip() for o in flask_app.config.get('CORS_ORIGINS', '').split(',') if o.strip()]

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One tournament session per app; all actions go through its lock
    from ponggou.notifier import SocketIONotifier
    from ponggou.services.tournament import SqlStore, TournamentSession
    flask_app.extensions[SESSION_EXTENSION] = TournamentSession(
        store=SqlStore(prefix=flask_app.config.get('STORAGE_KEY_PREFIX', 'pongGou_')),
        listener=SocketIONotifier(socketio),
    )

    from ponggou.api.tournament import tournament
    flask_app.register_blueprint(tournament, url_prefix='/api/tournament')

    @flask_app.route('/')
    def index():
        return jsonify({'message': 'Welcome to the Pong Gou tournament server!'})

    from ponggou.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import ponggou.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            flask_app.extensions[SESSION_EXTENSION].reload()
            print('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app


def get_session():
    from flask import current_app
    return current_app.extensions[SESSION_EXTENSION]
