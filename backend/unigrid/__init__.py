from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def allowed_origins(config):
    """Origins accepted for HTTP and Socket.IO, or '*' when CORS_ANY is set."""
    if config.get('CORS_ANY'):
        return '*'
    return list(config.get('CLIENT_ORIGINS') or [])


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = allowed_origins(flask_app.config)
    CORS(flask_app, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # One grid per process, shared by every handler through the app
    from unigrid.grid import GridServer, SocketIOGateway
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['unigrid'] = GridServer(
        SocketIOGateway(socketio, namespace),
        cooldown_seconds=int(flask_app.config.get('COOLDOWN_SECONDS', 0)),
    )

    from unigrid.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    from unigrid.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace)

    flask_app.logger.info(
        f"[startup] cooldown={flask_app.config.get('COOLDOWN_SECONDS', 0)}s origins={origins} namespace={namespace}"
    )
    return flask_app


def get_grid_server(app=None):
    from flask import current_app
    return (app or current_app).extensions['unigrid']
