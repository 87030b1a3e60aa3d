import os


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    PORT = int(os.environ.get('PORT', '4000'))
    # 0 means one move per player for the lifetime of the process
    COOLDOWN_SECONDS = int(os.environ.get('COOLDOWN_SECONDS', '0'))
    # Comma-separated allow-list of browser origins
    CLIENT_ORIGINS = _split_origins(os.environ.get('CLIENT_ORIGIN', 'http://localhost:5173'))
    # Set CORS_ANY=1 to accept every origin
    CORS_ANY = os.environ.get('CORS_ANY') == '1'
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
