import os

from sqlalchemy.engine import URL

# Lee directamente las variables del docker-compose

YES = {"1", "true", "yes", "y", "on", "t", "si", "sí"}


def _flag(valor):
    return str(valor).strip().lower() in YES


def _mysql_url():
    # URL.create escapa los caracteres especiales de usuario y contraseña (@, /, :)
    url = URL.create(
        "mysql+pymysql",
        username=os.getenv('MYSQL_USER', 'root'),
        password=os.getenv('MYSQL_PASSWORD') or None,
        host=os.getenv('MYSQL_HOST', 'localhost'),
        port=int(os.getenv('MYSQL_PORT', '3306')),
        database=os.getenv('MYSQL_DATABASE', 'usuarios_db'),
    )
    return url.render_as_string(hide_password=False)


def cargar_config(overrides=None):
    """
    Construye la configuración de la app a partir del entorno.
    `overrides` (dict) tiene prioridad sobre las variables de entorno.
    """
    config = {
        'STORAGE_BACKEND': os.getenv('STORAGE_BACKEND', 'json').strip().lower(),
        'USUARIOS_JSON_PATH': os.getenv('USUARIOS_JSON_PATH', 'data/usuarios.json'),
        'DATABASE_URL': os.getenv('DATABASE_URL') or _mysql_url(),
        'FLASK_HOST': os.getenv('FLASK_HOST', '0.0.0.0'),
        'FLASK_PORT': int(os.getenv('FLASK_PORT', '5000')),
        'FLASK_DEBUG': _flag(os.getenv('FLASK_DEBUG', 'false')),
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO').strip().upper(),
        'LOG_JSON': _flag(os.getenv('LOG_JSON', 'false')),
    }
    if overrides:
        config.update(overrides)
    return config
