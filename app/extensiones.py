from loguru import logger

from app.repositorios import RepositorioJSON, RepositorioMemoria, RepositorioSQL, crear_engine

BACKENDS = ('memoria', 'json', 'mysql')


def init_repositorio(config):
    """Crea el repositorio indicado por STORAGE_BACKEND y comprueba que responde."""
    backend = config['STORAGE_BACKEND']

    if backend == 'memoria':
        repositorio = RepositorioMemoria()
    elif backend == 'json':
        repositorio = RepositorioJSON(config['USUARIOS_JSON_PATH'])
    elif backend == 'mysql':
        repositorio = RepositorioSQL(crear_engine(config['DATABASE_URL']))
    else:
        raise ValueError(f"STORAGE_BACKEND desconocido: {backend!r} (opciones: {', '.join(BACKENDS)})")

    try:
        repositorio.ping()
        logger.info("Almacenamiento '{}' listo", backend)
    except Exception as e:
        logger.error("Error conectando con el almacenamiento '{}': {}", backend, e)
        raise

    return repositorio
