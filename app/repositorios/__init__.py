from app.repositorios.base import RepositorioUsuarios
from app.repositorios.memoria import RepositorioMemoria
from app.repositorios.archivo_json import RepositorioJSON
from app.repositorios.sql import RepositorioSQL, crear_engine

__all__ = [
    "RepositorioUsuarios",
    "RepositorioMemoria",
    "RepositorioJSON",
    "RepositorioSQL",
    "crear_engine",
]
