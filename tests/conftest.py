from __future__ import annotations

import pytest

from app import create_app
from app.repositorios import RepositorioJSON, RepositorioMemoria, RepositorioSQL, crear_engine
from app.servicios import ServicioUsuarios

BACKENDS = ["memoria", "json", "sql"]


def construir_repositorio(backend: str, tmp_path):
    if backend == "memoria":
        return RepositorioMemoria()
    if backend == "json":
        return RepositorioJSON(tmp_path / "usuarios.json")
    if backend == "sql":
        return RepositorioSQL(crear_engine("sqlite://"))
    raise ValueError(backend)


@pytest.fixture(params=BACKENDS)
def repositorio(request, tmp_path):
    """El mismo test se ejecuta contra cada backend de almacenamiento."""
    repo = construir_repositorio(request.param, tmp_path)
    yield repo
    if isinstance(repo, RepositorioSQL):
        repo.engine.dispose()


@pytest.fixture
def servicio(repositorio):
    return ServicioUsuarios(repositorio)


@pytest.fixture
def app(repositorio, tmp_path):
    config = {
        "TESTING": True,
        "STORAGE_BACKEND": "memoria",
        "USUARIOS_JSON_PATH": str(tmp_path / "no_usado.json"),
        "LOG_LEVEL": "WARNING",
    }
    return create_app(config=config, repositorio=repositorio)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def crear_usuario(client):
    """Da de alta un usuario por la API y devuelve el JSON del usuario creado."""

    def _crear(**campos):
        datos = {"nombre": "Ana García", "email": "ana@email.com", "edad": 28}
        datos.update(campos)
        response = client.post("/api/usuarios", json=datos)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["usuario"]

    return _crear
