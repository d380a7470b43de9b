"""
Repositorio sobre un archivo JSON.

Cada operación lee la colección completa, la modifica y la vuelve a escribir
entera. La escritura va a un archivo temporal que luego reemplaza al original.
El lock cubre lectura, comprobación del email y escritura, pero solo entre
hilos del mismo proceso: varios procesos escribiendo el mismo archivo no
están soportados (para eso está el backend MySQL).
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from app.excepciones import ErrorAlmacenamiento
from app.repositorios.base import RepositorioUsuarios, comprobar_email_libre, siguiente_id


def _a_json(usuario: dict) -> dict:
    datos = dict(usuario)
    if isinstance(datos.get('fecha_creacion'), datetime):
        datos['fecha_creacion'] = datos['fecha_creacion'].isoformat()
    return datos


def _desde_json(datos: dict) -> dict:
    usuario = dict(datos)
    if isinstance(usuario.get('fecha_creacion'), str):
        usuario['fecha_creacion'] = datetime.fromisoformat(usuario['fecha_creacion'])
    return usuario


class RepositorioJSON(RepositorioUsuarios):
    nombre_backend = "json"

    def __init__(self, ruta) -> None:
        self.ruta = Path(ruta)
        self._lock = threading.Lock()

    # ==================== LECTURA / ESCRITURA ====================

    def _leer(self) -> list[dict]:
        if not self.ruta.exists():
            return []
        try:
            with open(self.ruta, 'r', encoding='utf-8') as f:
                contenido = f.read()
            if not contenido.strip():
                return []
            datos = json.loads(contenido)
        except (OSError, ValueError) as e:
            # no se sobrescribe un archivo que no se pudo leer
            raise ErrorAlmacenamiento(f"No se pudo leer {self.ruta}: {e}") from e

        if not isinstance(datos, list):
            raise ErrorAlmacenamiento(f"{self.ruta} no contiene una lista de usuarios")
        usuarios = []
        for i, registro in enumerate(datos):
            if not (isinstance(registro, dict)
                    and isinstance(registro.get('id'), int)
                    and isinstance(registro.get('email'), str)
                    and isinstance(registro.get('nombre'), str)):
                raise ErrorAlmacenamiento(f"{self.ruta}: registro {i} sin id, nombre o email válidos")
            try:
                usuarios.append(_desde_json(registro))
            except ValueError as e:
                raise ErrorAlmacenamiento(f"{self.ruta}: registro {i} con fecha inválida: {e}") from e
        return usuarios

    def _escribir(self, usuarios: list[dict]) -> None:
        self.ruta.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.ruta.parent, prefix=self.ruta.name, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump([_a_json(u) for u in usuarios], f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.ruta)
        except OSError as e:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise ErrorAlmacenamiento(f"No se pudo escribir {self.ruta}: {e}") from e
        logger.debug("{} usuarios guardados en {}", len(usuarios), self.ruta)

    # ==================== CRUD ====================

    def listar(self) -> list[dict]:
        return sorted(self._leer(), key=lambda u: u['id'])

    def obtener(self, user_id: int) -> Optional[dict]:
        return next((u for u in self._leer() if u['id'] == user_id), None)

    def buscar_por_email(self, email: str) -> Optional[dict]:
        email = email.lower()
        return next((u for u in self._leer() if u['email'].lower() == email), None)

    def crear(self, datos: dict) -> dict:
        with self._lock:
            usuarios = self._leer()
            comprobar_email_libre(usuarios, datos['email'])
            usuario = dict(datos, id=siguiente_id(usuarios))
            usuarios.append(usuario)
            self._escribir(usuarios)
        return usuario

    def actualizar(self, user_id: int, cambios: dict) -> Optional[dict]:
        with self._lock:
            usuarios = self._leer()
            usuario = next((u for u in usuarios if u['id'] == user_id), None)
            if usuario is None:
                return None
            if 'email' in cambios:
                comprobar_email_libre(usuarios, cambios['email'], excepto_id=user_id)
            usuario.update(cambios)
            self._escribir(usuarios)
        return dict(usuario)

    def eliminar(self, user_id: int) -> bool:
        with self._lock:
            usuarios = self._leer()
            restantes = [u for u in usuarios if u['id'] != user_id]
            if len(restantes) == len(usuarios):
                return False
            self._escribir(restantes)
        return True

    def ping(self) -> None:
        self._leer()


__all__ = ["RepositorioJSON"]
