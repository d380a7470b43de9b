"""Repositorio en memoria: una lista de diccionarios, se pierde al reiniciar."""

from __future__ import annotations

import copy
import threading
from typing import Optional

from app.repositorios.base import RepositorioUsuarios, comprobar_email_libre, siguiente_id


class RepositorioMemoria(RepositorioUsuarios):
    nombre_backend = "memoria"

    def __init__(self, usuarios: Optional[list[dict]] = None) -> None:
        self._usuarios = copy.deepcopy(usuarios) if usuarios else []
        self._lock = threading.Lock()

    def listar(self) -> list[dict]:
        with self._lock:
            return copy.deepcopy(sorted(self._usuarios, key=lambda u: u['id']))

    def obtener(self, user_id: int) -> Optional[dict]:
        with self._lock:
            for usuario in self._usuarios:
                if usuario['id'] == user_id:
                    return dict(usuario)
        return None

    def buscar_por_email(self, email: str) -> Optional[dict]:
        email = email.lower()
        with self._lock:
            for usuario in self._usuarios:
                if usuario['email'].lower() == email:
                    return dict(usuario)
        return None

    def crear(self, datos: dict) -> dict:
        with self._lock:
            comprobar_email_libre(self._usuarios, datos['email'])
            usuario = dict(datos, id=siguiente_id(self._usuarios))
            self._usuarios.append(usuario)
            return dict(usuario)

    def actualizar(self, user_id: int, cambios: dict) -> Optional[dict]:
        with self._lock:
            for usuario in self._usuarios:
                if usuario['id'] == user_id:
                    if 'email' in cambios:
                        comprobar_email_libre(self._usuarios, cambios['email'], excepto_id=user_id)
                    usuario.update(cambios)
                    return dict(usuario)
        return None

    def eliminar(self, user_id: int) -> bool:
        with self._lock:
            antes = len(self._usuarios)
            self._usuarios = [u for u in self._usuarios if u['id'] != user_id]
            return len(self._usuarios) < antes


__all__ = ["RepositorioMemoria"]
