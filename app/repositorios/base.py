"""Interfaz común de los repositorios de usuarios."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.excepciones import EmailDuplicado


class RepositorioUsuarios(ABC):
    """
    Acceso a la colección de usuarios.

    Los registros son diccionarios con las claves de UsuarioResponse
    (id, nombre, email, edad, activo, fecha_creacion). Cada método devuelve
    copias: modificar el resultado no modifica lo almacenado.
    """

    nombre_backend = "base"

    @abstractmethod
    def listar(self) -> list[dict]:
        """Todos los usuarios ordenados por id."""

    @abstractmethod
    def obtener(self, user_id: int) -> Optional[dict]:
        ...

    @abstractmethod
    def buscar_por_email(self, email: str) -> Optional[dict]:
        """Búsqueda sin distinguir mayúsculas."""

    @abstractmethod
    def crear(self, datos: dict) -> dict:
        """Asigna el id y guarda el usuario. Lanza EmailDuplicado si el email ya existe."""

    @abstractmethod
    def actualizar(self, user_id: int, cambios: dict) -> Optional[dict]:
        """
        Aplica `cambios` y devuelve el usuario actualizado, o None si no existe.
        Lanza EmailDuplicado si `cambios` trae el email de otro usuario.
        """

    @abstractmethod
    def eliminar(self, user_id: int) -> bool:
        ...

    def ping(self) -> None:
        """Lanza una excepción si el almacenamiento no está disponible."""


def siguiente_id(usuarios) -> int:
    return max((u['id'] for u in usuarios), default=0) + 1


def comprobar_email_libre(usuarios, email, excepto_id=None) -> None:
    """Lanza EmailDuplicado si otro usuario de la lista ya tiene ese email."""
    email = email.lower()
    for u in usuarios:
        if u['email'].lower() == email and u['id'] != excepto_id:
            raise EmailDuplicado()


__all__ = ["RepositorioUsuarios", "siguiente_id", "comprobar_email_libre"]
