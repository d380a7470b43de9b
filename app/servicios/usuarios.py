"""Reglas de negocio de usuarios, independientes del almacenamiento."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from app.excepciones import UsuarioNoEncontrado
from app.repositorios.base import RepositorioUsuarios
from app.schemas.usuarios import Estadisticas, UsuarioCreate, UsuarioResponse, UsuarioUpdate


class ServicioUsuarios:
    """
    Orquesta validaciones y repositorio. Devuelve siempre UsuarioResponse.

    La unicidad del email la garantiza el repositorio (lock o índice único),
    que lanza EmailDuplicado en crear y actualizar.
    """

    def __init__(self, repositorio: RepositorioUsuarios) -> None:
        self.repositorio = repositorio

    def _obtener_o_404(self, user_id: int) -> dict:
        usuario = self.repositorio.obtener(user_id)
        if usuario is None:
            raise UsuarioNoEncontrado()
        return usuario

    # ==================== LECTURA ====================

    def listar(self, activo: Optional[bool] = None, buscar: Optional[str] = None) -> list[UsuarioResponse]:
        usuarios = self.repositorio.listar()

        if activo is not None:
            usuarios = [u for u in usuarios if u['activo'] == activo]

        consulta = (buscar or '').strip().lower()
        if consulta:
            usuarios = [
                u for u in usuarios
                if consulta in u['nombre'].lower() or consulta in u['email'].lower()
            ]

        return [UsuarioResponse(**u) for u in usuarios]

    def obtener(self, user_id: int) -> UsuarioResponse:
        return UsuarioResponse(**self._obtener_o_404(user_id))

    def estadisticas(self) -> Estadisticas:
        usuarios = self.repositorio.listar()
        activos = sum(1 for u in usuarios if u['activo'])
        edades = [u['edad'] for u in usuarios if u.get('edad') is not None]

        return Estadisticas(
            total=len(usuarios),
            activos=activos,
            inactivos=len(usuarios) - activos,
            edad_promedio=round(sum(edades) / len(edades), 1) if edades else None,
        )

    # ==================== ESCRITURA ====================

    def crear(self, datos: UsuarioCreate) -> UsuarioResponse:
        usuario_dict = datos.model_dump()
        usuario_dict['fecha_creacion'] = datetime.now(timezone.utc)

        usuario = self.repositorio.crear(usuario_dict)
        logger.info("Usuario creado: id={} email={}", usuario['id'], usuario['email'])
        return UsuarioResponse(**usuario)

    def reemplazar(self, user_id: int, datos: UsuarioCreate) -> UsuarioResponse:
        """PUT: reemplaza nombre, email, edad y activo. id y fecha_creacion no cambian."""
        self._obtener_o_404(user_id)
        return self._guardar_cambios(user_id, datos.model_dump())

    def actualizar(self, user_id: int, datos: UsuarioUpdate) -> UsuarioResponse:
        """PATCH: solo los campos enviados."""
        self._obtener_o_404(user_id)
        cambios = datos.cambios()
        return self._guardar_cambios(user_id, cambios)

    def _guardar_cambios(self, user_id: int, cambios: dict) -> UsuarioResponse:
        usuario = self.repositorio.actualizar(user_id, cambios)
        if usuario is None:
            # borrado entre la lectura y la escritura
            raise UsuarioNoEncontrado()
        logger.info("Usuario actualizado: id={} campos={}", user_id, sorted(cambios))
        return UsuarioResponse(**usuario)

    def eliminar(self, user_id: int) -> UsuarioResponse:
        usuario = self._obtener_o_404(user_id)
        if not self.repositorio.eliminar(user_id):
            raise UsuarioNoEncontrado()
        logger.info("Usuario eliminado: id={}", user_id)
        return UsuarioResponse(**usuario)


__all__ = ["ServicioUsuarios"]
