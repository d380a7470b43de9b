"""
Repositorio SQL (MySQL en producción, SQLite en tests) con SQLAlchemy Core.

Uso típico:

- crear el engine con ``crear_engine(url)``
- ``RepositorioSQL(engine)`` crea la tabla ``usuarios`` si no existe

Cada método abre una conexión, ejecuta una sola sentencia parametrizada
y hace commit al salir del bloque ``engine.begin()``.
"""

from __future__ import annotations

from datetime import timezone
from typing import Optional

from loguru import logger
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    func,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import StaticPool

from app.excepciones import EmailDuplicado, ErrorAlmacenamiento
from app.repositorios.base import RepositorioUsuarios

metadata = MetaData()

usuarios_table = Table(
    "usuarios",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("nombre", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("edad", Integer, nullable=True),
    Column("activo", Boolean, nullable=False, default=True),
    Column("fecha_creacion", DateTime, nullable=False),
)


def crear_engine(url: str) -> Engine:
    """
    Crea el engine. Para ``sqlite://`` en memoria se comparte una única
    conexión, si no cada conexión vería una base de datos vacía.
    """
    if url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") == "sqlite:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True, pool_recycle=3600)


def _fila_a_dict(fila) -> dict:
    usuario = dict(fila._mapping)
    usuario['activo'] = bool(usuario['activo'])
    fecha = usuario.get('fecha_creacion')
    # MySQL DATETIME no guarda zona horaria: se guarda y se lee en UTC
    if fecha is not None and fecha.tzinfo is None:
        usuario['fecha_creacion'] = fecha.replace(tzinfo=timezone.utc)
    return usuario


def _a_utc_naive(datos: dict) -> dict:
    datos = dict(datos)
    fecha = datos.get('fecha_creacion')
    if fecha is not None and fecha.tzinfo is not None:
        datos['fecha_creacion'] = fecha.astimezone(timezone.utc).replace(tzinfo=None)
    return datos


class RepositorioSQL(RepositorioUsuarios):
    nombre_backend = "mysql"

    def __init__(self, engine: Engine, crear_tablas: bool = True) -> None:
        self.engine = engine
        if crear_tablas:
            try:
                metadata.create_all(engine)
            except SQLAlchemyError as e:
                raise ErrorAlmacenamiento(f"No se pudo crear la tabla usuarios: {e}") from e
            logger.info("Tabla 'usuarios' lista en {}", engine.url.render_as_string(hide_password=True))

    def listar(self) -> list[dict]:
        with self.engine.connect() as conn:
            filas = conn.execute(select(usuarios_table).order_by(usuarios_table.c.id))
            return [_fila_a_dict(f) for f in filas]

    def obtener(self, user_id: int) -> Optional[dict]:
        with self.engine.connect() as conn:
            fila = conn.execute(
                select(usuarios_table).where(usuarios_table.c.id == user_id)
            ).first()
        return _fila_a_dict(fila) if fila else None

    def buscar_por_email(self, email: str) -> Optional[dict]:
        with self.engine.connect() as conn:
            fila = conn.execute(
                select(usuarios_table).where(func.lower(usuarios_table.c.email) == email.lower())
            ).first()
        return _fila_a_dict(fila) if fila else None

    def crear(self, datos: dict) -> dict:
        datos = _a_utc_naive(datos)
        datos.pop('id', None)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(insert(usuarios_table).values(**datos))
                user_id = result.inserted_primary_key[0]
        except IntegrityError as e:
            # el índice único de email también protege contra altas simultáneas
            raise EmailDuplicado() from e
        return self.obtener(user_id)

    def actualizar(self, user_id: int, cambios: dict) -> Optional[dict]:
        cambios = _a_utc_naive(cambios)
        cambios.pop('id', None)
        if not cambios:
            return self.obtener(user_id)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    update(usuarios_table).where(usuarios_table.c.id == user_id).values(**cambios)
                )
        except IntegrityError as e:
            raise EmailDuplicado() from e
        if result.rowcount == 0:
            return None
        return self.obtener(user_id)

    def eliminar(self, user_id: int) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(delete(usuarios_table).where(usuarios_table.c.id == user_id))
        return result.rowcount > 0

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))


__all__ = ["RepositorioSQL", "crear_engine", "usuarios_table"]
