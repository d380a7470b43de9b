from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime


def _quitar_espacios(v):
    # antes de max_length: los espacios de relleno no cuentan
    if isinstance(v, str):
        return v.strip()
    return v


def _validar_nombre(v):
    if not v:
        raise ValueError("El nombre no puede estar vacío")
    return v


def _validar_email(v):
    v = v.lower()
    if '@' not in v:
        raise ValueError("El email debe contener '@'")
    return v


class UsuarioCreate(BaseModel):
    """Cuerpo de POST y de PUT (PUT reemplaza todos los campos editables)."""
    nombre: str = Field(..., max_length=100)
    email: str
    edad: Optional[int] = Field(None, ge=0, le=150)
    activo: bool = True

    @field_validator('nombre', 'email', mode='before')
    def quitar_espacios(cls, v):
        return _quitar_espacios(v)

    @field_validator('nombre')
    def validar_nombre(cls, v):
        return _validar_nombre(v)

    @field_validator('email')
    def validar_email(cls, v):
        return _validar_email(v)


class UsuarioUpdate(BaseModel):
    """Cuerpo de PATCH: solo se actualizan los campos enviados."""
    nombre: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = None
    edad: Optional[int] = Field(None, ge=0, le=150)
    activo: Optional[bool] = None

    @field_validator('nombre', 'email', mode='before')
    def quitar_espacios(cls, v):
        return _quitar_espacios(v)

    @field_validator('nombre')
    def validar_nombre(cls, v):
        if v is not None:
            return _validar_nombre(v)
        return v

    @field_validator('email')
    def validar_email(cls, v):
        if v is not None:
            return _validar_email(v)
        return v

    @model_validator(mode='after')
    def validar_no_vacio(self):
        if not self.cambios():
            raise ValueError("No hay datos para actualizar")
        return self

    def cambios(self):
        # "edad": null es un cambio válido (borrar la edad); el resto de None se ignora
        datos = self.model_dump(include=self.model_fields_set)
        return {k: v for k, v in datos.items() if v is not None or k == 'edad'}


class UsuarioResponse(BaseModel):  # valida las respuestas por si acaso
    id: int
    nombre: str
    email: str
    edad: Optional[int] = None
    activo: bool = True
    fecha_creacion: datetime

    model_config = ConfigDict(extra='ignore')

    def to_json(self):
        return self.model_dump(mode='json')


class Estadisticas(BaseModel):
    total: int = 0
    activos: int = 0
    inactivos: int = 0
    edad_promedio: Optional[float] = None
