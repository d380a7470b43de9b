"""Validaciones de los esquemas de entrada."""

import pytest
from pydantic import ValidationError

from app.schemas.usuarios import UsuarioCreate, UsuarioUpdate


class TestUsuarioCreate:
    def test_normaliza_nombre_y_email(self):
        usuario = UsuarioCreate(nombre="  Ana García ", email="  ANA@Email.com ")
        assert usuario.nombre == "Ana García"
        assert usuario.email == "ana@email.com"
        assert usuario.activo is True
        assert usuario.edad is None

    @pytest.mark.parametrize("nombre", ["", "   "])
    def test_nombre_vacio(self, nombre):
        with pytest.raises(ValidationError):
            UsuarioCreate(nombre=nombre, email="ana@email.com")

    def test_email_sin_arroba(self):
        with pytest.raises(ValidationError) as exc:
            UsuarioCreate(nombre="Ana", email="ana.email.com")
        assert exc.value.errors()[0]["loc"] == ("email",)

    @pytest.mark.parametrize("edad", [-1, 151])
    def test_edad_fuera_de_rango(self, edad):
        with pytest.raises(ValidationError):
            UsuarioCreate(nombre="Ana", email="ana@email.com", edad=edad)

    @pytest.mark.parametrize("edad", [0, 150])
    def test_edad_en_los_limites(self, edad):
        assert UsuarioCreate(nombre="Ana", email="ana@email.com", edad=edad).edad == edad

    def test_campos_obligatorios(self):
        with pytest.raises(ValidationError) as exc:
            UsuarioCreate()
        campos = {e["loc"][0] for e in exc.value.errors()}
        assert campos == {"nombre", "email"}


class TestUsuarioUpdate:
    def test_solo_campos_enviados(self):
        assert UsuarioUpdate(edad=30).cambios() == {"edad": 30}

    def test_edad_null_borra_la_edad(self):
        assert UsuarioUpdate(edad=None).cambios() == {"edad": None}

    def test_vacio_es_invalido(self):
        with pytest.raises(ValidationError):
            UsuarioUpdate()

    def test_nombre_null_no_cuenta_como_cambio(self):
        with pytest.raises(ValidationError):
            UsuarioUpdate(nombre=None)

    def test_valida_los_campos_enviados(self):
        with pytest.raises(ValidationError):
            UsuarioUpdate(email="sin-arroba")
        with pytest.raises(ValidationError):
            UsuarioUpdate(nombre="  ")


class TestLongitudDelNombre:
    def test_espacios_de_relleno_no_cuentan(self):
        nombre = "a" * 99
        usuario = UsuarioCreate(nombre=f"   {nombre}     ", email="ana@email.com")
        assert usuario.nombre == nombre

    def test_limite_de_100_caracteres(self):
        assert len(UsuarioCreate(nombre="a" * 100, email="ana@email.com").nombre) == 100
        with pytest.raises(ValidationError):
            UsuarioCreate(nombre="a" * 101, email="ana@email.com")

    def test_patch_con_relleno(self):
        assert UsuarioUpdate(nombre="  " + "b" * 100 + "  ").cambios() == {"nombre": "b" * 100}
