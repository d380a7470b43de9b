"""Errores de dominio de la API de usuarios. Cada uno sabe con qué código HTTP responder."""


class ErrorUsuarios(Exception):
    status_code = 500
    mensaje = "Error interno del servidor"

    def __init__(self, mensaje=None):
        super().__init__(mensaje or self.mensaje)
        self.mensaje = mensaje or self.mensaje


class UsuarioNoEncontrado(ErrorUsuarios):
    status_code = 404
    mensaje = "Usuario no encontrado"


class EmailDuplicado(ErrorUsuarios):
    status_code = 400
    mensaje = "El email ya está registrado"


class ErrorAlmacenamiento(ErrorUsuarios):
    status_code = 500
    mensaje = "Error de almacenamiento"
