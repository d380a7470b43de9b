from flask import Blueprint, request, jsonify, current_app
from app.schemas.usuarios import UsuarioCreate, UsuarioUpdate
from app.excepciones import ErrorUsuarios
from pydantic import ValidationError
from loguru import logger

bp = Blueprint('usuarios', __name__, url_prefix='/api/usuarios')

"""operacion http:

GET - listar usuarios (filtros: activo, buscar)
GET - estadisticas
GET - ver un usuario
POST - crear usuario
PUT - reemplazar usuario
PATCH - actualizar algunos campos
DELETE - borrar usuario

"""

VALORES_BOOL = {
    'true': True, '1': True, 'si': True, 'sí': True,
    'false': False, '0': False, 'no': False,
}


def _servicio():
    return current_app.servicio_usuarios


def _cuerpo_json():
    datos = request.get_json(silent=True)
    if not isinstance(datos, dict):
        return None
    return datos


def _error_validacion(e):
    return jsonify({
        "error": "Datos inválidos",
        "details": e.errors(include_url=False, include_context=False)
    }), 400


def _error_dominio(e):
    if e.status_code >= 500:
        # el detalle (rutas, errores del driver) solo va al log
        logger.error("Error de almacenamiento en {} {}: {}", request.method, request.path, e.mensaje)
        return jsonify({"error": "Error interno del servidor"}), e.status_code
    return jsonify({"error": e.mensaje}), e.status_code


def _error_interno(e):
    logger.exception("Error inesperado en {} {}", request.method, request.path)
    return jsonify({"error": "Error interno del servidor"}), 500


# ==================== LISTAR ====================

@bp.route('', methods=['GET'])
def listar_usuarios():
    """
    GET /api/usuarios?activo=true&buscar=ana
    Listar usuarios, opcionalmente filtrados
    """
    try:
        activo = request.args.get('activo')
        if activo is not None:
            activo = VALORES_BOOL.get(activo.strip().lower())
            if activo is None:
                return jsonify({"error": "El filtro 'activo' debe ser true o false"}), 400

        usuarios = _servicio().listar(activo=activo, buscar=request.args.get('buscar'))

        return jsonify({
            "usuarios": [u.to_json() for u in usuarios],
            "total": len(usuarios)
        }), 200

    except ErrorUsuarios as e:
        return _error_dominio(e)
    except Exception as e:
        return _error_interno(e)


@bp.route('/estadisticas', methods=['GET'])
def estadisticas():
    """
    GET /api/usuarios/estadisticas
    Total, activos, inactivos y edad promedio
    """
    try:
        return jsonify(_servicio().estadisticas().model_dump()), 200
    except ErrorUsuarios as e:
        return _error_dominio(e)
    except Exception as e:
        return _error_interno(e)


# ==================== VER ====================

@bp.route('/<int:user_id>', methods=['GET'])
def obtener_usuario(user_id):
    """
    GET /api/usuarios/:user_id
    """
    try:
        return jsonify(_servicio().obtener(user_id).to_json()), 200
    except ErrorUsuarios as e:
        return _error_dominio(e)
    except Exception as e:
        return _error_interno(e)


# ==================== CREAR ====================

@bp.route('', methods=['POST'])
def crear_usuario():
    """
    POST /api/usuarios
    Body: {
        "nombre": "Ana García",
        "email": "ana@email.com",
        "edad": 28,        // opcional
        "activo": true     // opcional, por defecto true
    }
    """
    try:
        datos = _cuerpo_json()
        if datos is None:
            return jsonify({"error": "Se requiere un cuerpo JSON"}), 400

        usuario = _servicio().crear(UsuarioCreate(**datos))

        return jsonify({
            "message": "Usuario creado exitosamente",
            "usuario": usuario.to_json()
        }), 201

    except ValidationError as e:
        return _error_validacion(e)
    except ErrorUsuarios as e:
        return _error_dominio(e)
    except Exception as e:
        return _error_interno(e)


# ==================== ACTUALIZAR ====================

@bp.route('/<int:user_id>', methods=['PUT'])
def reemplazar_usuario(user_id):
    """
    PUT /api/usuarios/:user_id
    Body: igual que POST, se reemplazan todos los campos
    """
    try:
        datos = _cuerpo_json()
        if datos is None:
            return jsonify({"error": "Se requiere un cuerpo JSON"}), 400

        usuario = _servicio().reemplazar(user_id, UsuarioCreate(**datos))

        return jsonify({
            "message": "Usuario actualizado exitosamente",
            "usuario": usuario.to_json()
        }), 200

    except ValidationError as e:
        return _error_validacion(e)
    except ErrorUsuarios as e:
        return _error_dominio(e)
    except Exception as e:
        return _error_interno(e)


@bp.route('/<int:user_id>', methods=['PATCH'])
def actualizar_usuario(user_id):
    """
    PATCH /api/usuarios/:user_id
    Body: {"edad": 30}  // solo los campos a cambiar
    """
    try:
        datos = _cuerpo_json()
        if datos is None:
            return jsonify({"error": "Se requiere un cuerpo JSON"}), 400

        usuario = _servicio().actualizar(user_id, UsuarioUpdate(**datos))

        return jsonify({
            "message": "Usuario actualizado exitosamente",
            "usuario": usuario.to_json()
        }), 200

    except ValidationError as e:
        return _error_validacion(e)
    except ErrorUsuarios as e:
        return _error_dominio(e)
    except Exception as e:
        return _error_interno(e)


# ==================== BORRAR ====================

@bp.route('/<int:user_id>', methods=['DELETE'])
def eliminar_usuario(user_id):
    """
    DELETE /api/usuarios/:user_id
    """
    try:
        usuario = _servicio().eliminar(user_id)

        return jsonify({
            "message": "Usuario eliminado exitosamente",
            "usuario": usuario.to_json()
        }), 200

    except ErrorUsuarios as e:
        return _error_dominio(e)
    except Exception as e:
        return _error_interno(e)
