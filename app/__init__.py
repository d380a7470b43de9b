from flask import Flask, jsonify
from loguru import logger
from app.config import cargar_config
from app.extensiones import init_repositorio
from app.logs import configure_logging
from app.routes.usuarios import bp as bp_usuarios
from app.servicios import ServicioUsuarios


def create_app(config=None, repositorio=None):
    """
    config: dict que sobrescribe las variables de entorno (tests)
    repositorio: repositorio ya construido; si no, se crea según STORAGE_BACKEND
    """
    app = Flask(__name__)  # __name__ dentro de __init__.py toma el nombre de la carpeta que lo contiene (app).
    app.config.update(cargar_config(config))
    app.json.ensure_ascii = False  # tildes y eñes tal cual en las respuestas

    configure_logging("api-usuarios", level=app.config['LOG_LEVEL'], json_logs=app.config['LOG_JSON'])

    if repositorio is None:
        repositorio = init_repositorio(app.config)
    app.servicio_usuarios = ServicioUsuarios(repositorio)  # lo usan las rutas vía current_app

    # conexiones
    app.register_blueprint(bp_usuarios)
    app.register_blueprint(bp_usuarios, url_prefix='/api/users', name='users')

    @app.route('/')
    def index():
        return {
            "message": "API de Usuarios",
            "backend": repositorio.nombre_backend,
            "endpoints": {
                "listar": "GET /api/usuarios",
                "estadisticas": "GET /api/usuarios/estadisticas",
                "ver": "GET /api/usuarios/<id>",
                "crear": "POST /api/usuarios",
                "reemplazar": "PUT /api/usuarios/<id>",
                "actualizar": "PATCH /api/usuarios/<id>",
                "borrar": "DELETE /api/usuarios/<id>",
            }
        }

    @app.route('/health')
    def health():
        try:
            repositorio.ping()  # intenta leer el almacenamiento
            return {"status": "connected", "backend": repositorio.nombre_backend}
        except Exception as e:
            logger.error("Health check fallido: {}", e)
            return {"status": "error", "message": str(e)}, 500

    # errores en JSON, nunca la página HTML de Flask
    @app.errorhandler(404)
    def no_encontrado(e):
        return jsonify({"error": "Recurso no encontrado"}), 404

    @app.errorhandler(405)
    def metodo_no_permitido(e):
        return jsonify({"error": "Método no permitido"}), 405

    @app.errorhandler(500)
    def error_interno(e):
        return jsonify({"error": "Error interno del servidor"}), 500

    logger.info("App creada con backend '{}'", repositorio.nombre_backend)
    return app
