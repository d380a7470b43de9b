import json
import sys
from datetime import datetime

from loguru import logger
from pydantic import ValidationError

from app.config import cargar_config
from app.excepciones import EmailDuplicado
from app.extensiones import init_repositorio
from app.logs import configure_logging
from app.schemas.usuarios import UsuarioCreate
from app.servicios import ServicioUsuarios

ARCHIVO_POR_DEFECTO = 'data/usuarios_ejemplo.json'


def cargar_usuarios(servicio, filename):
    """
    Da de alta los usuarios del archivo pasando por el servicio,
    así cada registro se valida igual que en la API.
    Devuelve un dict con los contadores: creados, duplicados, invalidos.
    """
    with open(filename, 'r', encoding='utf-8') as f:
        data = json.load(f)

    resumen = {"creados": 0, "duplicados": 0, "invalidos": 0}
    for i, registro in enumerate(data):
        try:
            servicio.crear(UsuarioCreate(**registro))
            resumen["creados"] += 1
        except EmailDuplicado:
            logger.warning("Registro {} omitido: email ya registrado ({})", i, registro.get('email'))
            resumen["duplicados"] += 1
        except ValidationError as e:
            logger.warning("Registro {} inválido: {}", i, e.errors(include_url=False, include_context=False))
            resumen["invalidos"] += 1

    return resumen


def main(filename=ARCHIVO_POR_DEFECTO):
    config = cargar_config()
    configure_logging("cargar-datos", level=config['LOG_LEVEL'], json_logs=config['LOG_JSON'])

    logger.info("CARGAR USUARIOS DESDE {}", filename)
    logger.info("Backend: {}", config['STORAGE_BACKEND'])

    try:
        servicio = ServicioUsuarios(init_repositorio(config))
    except Exception as e:
        logger.error("No se pudo abrir el almacenamiento: {}", e)
        return 1

    start = datetime.now()
    resumen = cargar_usuarios(servicio, filename)
    duration = (datetime.now() - start).total_seconds()

    logger.info(
        "COMPLETADO EN {:.1f}s: {} creados, {} duplicados, {} inválidos",
        duration, resumen["creados"], resumen["duplicados"], resumen["invalidos"]
    )
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
