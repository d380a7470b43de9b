"""
Configuración de logs con Loguru.

- LOG_LEVEL: nivel mínimo (INFO por defecto)
- LOG_JSON: true -> una línea JSON por registro en stdout; false -> formato legible en stderr

Los logs de la librería estándar (Flask, werkzeug) se redirigen a Loguru con InterceptHandler.
"""

import logging
import sys

from loguru import logger


class InterceptHandler(logging.Handler):
    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Buscar el frame que hizo la llamada fuera del módulo logging
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(app_name, level="INFO", json_logs=False):
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger().setLevel(level)

    logger.remove()
    if json_logs:
        logger.add(sys.stdout, serialize=True, level=level)
    else:
        logger.add(
            sys.stderr,
            level=level,
            colorize=True,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[app]}</cyan> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
        )
    logger.configure(extra={"app": app_name})

    # werkzeug registra cada petición; solo avisos hacia arriba
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.info("Logs configurados (nivel {}, json={})", level, json_logs)
