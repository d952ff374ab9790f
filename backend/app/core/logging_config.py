# backend/app/core/logging_config.py
"""
Configuración centralizada del logging de la aplicación.

Todos los módulos obtienen su logger con logging.getLogger(__name__), por lo que
cuelgan del logger raíz del paquete 'app'. Aquí se le asignan nivel, formato y
handlers a partir de los settings (LOG_LEVEL, LOG_FORMAT, LOG_FILE_PATH).
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from app.core.config import settings

# Librerías de terceros demasiado verbosas en nivel INFO
THIRD_PARTY_LOGGERS = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "httpx",
    "botocore",
    "boto3",
    "uvicorn.access",
]


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configura el logger de la aplicación.

    Args:
        log_level: Nivel para los logs de la aplicación (por defecto settings.LOG_LEVEL)
        log_file: Ruta opcional del fichero de log (por defecto settings.LOG_FILE_PATH)
        max_file_size: Tamaño máximo del fichero antes de rotar (bytes)
        backup_count: Número de ficheros rotados a conservar

    Returns:
        Logger raíz de la aplicación
    """
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    log_file = log_file or settings.LOG_FILE_PATH

    app_logger = logging.getLogger("app")
    app_logger.setLevel(level)

    # Evitar handlers duplicados si se llama más de una vez (recargas de uvicorn)
    app_logger.handlers.clear()

    formatter = logging.Formatter(fmt=settings.LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_file_size,
            backupCount=backup_count,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        app_logger.addHandler(file_handler)

    for logger_name in THIRD_PARTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    app_logger.propagate = False
    return app_logger
