# ============================================================
# src/core/logger_config.py: Configuración central del logger
# ------------------------------------------------------------
# init_logger() configura el logger global de Loguru según el
# entorno (.env). Los módulos de librería solo hacen
# `from loguru import logger`; nunca añaden sinks.
#
# El logger escribe en:
#   - stderr (colorizado, nivel configurable)
#   - Archivo de logs opcional (rotación diaria en data/logs/)
# ============================================================

from __future__ import annotations

import os
from pathlib import Path
import sys

from dotenv import load_dotenv
from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


# ============================================================
# Función: init_logger
# ============================================================
def init_logger(
    level: str | None = None,
    log_dir: str | Path | None = "data/logs",
) -> str:
    """
    Inicializa la configuración global del logger.
    Llamar una sola vez al inicio del programa (CLI / scripts).

    - level: nivel explícito; si es None se usa LOG_LEVEL del .env (INFO por defecto).
    - log_dir: carpeta del archivo de logs; None = solo consola.

    Devuelve el nivel efectivo.
    """
    load_dotenv()
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    # --- Eliminar configuración previa ---
    logger.remove()

    # stderr para no mezclar logs con el JSON que se imprime en stdout
    logger.add(sink=sys.stderr, level=log_level, colorize=True, format=LOG_FORMAT)

    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=path / "backtest.log",
            level=log_level,
            rotation="1 day",
            retention="7 days",
            backtrace=True,
            diagnose=False,
            format=LOG_FORMAT,
        )
        logger.debug(f"Logs guardados en: {path / 'backtest.log'}")

    logger.debug(f"Logger inicializado (nivel {log_level})")
    return log_level
