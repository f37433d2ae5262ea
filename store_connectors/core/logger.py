# store_connectors/core/logger.py
import logging
import os
from dotenv import load_dotenv

# charge immédiatement le .env
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Retourne un logger standardisé, niveau lu dans LOG_LEVEL (INFO par défaut)."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    logger = logging.getLogger(name)
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(log_level)

        logger.debug("Logger initialisé pour '%s' (level=%s)", name, log_level)
    return logger
