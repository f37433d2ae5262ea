# store_connectors/core/config.py

from dotenv import load_dotenv
from typing import Optional, Tuple, Dict, Any
import os

from .exceptions import ConfigurationError

load_dotenv()

# Identité de la librairie (envoyée dans le User-Agent)
PACKAGE_NAME = "store-connectors"
PACKAGE_VERSION = "0.1.0"
USER_AGENT = f"{PACKAGE_NAME} ({PACKAGE_VERSION})"

DEFAULT_API_URL = "https://api.swell.store"


def get_swell_credentials() -> Tuple[str, str]:
    """Retourne (store_id, secret_key) depuis l'environnement ou le .env"""
    store_id = os.getenv("SWELL_STORE_ID")
    secret_key = os.getenv("SWELL_SECRET_KEY")
    if not store_id:
        raise ConfigurationError("SWELL_STORE_ID manquante. Définir la var d'environnement ou le fichier .env.")
    if not secret_key:
        raise ConfigurationError("SWELL_SECRET_KEY manquante. Définir la var d'environnement ou le fichier .env.")
    return store_id, secret_key


def get_swell_options() -> Dict[str, Any]:
    """
    Options client lues depuis l'environnement (seules les variables définies sont retournées).
     - SWELL_API_URL : url de base de l'API
     - SWELL_TIMEOUT : timeout en millisecondes
    """
    options: Dict[str, Any] = {}

    url = os.getenv("SWELL_API_URL")
    if url:
        options["url"] = url

    timeout = os.getenv("SWELL_TIMEOUT")
    if timeout:
        try:
            options["timeout"] = int(timeout)
        except ValueError as e:
            raise ConfigurationError(f"SWELL_TIMEOUT invalide : {timeout!r} (entier en ms attendu).") from e

    return options


def get_user_application() -> Optional[str]:
    """Identifie l'application appelante ('nom@version') si APP_NAME et APP_VERSION sont définies."""
    name = os.getenv("APP_NAME")
    version = os.getenv("APP_VERSION")
    if name and version:
        return f"{name}@{version}"
    return None
