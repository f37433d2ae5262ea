"""
Transformations pures du pipeline requête / réponse / erreur.

Aucune de ces fonctions n'a d'état : elles convertissent les formes
propres au transport en formes neutres exposées à l'appelant.
"""
from typing import Any, Dict, Optional

from store_connectors.core.exceptions import ApiError
from store_connectors.swell.schema import HttpMethod, NormalizedRequest, NormalizedResponse

NO_RESPONSE_CODE = "NO_RESPONSE"
NO_RESPONSE_MESSAGE = "No response from server"
DEFAULT_ERROR_CODE = "ERROR"


def transform_request(method: Any, url: Any, data: Any = None) -> NormalizedRequest:
    """
    Construit la requête normalisée.

    :param method: verbe HTTP (HttpMethod ou chaîne, casse indifférente)
    :param url: chemin de la ressource ; les objets non-str sont convertis via str(), None devient ""
    :param data: corps de la requête, None si absent
    :return: NormalizedRequest
    :raises ValueError: verbe non supporté
    """
    if not isinstance(method, HttpMethod):
        method = HttpMethod(str(method).upper())

    if url is None:
        url = ""
    elif not isinstance(url, str):
        url = str(url)

    return NormalizedRequest(method=method, url=url, data=data)


def transform_response(response: Any) -> NormalizedResponse:
    """Ne conserve que data, headers (normalisés) et status de la réponse du transport."""
    return NormalizedResponse(
        data=response.data,
        headers=normalize_headers(response.headers),
        status=response.status,
    )


def transform_error(error: Exception) -> ApiError:
    """
    Convertit n'importe quel échec en ApiError.

    Ordre de priorité (fixe) :
     1. le serveur a répondu avec un statut hors 2xx   -> code = libellé du statut
     2. la requête est partie mais sans réponse         -> NO_RESPONSE
     3. la requête n'a pas pu être construite / envoyée -> code et message de l'erreur
    """
    status: Optional[int] = None
    headers: Dict[str, Any] = {}

    response = _attr(error, "response")
    request = _attr(error, "request")

    if response is not None:
        code = getattr(response, "status_text", None)
        message = format_message(getattr(response, "data", None))
        status = getattr(response, "status", None)
        headers = normalize_headers(getattr(response, "headers", None))
    elif request is not None:
        code = NO_RESPONSE_CODE
        message = NO_RESPONSE_MESSAGE
    else:
        code = getattr(error, "code", None)
        message = getattr(error, "message", None)
        if message is None:
            message = str(error)

    return ApiError(message, code=normalize_code(code), status=status, headers=headers)


def _attr(obj: Any, name: str) -> Any:
    # httpx lève RuntimeError sur `.request` quand elle n'est pas renseignée
    try:
        return getattr(obj, name, None)
    except RuntimeError:
        return None


def normalize_code(code: Any) -> str:
    # "Not Found" -> "NOT_FOUND"
    if isinstance(code, str) and code:
        return code.upper().replace(" ", "_")
    return DEFAULT_ERROR_CODE


def normalize_headers(headers: Any) -> Dict[str, Any]:
    """
    Copie les en-têtes dans un dict simple (pas d'objet httpx.Headers exposé à l'appelant).
    Les en-têtes répétés donnent une liste de valeurs.
    """
    normalized: Dict[str, Any] = {}
    if not headers:
        return normalized

    if hasattr(headers, "get_list"):
        # httpx.Headers : clés uniques, valeurs multiples possibles
        for key in headers.keys():
            values = headers.get_list(key)
            normalized[key] = values[0] if len(values) == 1 else list(values)
        return normalized

    for key, value in dict(headers).items():
        normalized[key] = list(value) if isinstance(value, (list, tuple)) else value
    return normalized


def format_message(message: Any) -> Any:
    # supprime les retours à la ligne ajoutés par le serveur
    return message.strip() if isinstance(message, str) else message
