# store_connectors/core/exceptions.py
from typing import Any, Dict, Optional


class ConfigurationError(Exception):
    """Configuration du client invalide (identifiants manquants, option incorrecte)."""
    pass


class ApiError(Exception):
    """
    Erreur normalisée renvoyée par le client pour tout échec d'appel à l'API.

    - message : description lisible (corps de la réponse d'erreur si disponible)
    - code    : code stable en majuscules (ex: NOT_FOUND, NO_RESPONSE, ERROR)
    - status  : code HTTP si le serveur a répondu
    - headers : en-têtes de la réponse d'erreur (dict simple)
    """

    def __init__(self, message: Any, code: str = "ERROR", status: Optional[int] = None,
                 headers: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.headers = headers if headers is not None else {}

    def __str__(self):
        return str(self.message)

    def __repr__(self):
        return f"{type(self).__name__}(code={self.code!r}, status={self.status!r}, message={self.message!r})"


class NotInitializedError(ApiError):
    """Appel d'une requête sur un client sans identifiants (init jamais appelé)."""

    def __init__(self, message: str = "Le client n'est pas initialisé : appeler init(id, key) avant toute requête."):
        super().__init__(message, code="NOT_INITIALIZED")


class TransportError(Exception):
    """
    Échec remonté par la couche transport (indépendant de httpx).

    Expose au plus :
     - response : TransportResponse si le serveur a répondu (statut hors 2xx)
     - request  : la requête envoyée, si elle est partie sans réponse
     - code     : code natif de l'erreur
    """

    def __init__(self, message: str, code: Optional[str] = None, request: Any = None, response: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.request = request
        self.response = response
