# store_connectors/core/schema.py
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HttpMethod(str, Enum):
    """Verbes HTTP supportés par le client."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# --- Formes échangées avec le transport ---

class NormalizedRequest(BaseModel):
    """Requête prête à être envoyée par le transport."""
    method: HttpMethod  = Field(..., description="Verbe HTTP")
    url: str            = Field("", description="Chemin relatif à l'url de base (ou url absolue)")
    data: Any           = Field(None, description="Corps de la requête (None = pas de corps)")


class TransportResponse(BaseModel):
    """Réponse brute du transport (les en-têtes peuvent être un objet propre à la librairie HTTP)."""
    data: Any           = None
    headers: Any        = None
    status: int         = Field(..., description="Code HTTP")
    status_text: str    = Field("", description="Libellé du statut (ex: Not Found)")

    model_config = ConfigDict(arbitrary_types_allowed=True)
