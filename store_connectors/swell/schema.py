from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from store_connectors.core.config import DEFAULT_API_URL
from store_connectors.core.schema import HttpMethod, NormalizedRequest, TransportResponse  # noqa: F401


# --- Configuration du client ---

class ClientOptions(BaseModel):
    """
    Options résolues d'un client (fusion des options de l'appelant sur les valeurs par défaut).
    Les alias camelCase (verifyCert, userApplication) sont acceptés en entrée.
    """
    url: str                            = Field(DEFAULT_API_URL, description="Url de base de l'API")
    verify_cert: bool                   = Field(True, alias="verifyCert", description="Vérification du certificat TLS")
    version: int                        = Field(1, description="Version du protocole de l'API (non interprétée)")
    timeout: Optional[int]              = Field(None, description="Timeout par requête en ms (None = illimité)")
    headers: Dict[str, str]             = Field(default_factory=dict, description="En-têtes ajoutés à chaque requête")
    user_application: Optional[str]     = Field(None, alias="userApplication",
                                                description="Application appelante (en-tête X-User-Application)")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# --- Réponse exposée à l'appelant ---

class NormalizedResponse(BaseModel):
    """Réponse normalisée : seuls data, headers (dict simple) et status sont conservés."""
    data: Any                           = None
    headers: Dict[str, Any]             = Field(default_factory=dict, description="En-têtes (str ou liste de str)")
    status: int                         = Field(..., description="Code HTTP")
