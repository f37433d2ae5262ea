# store_connectors/swell/api_client.py

import base64
import httpx
from pydantic import ValidationError
from typing import Any, Dict, Mapping, Optional, Union

from store_connectors.core import config
from store_connectors.core.exceptions import ConfigurationError, NotInitializedError
from store_connectors.core.httpx_client import HTTPClient
from store_connectors.core.logger import get_logger
from store_connectors.swell.schema import ClientOptions, HttpMethod
from store_connectors.swell.transformers import transform_error, transform_request, transform_response

logger = get_logger(__name__)

OptionsInput = Union[ClientOptions, Mapping[str, Any], None]


class SwellClient:
    """
    Client authentifié pour l'API Swell.

    Stocke les identifiants du store (id / key), les options résolues et le
    transport HTTP (HTTPClient).

    Fournit :
     - get / post / put / delete(url, data)   raccourcis vers request()
     - request(method, url, data)             retourne le corps de la réponse ou lève ApiError

    Un client construit sans identifiants est inerte : toute requête lève
    NotInitializedError jusqu'à l'appel de init().
    """

    def __init__(self, client_id: Optional[str] = None, client_key: Optional[str] = None,
                 options: OptionsInput = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client_id: Optional[str] = None
        self._client_key: Optional[str] = None
        self.options: Optional[ClientOptions] = None
        self.http: Optional[HTTPClient] = None
        self.headers: Dict[str, str] = {}
        # transport httpx injectable (tests : httpx.MockTransport)
        self._transport = transport

        if client_id:
            self.init(client_id, client_key, options)

    @classmethod
    def create(cls, client_id: str, client_key: str, options: OptionsInput = None,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> "SwellClient":
        """Raccourci : construit et initialise un nouveau client."""
        return cls(client_id, client_key, options, transport=transport)

    @classmethod
    def from_env(cls, options: OptionsInput = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None) -> "SwellClient":
        """
        Construit un client à partir de SWELL_STORE_ID / SWELL_SECRET_KEY (env ou .env).
        SWELL_API_URL et SWELL_TIMEOUT servent de valeurs par défaut, `options` reste prioritaire.
        """
        client_id, client_key = config.get_swell_credentials()
        merged = {**config.get_swell_options(), **_options_to_dict(options)}
        return cls(client_id, client_key, merged, transport=transport)

    def __repr__(self):
        url = self.options.url if self.options else None
        return f"SwellClient(client_id={self.client_id!r}, url={url!r})"

    # ---------------- Initialisation ----------------
    def init(self, client_id: Optional[str], client_key: Optional[str], options: OptionsInput = None) -> None:
        """
        Valide les identifiants, résout les options et (re)construit le transport HTTP.
        Un appel sur un client déjà initialisé remplace le transport sans fermer l'ancien :
        préférer reconnect() dans ce cas.

        :raises ConfigurationError: id ou key manquant, option invalide
        """
        if self.http is not None:
            logger.warning("Ré-initialisation du client Swell '%s' : le transport est remplacé", client_id)
        self._connect(client_id, client_key, options)

    async def reconnect(self, client_id: str, client_key: str, options: OptionsInput = None) -> None:
        """
        Construit un nouveau transport puis ferme l'ancien.
        En cas d'erreur de configuration, le client reste sur sa connexion courante.
        """
        previous = self.http
        self._connect(client_id, client_key, options)
        if previous is not None:
            await previous.aclose()

    def _connect(self, client_id: Optional[str], client_key: Optional[str], options: OptionsInput) -> None:
        if not client_id:
            raise ConfigurationError("Swell store 'id' is required to connect")

        if not client_key:
            raise ConfigurationError("Swell store 'key' is required to connect")

        if isinstance(options, ClientOptions):
            resolved = options
        else:
            try:
                resolved = ClientOptions.model_validate(_options_to_dict(options))
            except (ValidationError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Options du client Swell invalides : {e}") from e

        headers = _build_headers(client_id, client_key, resolved)
        http = HTTPClient(
            base_url=resolved.url,
            headers=headers,
            verify=resolved.verify_cert,
            timeout_ms=resolved.timeout,
            transport=self._transport,
        )

        # rien n'est modifié tant que la nouvelle connexion n'est pas construite
        self.client_id = client_id
        self._client_key = client_key
        self.options = resolved
        self.headers = headers
        self.http = http

        logger.debug("Client Swell initialisé | store=%s url=%s timeout=%s",
                     client_id, resolved.url, resolved.timeout)

    # ---------------- Requêtes ----------------
    async def get(self, url: Any, data: Any = None) -> Any:
        return await self.request(HttpMethod.GET, url, data)

    async def post(self, url: Any, data: Any = None) -> Any:
        return await self.request(HttpMethod.POST, url, data)

    async def put(self, url: Any, data: Any = None) -> Any:
        return await self.request(HttpMethod.PUT, url, data)

    async def delete(self, url: Any, data: Any = None) -> Any:
        return await self.request(HttpMethod.DELETE, url, data)

    async def request(self, method: Union[HttpMethod, str], url: Any, data: Any = None) -> Any:
        """
        Envoie la requête et retourne uniquement le corps de la réponse.
        Le statut et les en-têtes d'une réponse réussie ne sont pas exposés.

        :raises NotInitializedError: client sans identifiants
        :raises ApiError: tout autre échec (statut HTTP, absence de réponse, requête invalide)
        """
        http = self.http
        if http is None:
            raise NotInitializedError()

        try:
            request = transform_request(method, url, data)
            response = await http.send(request)
        except Exception as e:
            error = transform_error(e)
            logger.debug("Échec %s %s -> %s", method, url, error.code)
            raise error from e

        return transform_response(response).data

    # ---------------- Cycle de vie ----------------
    async def aclose(self):
        if self.http is not None:
            await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


def _options_to_dict(options: OptionsInput) -> Dict[str, Any]:
    if options is None:
        return {}
    if isinstance(options, ClientOptions):
        return options.model_dump(exclude_unset=True)
    return dict(options)


def _auth_token(client_id: str, client_key: str) -> str:
    raw = f"{client_id}:{client_key}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def _build_headers(client_id: str, client_key: str, options: ClientOptions) -> Dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "User-Agent": config.USER_AGENT,
        "Authorization": f"Basic {_auth_token(client_id, client_key)}",
    }

    user_application = options.user_application or config.get_user_application()
    if user_application:
        headers["X-User-Application"] = user_application

    # les en-têtes de l'appelant sont prioritaires
    headers.update(options.headers)
    return headers
