import httpx
import logging
from typing import Any, Dict, Optional

from .exceptions import TransportError
from .logger import get_logger
from .schema import NormalizedRequest, TransportResponse

logger = get_logger(__name__)

INVALID_REQUEST_CODE = "INVALID_REQUEST"
TIMEOUT_CODE = "TIMEOUT"


class HTTPClient:
    """
    Transport HTTP asynchrone basé sur httpx.

    Un seul httpx.AsyncClient par instance : le pool de connexions, le keep-alive
    et les cookies de session sont gérés par httpx.
    Tous les échecs sont remontés en TransportError (jamais d'exception httpx).
    """

    def __init__(self, base_url: str, headers: Optional[Dict[str, str]] = None, verify: bool = True,
                 timeout_ms: Optional[int] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        # timeout None ou 0 -> pas de limite
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            verify=verify,
            timeout=timeout_ms / 1000 if timeout_ms else None,
            transport=transport,
            follow_redirects=True,
        )

    @property
    def headers(self) -> httpx.Headers:
        """En-têtes envoyés avec chaque requête."""
        return self._client.headers

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def send(self, request: NormalizedRequest) -> TransportResponse:
        method = request.method.value
        logger.debug("➡️ %s %s | url=%s", method, self.base_url, request.url)

        try:
            http_request = self._client.build_request(
                method,
                request.url,
                json=request.data,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            # la requête n'a jamais été construite
            logger.error("Requête invalide %s %s: %s", method, request.url, e)
            raise TransportError(str(e), code=INVALID_REQUEST_CODE) from e

        try:
            response = await self._client.send(http_request)
        except httpx.TimeoutException as e:
            logger.error("Timeout on %s %s: %s", method, http_request.url, e)
            raise TransportError(f"timeout of {self.timeout_ms or 0}ms exceeded", code=TIMEOUT_CODE) from e
        except httpx.RequestError as e:
            # requête envoyée mais aucune réponse (connexion refusée, coupure, ...)
            logger.error("HTTPX Error on %s %s: %s", method, http_request.url, e)
            raise TransportError(str(e) or type(e).__name__, code=type(e).__name__, request=http_request) from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("⬅️ Response %s: %s", response.status_code, response.text[:300])

        transport_response = TransportResponse(
            data=self._decode_body(response),
            headers=response.headers,
            status=response.status_code,
            status_text=response.reason_phrase,
        )

        if not response.is_success:
            logger.error("API Error %s on %s %s: %s", response.status_code, method, http_request.url, response.text[:300])
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                request=http_request,
                response=transport_response,
            )

        return transport_response

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        """JSON si le content-type l'indique, texte sinon, None si le corps est vide."""
        if not response.content:
            return None
        if "json" in response.headers.get("content-type", ""):
            try:
                return response.json()
            except ValueError:
                return response.text
        return response.text

    async def aclose(self):
        await self._client.aclose()

    # Support du context manager 'async with'
    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Fermeture propre de la connexion."""
        await self.aclose()
