"""Fachada del cliente API JSON.

Cada verbo sigue la misma forma:

    with busy.track():
        try:
            request  = build_request(...)
            response = await client.send(request)
            return await decode_response(response, T)   # solo variante tipada
        except Exception as exc:
            reporter.report(exc, "<operación>")
            raise

Variantes por verbo:
- `*_json`: devuelve el valor ya decodificado al tipo pedido.
- `*_raw`: devuelve el `httpx.Response` (cuerpo leído, conexión liberada) para
  inspeccionar status/headers antes de decodificar.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx

from adapters.error_reporter import ErrorReporter
from adapters.http_client import ClientHolder, get_client
from adapters.request_builder import ABSENT, build_request
from adapters.response_decoder import decode_response
from core.config import AppSettings
from core.errors import DecodeError, TransportError
from core.services.busy_signal import BusySignalCoordinator

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Contador del proceso: todas las instancias sin coordinador propio lo comparten.
default_busy_signal = BusySignalCoordinator()

# Marca de las variantes `_raw`; `None` es un tipo destino válido (JSON `null`).
_RAW = object()


class ApiClient:
    """Base para servicios de endpoints concretos (`PatientsService`, ...).

    Por defecto usa el cliente HTTP y el contador "busy" del proceso; para
    tests o entornos aislados se pueden inyectar `client`/`transport`/`busy`.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        busy: BusySignalCoordinator | None = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self._client = client
        self._holder: ClientHolder | None = None
        if client is None and (settings is not None or transport is not None):
            self._holder = ClientHolder(settings, transport=transport)
        self._busy = busy if busy is not None else default_busy_signal
        self._reporter = reporter if reporter is not None else ErrorReporter()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        if self._holder is not None:
            return self._holder.get()
        return get_client()

    @property
    def busy(self) -> BusySignalCoordinator:
        return self._busy

    async def aclose(self) -> None:
        """Cierra solo el cliente que esta instancia creó."""

        if self._holder is not None:
            await self._holder.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ GET
    async def get_json(self, url: str, response_type: type[T]) -> T:
        return await self._execute("GET", url, ABSENT, origin="get_json", response_type=response_type)

    async def get_raw(self, url: str) -> httpx.Response:
        return await self._execute("GET", url, ABSENT, origin="get_raw")

    # ------------------------------------------------------------------ POST
    async def post_json(self, url: str, body: Any, response_type: type[T]) -> T:
        return await self._execute("POST", url, body, origin="post_json", response_type=response_type)

    async def post_raw(self, url: str, body: Any = ABSENT) -> httpx.Response:
        return await self._execute("POST", url, body, origin="post_raw")

    # ------------------------------------------------------------------ PUT
    async def put_json(self, url: str, body: Any, response_type: type[T]) -> T:
        return await self._execute("PUT", url, body, origin="put_json", response_type=response_type)

    async def put_raw(self, url: str, body: Any = ABSENT) -> httpx.Response:
        return await self._execute("PUT", url, body, origin="put_raw")

    # ------------------------------------------------------------------ PATCH
    async def patch_json(self, url: str, body: Any, response_type: type[T]) -> T:
        return await self._execute("PATCH", url, body, origin="patch_json", response_type=response_type)

    async def patch_raw(self, url: str, body: Any = ABSENT) -> httpx.Response:
        return await self._execute("PATCH", url, body, origin="patch_raw")

    # ------------------------------------------------------------------ DELETE
    async def delete_json(self, url: str, response_type: type[T]) -> T:
        return await self._execute("DELETE", url, ABSENT, origin="delete_json", response_type=response_type)

    async def delete_raw(self, url: str) -> httpx.Response:
        return await self._execute("DELETE", url, ABSENT, origin="delete_raw")

    # ------------------------------------------------------------------ internals
    async def _execute(
        self,
        method: str,
        url: str,
        payload: Any,
        *,
        origin: str,
        response_type: Any = _RAW,
    ) -> Any:
        with self._busy.track():
            try:
                client = self.client
                request = build_request(client, method, url, payload)
                logger.debug("%s %s", method, request.url)
                try:
                    response = await client.send(request, stream=response_type is not _RAW)
                    if response_type is _RAW:
                        return response
                    return await decode_response(response, response_type)
                except httpx.DecodingError as exc:
                    # Cuerpo comprimido corrupto: es un cuerpo mal formado, no un fallo de red.
                    raise DecodeError(
                        f"{method} {request.url} returned an undecodable body: {exc}",
                        target=None if response_type is _RAW else response_type,
                    ) from exc
                except (httpx.TransportError, httpx.TooManyRedirects) as exc:
                    raise TransportError(
                        f"{method} {request.url} failed: {type(exc).__name__}: {exc}",
                        method=method,
                        url=str(request.url),
                    ) from exc
            except Exception as exc:
                self._reporter.report(exc, origin)
                raise
