"""Wrapper de httpx (transporte).

Por qué un wrapper:
- Estandariza timeout, headers y base URL para todas las llamadas a la API.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Reglas:
- Un único `httpx.AsyncClient` compartido, creado de forma perezosa y solo
  lectura tras su construcción.
- Sin reintentos ni redirecciones más allá de los defaults de httpx.
"""

from __future__ import annotations

import logging
import threading

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    # httpx descomprime gzip/deflate por sí mismo; basta con anunciarlo.
    "Accept-Encoding": "gzip, deflate",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la API JSON.

    Por qué un builder:
    - Centraliza timeout/headers para que todas las llamadas se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        **DEFAULT_HEADERS,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


class ClientHolder:
    """Guarda un cliente compartido con inicialización única (thread-safe)."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._lock = threading.Lock()
        self._client: httpx.AsyncClient | None = None

    def get(self) -> httpx.AsyncClient:
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                settings = self._settings or AppSettings()
                logger.debug(
                    "Creating shared HTTP client base_url=%s timeout=%ss",
                    settings.api_base_url,
                    settings.http_timeout_seconds,
                )
                self._client = build_async_client(settings, transport=self._transport)
            return self._client

    async def aclose(self) -> None:
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            await client.aclose()


_default_holder = ClientHolder()


def get_client() -> httpx.AsyncClient:
    """Cliente del proceso: idempotente, perezoso y thread-safe."""

    return _default_holder.get()


async def close_client() -> None:
    """Cierra el cliente del proceso; el siguiente `get_client()` crea uno nuevo."""

    await _default_holder.aclose()
