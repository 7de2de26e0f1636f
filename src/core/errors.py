"""Errores del cliente API.

Todas las fallas de una llamada son por-llamada: ninguna es fatal para el
proceso y ninguna se recupera localmente. Se reportan y se relanzan.
"""

from __future__ import annotations


class ApiClientError(Exception):
    """Base de todos los errores que emite el cliente."""


class TransportError(ApiClientError):
    """Fallo de red: conexión, timeout, DNS."""

    def __init__(self, message: str, *, method: str | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class DecodeError(ApiClientError):
    """El cuerpo de la respuesta está vacío, mal formado o no encaja en el tipo pedido."""

    def __init__(self, message: str, *, target: object = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.target = target
        self.status_code = status_code


class EncodeError(ApiClientError):
    """El payload de la petición no se puede serializar a JSON."""
