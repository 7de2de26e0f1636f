"""Decodificación tipada de respuestas JSON.

Reglas:
- Cuerpo vacío, JSON mal formado o un valor que no encaja en el tipo pedido
  (incluido `null` para tipos no opcionales) => `DecodeError`.
- La respuesta se cierra siempre, decodifique o no.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from core.errors import DecodeError

T = TypeVar("T")


@lru_cache(maxsize=256)
def get_adapter(response_type: Any) -> TypeAdapter[Any]:
    """`TypeAdapter` compartido por tipo destino (se construye una vez)."""

    return TypeAdapter(response_type)


def _type_name(response_type: Any) -> str:
    return getattr(response_type, "__name__", None) or repr(response_type)


def decode_body(body: bytes, response_type: type[T], *, status_code: int | None = None) -> T:
    if not body.strip():
        raise DecodeError(
            f"Empty response body, expected {_type_name(response_type)}",
            target=response_type,
            status_code=status_code,
        )
    try:
        return get_adapter(response_type).validate_json(body)
    except ValidationError as exc:
        raise DecodeError(
            f"Response body is not a valid {_type_name(response_type)}: {exc}",
            target=response_type,
            status_code=status_code,
        ) from exc


async def decode_response(response: httpx.Response, response_type: type[T]) -> T:
    """Lee el stream de `response` y lo valida contra `response_type`."""

    try:
        body = await response.aread()
        return decode_body(body, response_type, status_code=response.status_code)
    finally:
        await response.aclose()
