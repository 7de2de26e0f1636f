"""Construcción de peticiones salientes.

Clasificación del payload (en este orden, una sola vez por llamada):
1) ausente (`ABSENT` o `None`) => sin cuerpo
2) binario (bytes/bytearray/memoryview o archivo binario) => `application/octet-stream`
3) cualquier otro valor => JSON UTF-8, `application/json`

Un valor "falsy" (`{}`, `[]`, `0`, `False`, `""`) es un payload estructurado y
se envía como JSON.
"""

from __future__ import annotations

import io
from enum import Enum
from typing import Any, Final

import httpx
from pydantic_core import PydanticSerializationError, to_json

from core.errors import EncodeError

JSON_CONTENT_TYPE = "application/json"
BINARY_CONTENT_TYPE = "application/octet-stream"


class _Absent(Enum):
    ABSENT = "ABSENT"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent.ABSENT


class PayloadKind(str, Enum):
    ABSENT = "absent"
    BINARY = "binary"
    STRUCTURED = "structured"


def classify_payload(payload: Any) -> PayloadKind:
    if payload is ABSENT or payload is None:
        return PayloadKind.ABSENT
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return PayloadKind.BINARY
    if isinstance(payload, (io.RawIOBase, io.BufferedIOBase)):
        return PayloadKind.BINARY
    return PayloadKind.STRUCTURED


def encode_json(payload: Any) -> bytes:
    """Serializa con pydantic (modelos, dataclasses, fechas...) a JSON UTF-8."""

    try:
        return to_json(payload, by_alias=True)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodeError(f"Cannot serialize payload of type {type(payload).__name__}: {exc}") from exc


def build_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    payload: Any = ABSENT,
) -> httpx.Request:
    """Construye un `httpx.Request` sin enviarlo."""

    kind = classify_payload(payload)
    if kind is PayloadKind.ABSENT:
        return client.build_request(method, url)

    if kind is PayloadKind.BINARY:
        if isinstance(payload, (io.RawIOBase, io.BufferedIOBase)):
            content = payload.read()
        else:
            content = bytes(payload)
        return client.build_request(
            method,
            url,
            content=content,
            headers={"Content-Type": BINARY_CONTENT_TYPE},
        )

    return client.build_request(
        method,
        url,
        content=encode_json(payload),
        headers={"Content-Type": f"{JSON_CONTENT_TYPE}; charset=utf-8"},
    )
