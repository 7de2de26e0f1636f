import io
import json
from dataclasses import dataclass

import httpx
import pytest

from adapters.request_builder import (
    ABSENT,
    BINARY_CONTENT_TYPE,
    PayloadKind,
    build_request,
    classify_payload,
)
from core.domain.models import Patient
from core.errors import EncodeError


@pytest.fixture
def client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url="http://api.test")


@dataclass
class Visit:
    patient_id: int
    reason: str


def test_absent_payload_has_no_body(client: httpx.AsyncClient) -> None:
    request = build_request(client, "POST", "/patients")

    assert request.method == "POST"
    assert str(request.url) == "http://api.test/patients"
    assert request.content == b""
    assert "content-type" not in request.headers


def test_none_payload_is_treated_as_absent(client: httpx.AsyncClient) -> None:
    request = build_request(client, "PUT", "/patients/1", None)

    assert request.content == b""
    assert "content-type" not in request.headers


@pytest.mark.parametrize(
    ("payload", "expected"),
    [({}, b"{}"), ([], b"[]"), (0, b"0"), (False, b"false"), ("", b'""')],
)
def test_falsy_structured_payload_is_sent_as_json(client, payload, expected) -> None:
    request = build_request(client, "POST", "/things", payload)

    assert request.content == expected
    assert request.headers["content-type"].startswith("application/json")


@pytest.mark.parametrize("payload", [b"\x00\x01raw", bytearray(b"\x00\x01raw"), memoryview(b"\x00\x01raw")])
def test_bytes_payload_is_sent_as_octet_stream(client, payload) -> None:
    request = build_request(client, "PUT", "/patients/1/photo", payload)

    assert request.content == b"\x00\x01raw"
    assert request.headers["content-type"] == BINARY_CONTENT_TYPE


def test_binary_file_payload_is_read_as_raw_bytes(client: httpx.AsyncClient) -> None:
    request = build_request(client, "POST", "/upload", io.BytesIO(b"PNG..."))

    assert request.content == b"PNG..."
    assert request.headers["content-type"] == BINARY_CONTENT_TYPE


def test_model_payload_is_utf8_json_with_aliases(client: httpx.AsyncClient) -> None:
    patient = Patient(name="Zoë Núñez", birth_date="1990-04-01")

    request = build_request(client, "POST", "/patients", patient)

    assert request.headers["content-type"] == "application/json; charset=utf-8"
    body = json.loads(request.content.decode("utf-8"))
    assert body["name"] == "Zoë Núñez"
    assert body["birthDate"] == "1990-04-01"
    assert body["id"] is None


def test_dataclass_payload_is_json(client: httpx.AsyncClient) -> None:
    request = build_request(client, "POST", "/visits", Visit(patient_id=3, reason="checkup"))

    assert json.loads(request.content) == {"patient_id": 3, "reason": "checkup"}


def test_unserializable_payload_raises_encode_error(client: httpx.AsyncClient) -> None:
    with pytest.raises(EncodeError):
        build_request(client, "POST", "/things", object())


def test_classification() -> None:
    assert classify_payload(ABSENT) is PayloadKind.ABSENT
    assert classify_payload(None) is PayloadKind.ABSENT
    assert classify_payload(b"") is PayloadKind.BINARY
    assert classify_payload(io.BytesIO()) is PayloadKind.BINARY
    assert classify_payload({}) is PayloadKind.STRUCTURED
    assert classify_payload("text") is PayloadKind.STRUCTURED
