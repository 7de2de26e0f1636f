"""Servicio de endpoints de la clínica: `/patients`.

Cada método es una llamada a la fachada; no hay lógica HTTP propia.
"""

from __future__ import annotations

from typing import BinaryIO

import httpx

from adapters.api_client import ApiClient
from core.domain.models import Patient, PatientPatch


class PatientsService(ApiClient):
    _path = "/patients"

    def _item(self, patient_id: int) -> str:
        return f"{self._path}/{patient_id}"

    async def list_patients(self) -> list[Patient]:
        return await self.get_json(self._path, list[Patient])

    async def get_patient(self, patient_id: int) -> Patient:
        return await self.get_json(self._item(patient_id), Patient)

    async def create_patient(self, patient: Patient) -> Patient:
        return await self.post_json(self._path, patient, Patient)

    async def update_patient(self, patient_id: int, patient: Patient) -> Patient:
        return await self.put_json(self._item(patient_id), patient, Patient)

    async def patch_patient(self, patient_id: int, changes: PatientPatch) -> Patient:
        # Solo los campos presentes; un PATCH con `null` borraría datos.
        body = changes.model_dump(mode="json", by_alias=True, exclude_none=True)
        return await self.patch_json(self._item(patient_id), body, Patient)

    async def delete_patient(self, patient_id: int) -> httpx.Response:
        return await self.delete_raw(self._item(patient_id))

    async def upload_photo(self, patient_id: int, photo: bytes | BinaryIO) -> httpx.Response:
        return await self.put_raw(f"{self._item(patient_id)}/photo", photo)
