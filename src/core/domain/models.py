"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los mismos modelos sirven como tipo destino del decodificador de respuestas
  y como payload estructurado de las peticiones.

Nota:
- Estos modelos describen *qué* expone la API, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Patient(BaseModel):
    """Paciente de la clínica tal como lo expone `/patients`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | None = Field(
        default=None,
        description="Identificador asignado por el servidor (ausente al crear).",
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Nombre completo del paciente.",
    )
    email: str | None = Field(
        default=None,
        description="Correo de contacto si está disponible.",
    )
    phone: str | None = Field(
        default=None,
        description="Teléfono de contacto si está disponible.",
    )
    birth_date: date | None = Field(
        default=None,
        alias="birthDate",
        description="Fecha de nacimiento (ISO 8601).",
    )


class PatientPatch(BaseModel):
    """Actualización parcial de un paciente; solo se envían los campos presentes."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=256)
    email: str | None = None
    phone: str | None = None
    birth_date: date | None = Field(default=None, alias="birthDate")
