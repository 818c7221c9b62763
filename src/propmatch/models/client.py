"""
Modelo de Cliente y criterios de búsqueda.

Solo los campos de criterios participan del matching; el resto
viaja con el documento para que la capa de presentación lo muestre.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from propmatch.models.features import FeatureFlags

ClientCategory = Literal["buyer", "seller"]
ClientStatus = Literal["lead", "active", "closed"]
PropertyType = Literal["apartment", "house", "plot", "commercial"]


class Client(BaseModel):
    """
    Cliente del CRM (comprador o vendedor) con sus criterios.

    Todos los criterios son opcionales: un criterio sin valores
    no aplica al cálculo del score.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Identificación
    id: str = Field(..., description="ID del documento")
    name: str = Field(default="", description="Nombre del cliente")
    phone: str = Field(default="", description="Teléfono")
    email: str = Field(default="", description="Email")
    category: ClientCategory = Field(default="buyer", description="buyer o seller")
    status: ClientStatus = Field(default="lead", description="lead, active o closed")
    notes: str = Field(default="")

    # Presupuesto
    budget_min: Optional[float] = Field(None, ge=0, description="Presupuesto mínimo")
    budget_max: Optional[float] = Field(None, ge=0, description="Presupuesto máximo")

    # Tipo y ubicación
    desired_property_type: Optional[PropertyType] = Field(
        None, description="Tipo de inmueble buscado"
    )
    desired_locations: Optional[list[str]] = Field(
        None, description="Ubicaciones aceptables (reemplaza a desired_location)"
    )
    desired_location: Optional[str] = Field(
        None, description="Ubicación única (formato legacy)"
    )

    # Características físicas
    min_size: Optional[float] = Field(None, ge=0, description="Superficie mínima m²")
    max_size: Optional[float] = Field(None, ge=0, description="Superficie máxima m²")
    min_bedrooms: Optional[int] = Field(None, ge=0)
    max_bedrooms: Optional[int] = Field(None, ge=0)
    min_bathrooms: Optional[int] = Field(None, ge=0)
    max_bathrooms: Optional[int] = Field(None, ge=0)

    # Preferencias de características
    preferences: Optional[FeatureFlags] = Field(
        None, description="Flags que el cliente exige"
    )

    # Metadatos
    created_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat(),
        description="Fecha de alta",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # Los documentos remotos guardan null para criterios vacíos
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @property
    def is_buyer(self) -> bool:
        return self.category == "buyer"
