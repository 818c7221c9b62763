"""
Modelo de Propiedad.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from propmatch.models.client import PropertyType
from propmatch.models.features import FeatureFlags

PropertyStatus = Literal["active", "rented", "sold"]


class Property(BaseModel):
    """Inmueble cargado en el CRM."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(..., description="ID del documento")
    title: str = Field(default="", description="Título del aviso")
    description: str = Field(default="")

    type: PropertyType = Field(..., description="apartment, house, plot o commercial")
    status: PropertyStatus = Field(default="active", description="active, rented o sold")

    price: float = Field(..., ge=0, description="Precio")
    location: str = Field(default="", description="Ubicación como texto libre")
    size: float = Field(default=0, ge=0, description="Superficie m²")
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)

    features: Optional[FeatureFlags] = Field(None, description="Características")
    photos: list[str] = Field(default_factory=list, description="URLs de fotos")

    created_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat(),
        description="Fecha de alta",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @property
    def is_active(self) -> bool:
        return self.status == "active"
