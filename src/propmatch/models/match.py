"""
Modelos de matching.

MatchResult se recalcula bajo demanda y no se persiste. ViewedMatch y
ExcludedMatch son el estado de visibilidad de un par cliente-propiedad.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MatchResult(BaseModel):
    """Score de compatibilidad entre un cliente y una propiedad."""

    client_id: str
    property_id: str
    score: int = Field(..., ge=0, le=100, description="Compatibilidad 0-100")


class ViewedMatch(BaseModel):
    """Match que el usuario ya vio (suprime el badge de "nuevo")."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = Field(None, description="Agente dueño del registro")
    property_id: str
    buyer_id: str = Field(..., description="ID del cliente comprador")
    viewed_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat(),
        description="Timestamp ISO de la primera visualización",
    )

    @property
    def key(self) -> tuple[str, str]:
        return (self.property_id, self.buyer_id)

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        data = self.model_dump(by_alias=True)
        data["id"] = match_document_id(self.user_id, self.buyer_id, self.property_id)
        return data


class ExcludedMatch(BaseModel):
    """Match descartado manualmente por el usuario."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = Field(None, description="Agente dueño del registro")
    client_id: str
    property_id: str
    excluded_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat(),
        description="Timestamp ISO de la exclusión",
    )

    @property
    def key(self) -> tuple[str, str]:
        return (self.client_id, self.property_id)

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        data = self.model_dump(by_alias=True)
        data["id"] = match_document_id(self.user_id, self.client_id, self.property_id)
        return data


def match_document_id(user_id: Optional[str], client_id: str, property_id: str) -> str:
    """ID determinístico del documento: {userId}_{clientId}_{propertyId}."""
    return f"{user_id or 'local'}_{client_id}_{property_id}"
