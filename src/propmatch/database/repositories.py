"""
Repositorios para operaciones en Supabase.

Cada repositorio maneja una tabla/entidad específica. Los documentos
están agrupados por el usuario (agente) dueño del CRM.
"""

from typing import Optional

import structlog

from propmatch.database.supabase_client import get_supabase_client, SupabaseClient
from propmatch.models import Client, ExcludedMatch, Property, ViewedMatch

logger = structlog.get_logger()


class BaseRepository:
    """Clase base para repositorios."""

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or get_supabase_client()

    @property
    def client(self) -> SupabaseClient:
        return self._client


class ClientRepository(BaseRepository):
    """Repositorio de clientes (solo lectura para el matching)."""

    TABLE = "clients"

    def list_for_user(self, user_id: str) -> list[Client]:
        """Todos los clientes del usuario, en orden de alta."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("userId", user_id)
            .order("createdAt")
            .execute()
        )
        return [Client.model_validate(row) for row in response.data]


class PropertyRepository(BaseRepository):
    """Repositorio de propiedades (solo lectura para el matching)."""

    TABLE = "properties"

    def list_for_user(self, user_id: str) -> list[Property]:
        """Todas las propiedades del usuario, en orden de alta."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("userId", user_id)
            .order("createdAt")
            .execute()
        )
        return [Property.model_validate(row) for row in response.data]


class MatchViewRepository(BaseRepository):
    """Repositorio para matches vistos."""

    TABLE = "match_views"

    def create(self, view: ViewedMatch) -> dict:
        """Registra (o re-registra) un match visto."""
        response = (
            self.client.table(self.TABLE)
            .upsert(view.to_db_dict(), on_conflict="id")
            .execute()
        )
        logger.info(
            "Match view registrado",
            property_id=view.property_id,
            buyer_id=view.buyer_id,
        )
        return response.data[0] if response.data else {}

    def get_all(self, user_id: str) -> list[ViewedMatch]:
        """Todas las vistas del usuario."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("userId", user_id)
            .execute()
        )
        return [ViewedMatch.model_validate(row) for row in response.data]

    def get_by_property(self, user_id: str, property_id: str) -> list[dict]:
        """Vistas del usuario para una propiedad."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("userId", user_id)
            .eq("propertyId", property_id)
            .execute()
        )
        return response.data


class ExcludedMatchRepository(BaseRepository):
    """Repositorio para matches excluidos."""

    TABLE = "excluded_matches"

    def create(self, exclusion: ExcludedMatch) -> dict:
        """Registra una exclusión."""
        response = (
            self.client.table(self.TABLE)
            .upsert(exclusion.to_db_dict(), on_conflict="id")
            .execute()
        )
        logger.info(
            "Match excluido registrado",
            client_id=exclusion.client_id,
            property_id=exclusion.property_id,
        )
        return response.data[0] if response.data else {}

    def get_all(self, user_id: str) -> list[ExcludedMatch]:
        """Todas las exclusiones del usuario."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("userId", user_id)
            .execute()
        )
        return [ExcludedMatch.model_validate(row) for row in response.data]

    def get_by_client(self, user_id: str, client_id: str) -> list[dict]:
        """Exclusiones del usuario para un cliente."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("userId", user_id)
            .eq("clientId", client_id)
            .execute()
        )
        return response.data
