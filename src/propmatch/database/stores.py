"""
Adaptadores de Supabase para el motor de matching.

- SupabaseCRMStore: carga el snapshot de clientes y propiedades
- SupabaseVisibilityStore: persiste vistas y exclusiones por usuario
"""

from typing import Optional

import structlog
from tenacity import retry, stop_after_attempt, wait_exponential

from propmatch.database.repositories import (
    ClientRepository,
    ExcludedMatchRepository,
    MatchViewRepository,
    PropertyRepository,
)
from propmatch.database.supabase_client import SupabaseClient
from propmatch.matching.store import CRMSnapshot, CRMStore
from propmatch.matching.visibility import VisibilityStore
from propmatch.models import ExcludedMatch, ViewedMatch

logger = structlog.get_logger()


class SupabaseCRMStore(CRMStore):
    """
    Snapshot del CRM leído desde Supabase.

    El snapshot se mantiene hasta el próximo refresh(), así la caché
    de rankings sigue siendo válida entre renders.
    """

    def __init__(self, user_id: str, client: Optional[SupabaseClient] = None):
        self.user_id = user_id
        self.client_repo = ClientRepository(client)
        self.property_repo = PropertyRepository(client)
        self._snapshot = CRMSnapshot()

    def snapshot(self) -> CRMSnapshot:
        return self._snapshot

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def refresh(self) -> CRMSnapshot:
        """
        Recarga clientes y propiedades del usuario.

        Returns:
            El snapshot nuevo

        Raises:
            Exception: Si Supabase falla en los 3 intentos
        """
        try:
            clients = self.client_repo.list_for_user(self.user_id)
            properties = self.property_repo.list_for_user(self.user_id)
        except Exception as e:
            logger.error(
                "Error cargando snapshot del CRM",
                user_id=self.user_id,
                error=str(e),
            )
            raise

        self._snapshot = CRMSnapshot(tuple(clients), tuple(properties))
        logger.info(
            "Snapshot del CRM cargado",
            user_id=self.user_id,
            clients=len(clients),
            properties=len(properties),
        )
        return self._snapshot


class SupabaseVisibilityStore(VisibilityStore):
    """Vistas y exclusiones en las tablas match_views y excluded_matches."""

    def __init__(self, user_id: str, client: Optional[SupabaseClient] = None):
        self.user_id = user_id
        self.view_repo = MatchViewRepository(client)
        self.exclusion_repo = ExcludedMatchRepository(client)

    def save_view(self, view: ViewedMatch) -> None:
        self.view_repo.create(view)

    def save_exclusion(self, exclusion: ExcludedMatch) -> None:
        self.exclusion_repo.create(exclusion)

    def load_views(self) -> list[ViewedMatch]:
        return self.view_repo.get_all(self.user_id)

    def load_exclusions(self) -> list[ExcludedMatch]:
        return self.exclusion_repo.get_all(self.user_id)
