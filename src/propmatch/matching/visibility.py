"""
Estado de visibilidad de matches.

Registra qué pares cliente-propiedad ya se vieron y cuáles fueron
descartados por el usuario. Ambos conjuntos solo crecen. La
persistencia es best-effort: el estado en memoria se actualiza
siempre antes de intentar escribir en el store.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog

from propmatch.models import ExcludedMatch, ViewedMatch

logger = structlog.get_logger()


class VisibilityStore(ABC):
    """Backend de persistencia para vistas y exclusiones."""

    @abstractmethod
    def save_view(self, view: ViewedMatch) -> None:
        """Persiste un match visto."""

    @abstractmethod
    def save_exclusion(self, exclusion: ExcludedMatch) -> None:
        """Persiste un match excluido."""

    @abstractmethod
    def load_views(self) -> list[ViewedMatch]:
        """Todos los matches vistos del usuario."""

    @abstractmethod
    def load_exclusions(self) -> list[ExcludedMatch]:
        """Todos los matches excluidos del usuario."""


class MatchVisibilityTracker:
    """
    Tracker de matches vistos y excluidos para una sesión de usuario.

    No filtra rankings: la capa de presentación combina sus
    consultas con los resultados del scorer.
    """

    def __init__(
        self,
        store: Optional[VisibilityStore] = None,
        user_id: Optional[str] = None,
    ):
        self._store = store
        self._user_id = user_id
        self._viewed: dict[tuple[str, str], ViewedMatch] = {}
        self._excluded: dict[tuple[str, str], ExcludedMatch] = {}
        self._exclusion_version = 0

    @property
    def exclusion_version(self) -> int:
        """Crece con cada exclusión nueva; sirve como clave de caché."""
        return self._exclusion_version

    def load(self) -> None:
        """
        Hidrata el estado desde el store.

        Un store que falla deja el estado en memoria como estaba.
        """
        if self._store is None:
            return

        try:
            views = self._store.load_views()
            exclusions = self._store.load_exclusions()
        except Exception as e:
            logger.warning("Error cargando estado de visibilidad", error=str(e))
            return

        for view in views:
            self._viewed.setdefault(view.key, view)
        for exclusion in exclusions:
            if exclusion.key not in self._excluded:
                self._excluded[exclusion.key] = exclusion
                self._exclusion_version += 1

        logger.info(
            "Estado de visibilidad cargado",
            viewed=len(self._viewed),
            excluded=len(self._excluded),
        )

    def mark_viewed(self, property_id: str, client_id: str) -> None:
        """Marca el match como visto. Idempotente."""
        key = (property_id, client_id)
        if key in self._viewed:
            return

        view = ViewedMatch(
            user_id=self._user_id, property_id=property_id, buyer_id=client_id
        )
        self._viewed[key] = view
        self._persist("save_view", view)

    def is_viewed(self, property_id: str, client_id: str) -> bool:
        return (property_id, client_id) in self._viewed

    def viewed_at(self, property_id: str, client_id: str) -> Optional[str]:
        """Timestamp ISO de la primera visualización, si existe."""
        view = self._viewed.get((property_id, client_id))
        return view.viewed_at if view else None

    def exclude(self, client_id: str, property_id: str) -> None:
        """Descarta el match de forma permanente. Idempotente."""
        key = (client_id, property_id)
        if key in self._excluded:
            return

        exclusion = ExcludedMatch(
            user_id=self._user_id, client_id=client_id, property_id=property_id
        )
        self._excluded[key] = exclusion
        self._exclusion_version += 1
        logger.info("Match excluido", client_id=client_id, property_id=property_id)
        self._persist("save_exclusion", exclusion)

    def is_excluded(self, client_id: str, property_id: str) -> bool:
        return (client_id, property_id) in self._excluded

    def excluded_for_client(self, client_id: str) -> set[str]:
        """IDs de propiedades excluidas para un cliente."""
        return {pid for cid, pid in self._excluded if cid == client_id}

    def _persist(self, method: str, record) -> None:
        if self._store is None:
            return
        try:
            getattr(self._store, method)(record)
        except Exception as e:
            # El estado de visibilidad no es crítico: se loguea y se sigue
            logger.warning(
                "Error persistiendo estado de visibilidad",
                operation=method,
                error=str(e),
            )
