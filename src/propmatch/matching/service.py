"""
Servicio de matching para la capa de presentación.

Combina el snapshot del CRM, el scorer y el tracker de visibilidad:
- Lista de propiedades por cliente (score > 0)
- Lista de compradores por propiedad (score > 30)
- Vista general por propiedad y contadores de badges

Los rankings se memorizan por identidad del snapshot y versión de
exclusiones, para no recalcular O(clientes x propiedades) en cada render.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from propmatch.config import get_settings
from propmatch.matching.scorer import BuyerMatch, MatchScorer, PropertyMatch
from propmatch.matching.store import CRMSnapshot, CRMStore
from propmatch.matching.visibility import MatchVisibilityTracker
from propmatch.models import Property

logger = structlog.get_logger()


@dataclass
class PropertyBuyers:
    """Propiedad con sus compradores compatibles."""

    property: Property
    buyers: list[BuyerMatch]


class MatchBadgeCounter:
    """
    Contador legacy de badge: total actual contra último total visto.

    Más grueso que el tracking por par; se mantiene para el badge de
    la pestaña de matches.
    """

    def __init__(self, last_seen_total: int = 0):
        self.last_seen_total = last_seen_total

    def pending(self, total: int) -> int:
        return max(0, total - self.last_seen_total)

    def clear(self, total: int) -> None:
        self.last_seen_total = total


class MatchingService:
    """Fachada de matching con caché y filtrado de exclusiones."""

    def __init__(
        self,
        store: CRMStore,
        scorer: Optional[MatchScorer] = None,
        tracker: Optional[MatchVisibilityTracker] = None,
        badge: Optional[MatchBadgeCounter] = None,
    ):
        if scorer is None:
            settings = get_settings()
            scorer = MatchScorer(
                client_threshold=settings.client_match_threshold,
                buyer_threshold=settings.buyer_match_threshold,
            )
        self.store = store
        self.scorer = scorer
        self.tracker = tracker or MatchVisibilityTracker()
        self.badge = badge or MatchBadgeCounter()

        self._cache: dict = {}
        self._cache_snapshot: Optional[CRMSnapshot] = None
        self._cache_version = -1

    def matches_for_client(self, client_id: str) -> list[PropertyMatch]:
        """Propiedades rankeadas para un cliente, sin las excluidas."""
        snapshot = self._current_snapshot()
        key = ("client", client_id)
        if key in self._cache:
            return self._cache[key]

        client = snapshot.get_client(client_id)
        if client is None:
            logger.warning("Cliente no encontrado", client_id=client_id)
            return []

        matches = [
            m
            for m in self.scorer.rank_properties_for_client(client, snapshot.properties)
            if not self.tracker.is_excluded(client_id, m.property.id)
        ]
        self._cache[key] = matches
        return matches

    def buyers_for_property(self, property_id: str) -> list[BuyerMatch]:
        """Compradores rankeados para una propiedad, sin los excluidos."""
        snapshot = self._current_snapshot()
        key = ("property", property_id)
        if key in self._cache:
            return self._cache[key]

        prop = snapshot.get_property(property_id)
        if prop is None:
            logger.warning("Propiedad no encontrada", property_id=property_id)
            return []

        buyers = self._rank_buyers(snapshot, prop)
        self._cache[key] = buyers
        return buyers

    def property_overview(self) -> list[PropertyBuyers]:
        """
        Todas las propiedades con sus compradores compatibles.

        Ordenadas por cantidad de compradores, de mayor a menor.
        """
        snapshot = self._current_snapshot()
        key = ("overview",)
        if key in self._cache:
            return self._cache[key]

        overview = []
        for prop in snapshot.properties:
            buyers = self._cache.get(("property", prop.id))
            if buyers is None:
                buyers = self._rank_buyers(snapshot, prop)
                self._cache[("property", prop.id)] = buyers
            overview.append(PropertyBuyers(prop, buyers))
        overview.sort(key=lambda item: len(item.buyers), reverse=True)

        self._cache[key] = overview
        logger.debug(
            "Vista general de matches calculada",
            properties=len(overview),
            buyers=len(snapshot.buyers),
        )
        return overview

    def total_matches(self) -> int:
        """Cantidad de pares propiedad-comprador en la vista general."""
        return sum(len(item.buyers) for item in self.property_overview())

    def new_match_count(self) -> int:
        """Pares de la vista general que el usuario todavía no vio."""
        return sum(
            1
            for item in self.property_overview()
            for buyer in item.buyers
            if not self.tracker.is_viewed(item.property.id, buyer.client.id)
        )

    def pending_badge_count(self) -> int:
        """Badge legacy basado en el último total visto."""
        return self.badge.pending(self.total_matches())

    def clear_badge(self) -> None:
        self.badge.clear(self.total_matches())

    def _rank_buyers(self, snapshot: CRMSnapshot, prop: Property) -> list[BuyerMatch]:
        return [
            b
            for b in self.scorer.rank_clients_for_property(snapshot.clients, prop)
            if not self.tracker.is_excluded(b.client.id, prop.id)
        ]

    def _current_snapshot(self) -> CRMSnapshot:
        snapshot = self.store.snapshot()
        version = self.tracker.exclusion_version
        if snapshot is not self._cache_snapshot or version != self._cache_version:
            self._cache.clear()
            self._cache_snapshot = snapshot
            self._cache_version = version
        return snapshot
