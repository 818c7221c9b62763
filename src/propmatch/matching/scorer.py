"""
Scoring de compatibilidad cliente-propiedad.

Cada criterio aplicable suma su peso al máximo posible y, si se cumple,
al score obtenido. El resultado final es el porcentaje redondeado
(0-100). Las propiedades no activas puntúan a la mitad.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

import structlog

from propmatch.matching.normalization import (
    normalize_location,
    round_half_up,
    within_bounds,
)
from propmatch.models import Client, FeatureFlags, MatchResult, Property

logger = structlog.get_logger()

# Pesos por criterio
BUDGET_WEIGHT = 20
TYPE_WEIGHT = 12
LOCATION_WEIGHT = 8
SIZE_WEIGHT = 6
BEDROOMS_WEIGHT = 6
BATHROOMS_WEIGHT = 3
FEATURES_WEIGHT = 15

# Factor para propiedades alquiladas o vendidas
INACTIVE_STATUS_FACTOR = 0.5

# Umbrales (exclusivos) de cada vista
CLIENT_MATCH_THRESHOLD = 0
BUYER_MATCH_THRESHOLD = 30


@dataclass(frozen=True)
class CriterionScore:
    """Aporte de un criterio aplicable."""

    name: str
    weight: int
    points: float

    @property
    def passed(self) -> bool:
        return self.points >= self.weight


@dataclass
class ScoreBreakdown:
    """Detalle del cálculo de un score."""

    criteria: list[CriterionScore] = field(default_factory=list)
    status_factor: float = 1.0

    @property
    def max_score(self) -> int:
        return sum(c.weight for c in self.criteria)

    @property
    def raw_score(self) -> float:
        """Puntos obtenidos, ya afectados por el estado de la propiedad."""
        return sum(c.points for c in self.criteria) * self.status_factor

    @property
    def score(self) -> int:
        """Score final 0-100. Sin criterios aplicables es 0, no 100."""
        max_score = self.max_score
        if max_score <= 0:
            return 0
        return round_half_up((self.raw_score / max_score) * 100)


@dataclass
class PropertyMatch:
    """Propiedad rankeada para un cliente."""

    property: Property
    score: int


@dataclass
class BuyerMatch:
    """Comprador rankeado para una propiedad."""

    client: Client
    score: int


class MatchScorer:
    """
    Calcula scores 0-100 y rankings sobre colecciones.

    Es puro y sin estado mutable: puede usarse desde varios
    renders a la vez sin coordinación.
    """

    def __init__(
        self,
        client_threshold: int = CLIENT_MATCH_THRESHOLD,
        buyer_threshold: int = BUYER_MATCH_THRESHOLD,
    ):
        self.client_threshold = client_threshold
        self.buyer_threshold = buyer_threshold

    def score(self, client: Client, property: Property) -> int:
        """Score de compatibilidad entre un cliente y una propiedad."""
        return self.score_breakdown(client, property).score

    def match(self, client: Client, property: Property) -> MatchResult:
        """Score empaquetado como MatchResult."""
        return MatchResult(
            client_id=client.id,
            property_id=property.id,
            score=self.score(client, property),
        )

    def score_breakdown(self, client: Client, property: Property) -> ScoreBreakdown:
        """
        Evalúa cada criterio aplicable del cliente contra la propiedad.

        Args:
            client: Cliente con sus criterios (todos opcionales)
            property: Propiedad candidata

        Returns:
            ScoreBreakdown con un CriterionScore por criterio aplicable
        """
        breakdown = ScoreBreakdown()
        criteria = breakdown.criteria

        if client.budget_min is not None or client.budget_max is not None:
            ok = within_bounds(property.price, client.budget_min, client.budget_max)
            criteria.append(CriterionScore("budget", BUDGET_WEIGHT, BUDGET_WEIGHT if ok else 0))

        if client.desired_property_type:
            ok = property.type == client.desired_property_type
            criteria.append(CriterionScore("type", TYPE_WEIGHT, TYPE_WEIGHT if ok else 0))

        desired = self._desired_locations(client)
        if desired is not None:
            ok = self._location_matches(desired, property.location)
            criteria.append(
                CriterionScore("location", LOCATION_WEIGHT, LOCATION_WEIGHT if ok else 0)
            )

        if client.min_size is not None or client.max_size is not None:
            ok = within_bounds(property.size, client.min_size, client.max_size)
            criteria.append(CriterionScore("size", SIZE_WEIGHT, SIZE_WEIGHT if ok else 0))

        if client.min_bedrooms is not None or client.max_bedrooms is not None:
            ok = within_bounds(
                property.bedrooms or 0, client.min_bedrooms, client.max_bedrooms
            )
            criteria.append(
                CriterionScore("bedrooms", BEDROOMS_WEIGHT, BEDROOMS_WEIGHT if ok else 0)
            )

        if client.min_bathrooms is not None or client.max_bathrooms is not None:
            ok = within_bounds(
                property.bathrooms or 0, client.min_bathrooms, client.max_bathrooms
            )
            criteria.append(
                CriterionScore("bathrooms", BATHROOMS_WEIGHT, BATHROOMS_WEIGHT if ok else 0)
            )

        if client.preferences is not None and property.features is not None:
            points = self._feature_points(client.preferences, property.features)
            criteria.append(CriterionScore("features", FEATURES_WEIGHT, points))

        if not property.is_active:
            breakdown.status_factor = INACTIVE_STATUS_FACTOR

        return breakdown

    def rank_properties_for_client(
        self, client: Client, properties: Iterable[Property]
    ) -> list[PropertyMatch]:
        """
        Propiedades con score > umbral del cliente, de mayor a menor.

        El orden de entrada se conserva en los empates.
        """
        matches = [PropertyMatch(p, self.score(client, p)) for p in properties]
        matches = [m for m in matches if m.score > self.client_threshold]
        matches.sort(key=lambda m: m.score, reverse=True)

        logger.debug("Propiedades rankeadas", client_id=client.id, matches=len(matches))
        return matches

    def rank_clients_for_property(
        self, buyers: Iterable[Client], property: Property
    ) -> list[BuyerMatch]:
        """
        Compradores con score > umbral de compradores, de mayor a menor.

        Los vendedores nunca se rankean contra una propiedad.
        """
        matches = [
            BuyerMatch(c, self.score(c, property)) for c in buyers if c.is_buyer
        ]
        matches = [m for m in matches if m.score > self.buyer_threshold]
        matches.sort(key=lambda m: m.score, reverse=True)

        logger.debug("Compradores rankeados", property_id=property.id, matches=len(matches))
        return matches

    @staticmethod
    def _desired_locations(client: Client) -> Optional[list[str]]:
        # desired_locations no vacía reemplaza al campo legacy
        if client.desired_locations:
            return client.desired_locations
        if client.desired_location:
            return [client.desired_location]
        return None

    @staticmethod
    def _location_matches(desired: list[str], location: str) -> bool:
        if not location:
            return False
        target = normalize_location(location)
        return any(normalize_location(loc) == target for loc in desired)

    @staticmethod
    def _feature_points(preferences: FeatureFlags, features: FeatureFlags) -> float:
        wanted = preferences.enabled()
        if not wanted:
            # Sin preferencias no hay penalización
            return float(FEATURES_WEIGHT)
        matching = sum(1 for name in wanted if getattr(features, name))
        return (matching / len(wanted)) * FEATURES_WEIGHT
