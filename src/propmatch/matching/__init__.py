"""
Motor de matching.

Score ponderado multi-criterio entre clientes y propiedades, más el
seguimiento de matches vistos y excluidos.
"""

from propmatch.matching.scorer import (
    MatchScorer,
    ScoreBreakdown,
    CriterionScore,
    PropertyMatch,
    BuyerMatch,
)
from propmatch.matching.visibility import MatchVisibilityTracker, VisibilityStore
from propmatch.matching.store import CRMSnapshot, CRMStore, InMemoryCRMStore
from propmatch.matching.service import MatchingService, MatchBadgeCounter, PropertyBuyers

__all__ = [
    # Scoring
    "MatchScorer",
    "ScoreBreakdown",
    "CriterionScore",
    "PropertyMatch",
    "BuyerMatch",
    # Visibilidad
    "MatchVisibilityTracker",
    "VisibilityStore",
    # Datos
    "CRMSnapshot",
    "CRMStore",
    "InMemoryCRMStore",
    # Servicio
    "MatchingService",
    "MatchBadgeCounter",
    "PropertyBuyers",
]
