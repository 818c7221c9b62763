"""
Modelos de datos del sistema.

- Client / Property: documentos consumidos del CRM
- MatchResult: score calculado (no persistido)
- ViewedMatch / ExcludedMatch: estado de visibilidad por par
"""

from propmatch.models.features import FeatureFlags, FEATURE_NAMES
from propmatch.models.client import Client, ClientCategory, ClientStatus, PropertyType
from propmatch.models.property import Property, PropertyStatus
from propmatch.models.match import (
    MatchResult,
    ViewedMatch,
    ExcludedMatch,
    match_document_id,
)

__all__ = [
    # Features
    "FeatureFlags",
    "FEATURE_NAMES",
    # CRM
    "Client",
    "ClientCategory",
    "ClientStatus",
    "PropertyType",
    "Property",
    "PropertyStatus",
    # Matching
    "MatchResult",
    "ViewedMatch",
    "ExcludedMatch",
    "match_document_id",
]
