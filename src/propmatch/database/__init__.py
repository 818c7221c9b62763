"""
Módulo de base de datos.

Provee acceso a Supabase y los adaptadores de persistencia del matching.
"""

from propmatch.database.supabase_client import get_supabase_client, SupabaseClient
from propmatch.database.repositories import (
    ClientRepository,
    PropertyRepository,
    MatchViewRepository,
    ExcludedMatchRepository,
)
from propmatch.database.stores import SupabaseCRMStore, SupabaseVisibilityStore

__all__ = [
    "get_supabase_client",
    "SupabaseClient",
    "ClientRepository",
    "PropertyRepository",
    "MatchViewRepository",
    "ExcludedMatchRepository",
    "SupabaseCRMStore",
    "SupabaseVisibilityStore",
]
