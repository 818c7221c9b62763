"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest

from propmatch.models import Client, FeatureFlags, Property


@pytest.fixture
def make_client():
    """Factory de clientes compradores sin criterios por defecto."""

    def _make(client_id: str = "c1", **kwargs) -> Client:
        kwargs.setdefault("category", "buyer")
        return Client(id=client_id, **kwargs)

    return _make


@pytest.fixture
def make_property():
    """Factory de propiedades activas."""

    def _make(property_id: str = "p1", **kwargs) -> Property:
        kwargs.setdefault("type", "apartment")
        kwargs.setdefault("price", 150000)
        kwargs.setdefault("location", "Athens")
        kwargs.setdefault("size", 80)
        return Property(id=property_id, **kwargs)

    return _make


@pytest.fixture
def budget_type_client(make_client):
    """Cliente con presupuesto 100k-200k buscando departamento."""
    return make_client(
        "buyer-1",
        budget_min=100000,
        budget_max=200000,
        desired_property_type="apartment",
    )


@pytest.fixture
def full_client(make_client):
    """Cliente con todos los criterios cargados."""
    return make_client(
        "buyer-full",
        budget_min=100000,
        budget_max=200000,
        desired_property_type="apartment",
        desired_locations=["Athens", "Piraeus"],
        min_size=50,
        max_size=100,
        min_bedrooms=2,
        max_bedrooms=3,
        min_bathrooms=1,
        max_bathrooms=2,
        preferences=FeatureFlags(pool=True, elevator=True),
    )


@pytest.fixture
def full_property(make_property):
    """Propiedad que cumple todos los criterios de full_client."""
    return make_property(
        "prop-full",
        price=150000,
        location="athens",
        size=80,
        bedrooms=2,
        bathrooms=1,
        features=FeatureFlags(pool=True, elevator=True, garden=True),
    )


@pytest.fixture
def supabase_query():
    """
    Query builder de Supabase simulado.

    Todos los métodos encadenables devuelven el mismo mock; execute()
    se configura en cada test.
    """
    query = MagicMock()
    for method in ("select", "eq", "order", "limit", "upsert", "insert"):
        getattr(query, method).return_value = query
    return query


@pytest.fixture
def supabase_client(supabase_query):
    """SupabaseClient simulado que devuelve supabase_query para toda tabla."""
    client = MagicMock()
    client.table.return_value = supabase_query
    return client
