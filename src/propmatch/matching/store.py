"""
Fuente de datos del CRM para el matching.

El matching solo lee un snapshot inmutable de clientes y propiedades;
cómo se cargan o sincronizan esos datos queda fuera del motor.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

from propmatch.models import Client, Property


@dataclass(frozen=True)
class CRMSnapshot:
    """Colecciones ordenadas de clientes y propiedades en un momento dado."""

    clients: tuple[Client, ...] = ()
    properties: tuple[Property, ...] = ()

    def get_client(self, client_id: str) -> Optional[Client]:
        return next((c for c in self.clients if c.id == client_id), None)

    def get_property(self, property_id: str) -> Optional[Property]:
        return next((p for p in self.properties if p.id == property_id), None)

    @property
    def buyers(self) -> tuple[Client, ...]:
        return tuple(c for c in self.clients if c.is_buyer)


class CRMStore(ABC):
    """Contrato de lectura: siempre devuelve el snapshot actual."""

    @abstractmethod
    def snapshot(self) -> CRMSnapshot:
        """Snapshot actual. Un mismo objeto mientras no haya cambios."""


class InMemoryCRMStore(CRMStore):
    """Store en memoria; cada cambio genera un snapshot nuevo."""

    def __init__(
        self,
        clients: Iterable[Client] = (),
        properties: Iterable[Property] = (),
    ):
        self._snapshot = CRMSnapshot(tuple(clients), tuple(properties))

    def snapshot(self) -> CRMSnapshot:
        return self._snapshot

    def set_clients(self, clients: Iterable[Client]) -> None:
        self._snapshot = CRMSnapshot(tuple(clients), self._snapshot.properties)

    def set_properties(self, properties: Iterable[Property]) -> None:
        self._snapshot = CRMSnapshot(self._snapshot.clients, tuple(properties))
