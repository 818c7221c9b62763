"""
Script para consultar matches del CRM.

Carga el snapshot de clientes y propiedades del usuario desde Supabase
y muestra los rankings de matching.

Uso:
    python -m propmatch.scripts.run_matching
    python -m propmatch.scripts.run_matching --client-id abc123
    python -m propmatch.scripts.run_matching --property-id xyz789
"""

import argparse
import sys
from typing import Optional

import structlog

from propmatch.config import get_settings
from propmatch.database import SupabaseCRMStore, SupabaseVisibilityStore
from propmatch.logging_config import configure_logging
from propmatch.matching import MatchingService, MatchVisibilityTracker

logger = structlog.get_logger()


def build_service(user_id: str) -> MatchingService:
    """Arma el servicio de matching respaldado por Supabase."""
    store = SupabaseCRMStore(user_id)
    store.refresh()

    tracker = MatchVisibilityTracker(
        store=SupabaseVisibilityStore(user_id), user_id=user_id
    )
    tracker.load()

    return MatchingService(store, tracker=tracker)


def print_report(
    service: MatchingService,
    client_id: Optional[str] = None,
    property_id: Optional[str] = None,
) -> int:
    """
    Imprime el ranking pedido.

    Returns:
        Cantidad de matches impresos
    """
    if client_id:
        matches = service.matches_for_client(client_id)
        for m in matches:
            print(f"{m.score:>3}%  {m.property.id}  {m.property.title}  {m.property.location}")
        return len(matches)

    if property_id:
        buyers = service.buyers_for_property(property_id)
        for b in buyers:
            print(f"{b.score:>3}%  {b.client.id}  {b.client.name}  {b.client.phone}")
        return len(buyers)

    overview = service.property_overview()
    for item in overview:
        print(f"{len(item.buyers):>3} compradores  {item.property.id}  {item.property.title}")
        for b in item.buyers:
            print(f"       {b.score:>3}%  {b.client.name}")
    return service.total_matches()


def main(argv: Optional[list[str]] = None):
    """Entry point del script."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Rankings de matching del CRM")
    parser.add_argument("--user-id", default=settings.crm_user_id, help="Agente dueño del CRM")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--client-id", help="Propiedades compatibles con un cliente")
    group.add_argument("--property-id", help="Compradores compatibles con una propiedad")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    if not args.user_id:
        logger.error("Falta el usuario: usar --user-id o CRM_USER_ID")
        sys.exit(2)

    try:
        service = build_service(args.user_id)
        total = print_report(service, args.client_id, args.property_id)
        logger.info("Matching completado", matches=total)
        sys.exit(0)

    except KeyboardInterrupt:
        logger.info("Matching interrumpido por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal en matching", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
