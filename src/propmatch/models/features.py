"""
Características booleanas de una propiedad.

El mismo esquema fijo de 27 flags se usa para las features de una
propiedad y para las preferencias de un cliente.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FeatureFlags(BaseModel):
    """
    Flags de características (o preferencias) de un inmueble.

    En preferencias de cliente, False significa "sin preferencia" y
    True significa "debe tenerla para puntuar bien".
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    security_door: bool = False
    elevator: bool = False
    alarm: bool = False
    view: bool = False
    veranda: bool = False
    bbq: bool = False
    fireplace: bool = False
    front_facing: bool = False
    furnished: bool = False
    heated: bool = False
    internal_staircase: bool = False
    tents: bool = False  # Toldos
    satellite_antenna: bool = False
    screens: bool = False  # Mosquiteros
    pool: bool = False
    neoclassical: bool = False
    ev_charging: bool = False
    reception: bool = False
    armchairs: bool = False
    investment: bool = False
    pets_allowed: bool = False
    listed: bool = False  # Edificio protegido
    garden: bool = False
    under_construction: bool = False
    parking: bool = False
    guesthouse: bool = False
    basement: bool = False

    def enabled(self) -> list[str]:
        """Nombres de los flags activos, en el orden del esquema."""
        return [name for name in type(self).model_fields if getattr(self, name)]


FEATURE_NAMES: tuple[str, ...] = tuple(FeatureFlags.model_fields)
