"""
Helpers compartidos de normalización y comparación.
"""

import math
import re
from typing import Optional

_SEPARATORS = re.compile(r"[,;.\s]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_location(location: str) -> str:
    """
    Normaliza una ubicación de texto libre para comparación exacta.

    Pasa a minúsculas, colapsa comas, puntos y comas, puntos y espacios
    en un único espacio y recorta los extremos. No elimina acentos:
    "Αθηνα" y "Αθήνα" siguen siendo distintas.
    """
    normalized = _SEPARATORS.sub(" ", location.lower().strip())
    return _WHITESPACE.sub(" ", normalized).strip()


def within_bounds(
    value: float,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> bool:
    """Verifica lower <= value <= upper; un límite None queda abierto."""
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


def round_half_up(value: float) -> int:
    """Redondeo half-up (2.5 -> 3), a diferencia del round() bancario."""
    return int(math.floor(value + 0.5))
