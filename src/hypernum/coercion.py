"""
Coercion of arbitrary values into canonical numbers.

`to_canonical` returns a CanonicalNumber, or None when the value has no
numeric reading. `require_canonical` is the failing unwrap.
"""

import numbers
from typing import Any, Optional

from hypernum.config import Configuration
from hypernum.constructors import StructureError, from_int, from_number, from_object
from hypernum.model import CanonicalNumber
from hypernum.tower_parser import from_string


class EmptyValueError(LookupError):
    """Raised when a value that has no canonical reading is unwrapped."""
    pass


def to_canonical(source: Any, config: Optional[Configuration] = None) -> Optional[CanonicalNumber]:
    if isinstance(source, CanonicalNumber):
        return source.clone()
    if isinstance(source, bool):
        return None
    if isinstance(source, numbers.Integral):
        return from_int(source, config=config)
    if isinstance(source, numbers.Real):
        return from_number(source, config=config)
    if isinstance(source, str):
        return from_string(source, config=config)
    try:
        return from_object(source, config=config)
    except StructureError:
        return None


def require_canonical(source: Any, config: Optional[Configuration] = None) -> CanonicalNumber:
    """
    Coerce `source`, failing loudly when it has no canonical reading.

    Raises:
        EmptyValueError: If `to_canonical` gives None
    """
    result = to_canonical(source, config)
    if result is None:
        raise EmptyValueError(f"No canonical number for {type(source).__name__}: {source!r}")
    return result
