"""
Constructors: raw input -> canonical number.

Every constructor builds a provisional term list and hands it to the
normalizer, so nothing leaves this module in a denormal state.

Recognised structured shapes form a closed set (see `InputShape`):
    - nothing (None)          -> zero
    - a CanonicalNumber       -> independent copy
    - a list / tuple          -> flat magnitudes (index = operator) or Terms
    - a mapping with `terms`  -> {"terms": [...], "sign": ±1, "layer": n}

Text inputs live in `hypernum.tower_parser` and `hypernum.hyper_e`.
"""

import math
import numbers
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Union

from hypernum.config import Configuration, resolve_configuration
from hypernum.model import (
    MAX_SAFE_INTEGER,
    NEGATIVE,
    POSITIVE,
    CanonicalNumber,
    Sign,
    Term,
)
from hypernum.normalizer import normalize

# Bits kept when estimating log10 of a big integer.
_LEADING_BITS = 54

_LOG10_2 = math.log10(2)


class StructureError(ValueError):
    """Raised when an array or object does not have a recognised number shape."""
    pass


class InputShape(Enum):
    """The structured input shapes `from_object` accepts."""

    EMPTY = "empty"
    NUMBER = "number"
    ARRAY = "array"
    RECORD = "record"


def build(
    terms: Iterable[Term],
    sign: Sign = POSITIVE,
    layer: int = 0,
    config: Optional[Configuration] = None,
) -> CanonicalNumber:
    """Normalize `terms`/`layer` and wrap the result."""
    cfg = resolve_configuration(config)
    canonical, layer = normalize(terms, layer, cfg.max_terms)
    return CanonicalNumber(sign=sign, terms=tuple(canonical), layer=layer)


def from_number(n: float, config: Optional[Configuration] = None) -> CanonicalNumber:
    """
    Build from a native float.

    Fractions are floored away by the normalizer: 3.14 becomes 3. Past the
    ceiling the value is kept as a fractional log10, so 2e20 > 1e20.
    """
    if not _is_real(n):
        raise StructureError(f"Invalid Arguments: expected a real number, got {type(n).__name__}")
    n = float(n)
    sign = NEGATIVE if n < 0 else POSITIVE
    return build([Term(0, abs(n))], sign, 0, config)


def from_int(n: int, config: Optional[Configuration] = None) -> CanonicalNumber:
    """
    Build from an arbitrary-precision integer.

    Integers past MAX_SAFE_INTEGER never go through float(); their base-10
    logarithm comes from the leading bits and the bit length.
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise StructureError(f"Invalid Arguments: expected an integer, got {type(n).__name__}")
    n = int(n)
    magnitude = abs(n)
    sign = NEGATIVE if n < 0 else POSITIVE

    if magnitude <= MAX_SAFE_INTEGER:
        terms = [Term(0, float(magnitude))]
    else:
        terms = [Term(0, log10_int(magnitude)), Term(1, 1.0)]
    return build(terms, sign, 0, config)


def log10_int(n: int) -> float:
    """Base-10 logarithm of a positive integer of any size."""
    cut = n.bit_length() - _LEADING_BITS
    if cut <= 0:
        return math.log10(n)
    return math.log10(n >> cut) + cut * _LOG10_2


def from_array(
    values: Sequence[Union[float, Term]],
    sign: Any = None,
    layer: int = 0,
    config: Optional[Configuration] = None,
) -> CanonicalNumber:
    """
    Build from a flat magnitude array or an array of Terms.

    Flat arrays use the position as the operator:
        [1000, 2]  ->  Term(0, 1000), Term(1, 2)  ->  10^10^1000

    Raises:
        StructureError: If the elements are mixed or of an unknown type
    """
    return build(_terms_from_array(values), _sign_from(sign), _layer_from(layer), config)


def from_terms(
    terms: Iterable[Term],
    sign: Any = None,
    layer: int = 0,
    config: Optional[Configuration] = None,
) -> CanonicalNumber:
    """Build from explicit terms (any order, possibly denormal)."""
    terms = list(terms)
    for term in terms:
        if not isinstance(term, Term):
            raise StructureError(f"Invalid Arguments: expected Term, got {type(term).__name__}")
    return build(terms, _sign_from(sign), _layer_from(layer), config)


def classify(obj: Any) -> InputShape:
    """
    Decide which structured shape `obj` is.

    Raises:
        StructureError: If `obj` matches none of the recognised shapes
    """
    if obj is None:
        return InputShape.EMPTY
    if isinstance(obj, CanonicalNumber):
        return InputShape.NUMBER
    if isinstance(obj, (list, tuple)):
        return InputShape.ARRAY
    if isinstance(obj, Mapping):
        for key in ("terms", "array"):
            if isinstance(obj.get(key), (list, tuple)):
                return InputShape.RECORD
    raise StructureError(f"Invalid Arguments: Invalid Object supplied: {type(obj).__name__}")


def from_object(obj: Any, config: Optional[Configuration] = None) -> CanonicalNumber:
    """
    Build from a structured value (see module docstring for the shapes).

    Absent `sign` and `layer` fields default to +1 and 0.

    Raises:
        StructureError: If the value has none of the recognised shapes
    """
    shape = classify(obj)

    if shape is InputShape.EMPTY:
        return build([Term(0, 0.0)], POSITIVE, 0, config)
    if shape is InputShape.NUMBER:
        return obj.clone()
    if shape is InputShape.ARRAY:
        return from_array(obj, config=config)

    raw_terms = obj["terms"] if "terms" in obj else obj["array"]
    return build(
        _terms_from_array(raw_terms),
        _sign_from(obj.get("sign")),
        _layer_from(obj.get("layer", 0)),
        config,
    )


def _terms_from_array(values: Sequence[Any]) -> List[Term]:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise StructureError(f"Invalid Arguments: expected an array, got {type(values).__name__}")
    if not values:
        return [Term(0, 0.0)]

    first = values[0]
    if _is_real(first):
        terms = []
        for operator, item in enumerate(values):
            if not _is_real(item):
                raise StructureError("Invalid Arguments: Invalid Array supplied. Expected an array of numbers.")
            terms.append(Term(operator, item))
        return terms

    if isinstance(first, (Term, Mapping)):
        terms = []
        for item in values:
            if isinstance(item, Term):
                terms.append(item)
            elif isinstance(item, Mapping):
                terms.append(term_from_record(item))
            else:
                raise StructureError("Invalid Arguments: Invalid Array supplied. Expected an array of terms.")
        return terms

    raise StructureError(f"Invalid Arguments: Unsupported array element: {type(first).__name__}")


def term_from_record(record: Mapping) -> Term:
    """
    Read {"operator": int, "base": number} (operator defaults to 0).

    Bases may be the strings "NaN", "Infinity" or "-Infinity", as written by
    the JSON serializer.
    """
    if "base" not in record:
        raise StructureError(f"Invalid Arguments: term record has no base: {dict(record)!r}")
    operator = record.get("operator", 0)
    if operator is None:
        operator = 0
    if not _is_real(operator):
        raise StructureError(f"Invalid Arguments: term operator must be a number, got {operator!r}")
    return Term(operator, _base_from(record["base"]))


def _base_from(value: Any) -> float:
    if isinstance(value, str) and value in ("NaN", "Infinity", "-Infinity"):
        return float(value)
    if not _is_real(value):
        raise StructureError(f"Invalid Arguments: term base must be a number, got {value!r}")
    return float(value)


def _sign_from(value: Any) -> Sign:
    if value is None:
        return POSITIVE
    if isinstance(value, Sign):
        return value
    if _is_real(value) and value in (1, -1):
        return Sign(int(value))
    raise StructureError(f"Invalid Arguments: sign must be 1 or -1, got {value!r}")


def _layer_from(value: Any) -> int:
    if not _is_real(value):
        raise StructureError(f"Invalid Arguments: layer must be a number, got {value!r}")
    if value < 0:
        raise StructureError(f"Invalid Arguments: layer must be non-negative, got {value!r}")
    return value


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)
