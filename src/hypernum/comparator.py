"""
Total order over canonical numbers.

compare(a, b) returns an Ordering. NaN on either side is UNORDERED, which
every derived predicate except `neq` treats as False.
"""

import math
from enum import Enum
from typing import Any

from hypernum.coercion import require_canonical
from hypernum.model import CanonicalNumber


class Ordering(Enum):
    """Outcome of comparing two canonical numbers."""

    LESS = -1
    EQUAL = 0
    GREATER = 1
    UNORDERED = None

    def is_less(self) -> bool:
        return self is Ordering.LESS

    def is_equal(self) -> bool:
        return self is Ordering.EQUAL

    def is_greater(self) -> bool:
        return self is Ordering.GREATER

    def flip(self) -> "Ordering":
        if self is Ordering.LESS:
            return Ordering.GREATER
        if self is Ordering.GREATER:
            return Ordering.LESS
        return self


def compare(a: Any, b: Any) -> Ordering:
    """
    Compare two values.

    Operands that are not canonical numbers are coerced first; an operand
    that cannot be coerced raises EmptyValueError.
    """
    a, b = _canonical(a), _canonical(b)

    if a.is_nan() or b.is_nan():
        return Ordering.UNORDERED
    if math.isinf(a.leading) and not math.isinf(b.leading):
        return Ordering.GREATER if a.sign.is_positive() else Ordering.LESS
    if not math.isinf(a.leading) and math.isinf(b.leading):
        return Ordering.LESS if b.sign.is_positive() else Ordering.GREATER
    if a.is_zero() and b.is_zero():
        return Ordering.EQUAL

    if a.sign != b.sign:
        return Ordering.GREATER if a.sign.is_positive() else Ordering.LESS

    ordering = _compare_magnitudes(a, b)
    if a.sign.is_negative():
        return ordering.flip()
    return ordering


def _compare_magnitudes(a: CanonicalNumber, b: CanonicalNumber) -> Ordering:
    if a.layer != b.layer:
        return Ordering.GREATER if a.layer > b.layer else Ordering.LESS

    # Most significant terms first.
    for e, f in zip(reversed(a.terms), reversed(b.terms)):
        if (e.operator, e.base) > (f.operator, f.base):
            return Ordering.GREATER
        if (e.operator, e.base) < (f.operator, f.base):
            return Ordering.LESS

    if len(a.terms) == len(b.terms):
        return Ordering.EQUAL
    if len(a.terms) > len(b.terms):
        return Ordering.GREATER if _dominates(a) else Ordering.LESS
    return Ordering.LESS if _dominates(b) else Ordering.GREATER


def _dominates(longer: CanonicalNumber) -> bool:
    top = longer.terms[-1]
    return top.operator >= 1 or top.base > 10


def gt(a: Any, b: Any) -> bool:
    return compare(a, b).is_greater()


def gte(a: Any, b: Any) -> bool:
    ordering = compare(a, b)
    return ordering.is_greater() or ordering.is_equal()


def lt(a: Any, b: Any) -> bool:
    return compare(a, b).is_less()


def lte(a: Any, b: Any) -> bool:
    ordering = compare(a, b)
    return ordering.is_less() or ordering.is_equal()


def eq(a: Any, b: Any) -> bool:
    return compare(a, b).is_equal()


def neq(a: Any, b: Any) -> bool:
    return not compare(a, b).is_equal()


def eq_tolerance(a: Any, b: Any, tolerance: float = 1e-7) -> bool:
    """
    Approximate equality.

    Both values must be finite, non-NaN and same-signed, with layers at most
    one apart. On the same layer every operator present on either side has
    to agree within the relative tolerance. One layer apart, the higher value
    must be a single term whose base matches the lower value's top operator.
    """
    a, b = _canonical(a), _canonical(b)
    if a.is_nan() or b.is_nan() or not a.is_finite() or not b.is_finite():
        return False
    if a.sign != b.sign or abs(a.layer - b.layer) > 1:
        return False

    if a.layer == b.layer:
        operators = {t.operator for t in a.terms} | {t.operator for t in b.terms}
        return all(
            _close(a.get_operator(op), b.get_operator(op), tolerance)
            for op in operators
        )

    higher, lower = (a, b) if a.layer > b.layer else (b, a)
    if len(higher.terms) != 1:
        return False
    return _close(higher.leading, lower.terms[-1].operator, tolerance)


def _close(x: float, y: float, tolerance: float) -> bool:
    return abs(x - y) <= tolerance * max(abs(x), abs(y))


def _canonical(value: Any) -> CanonicalNumber:
    if isinstance(value, CanonicalNumber):
        return value
    return require_canonical(value)
