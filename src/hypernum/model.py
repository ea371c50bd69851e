"""
Core Number Model Objects

Defines the fundamental data structures of the layered hyperoperator encoding.

These are pure data classes representing:
    - Signs (the signed unit +1 / -1)
    - Terms (one rung of the hyperoperator tower)
    - Canonical numbers (sign + ordered terms + layer counter)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable once built
        - Are produced by the constructors, which always normalize
        - Know nothing about text formats or JSON/YAML
        - Represent magnitude structure, not arithmetic
"""

import math
import numbers
from bisect import bisect_left
from dataclasses import dataclass, replace
from typing import Tuple


MAX_SAFE_INTEGER = 2 ** 53 - 1
MAX_E = math.log10(MAX_SAFE_INTEGER)


class InvalidArgumentError(ValueError):
    """Raised when a rung accessor is handed an index it cannot use."""
    pass


@dataclass(frozen=True)
class Sign:
    """
    The signed unit of a number.

    Any value passed in is reduced to +1 or -1 (negative values give -1,
    everything else gives +1), so Sign(0) is positive.
    """

    value: int = 1

    def __post_init__(self):
        object.__setattr__(self, "value", -1 if self.value < 0 else 1)

    def is_positive(self) -> bool:
        return self.value == 1

    def is_negative(self) -> bool:
        return self.value == -1

    def flip(self) -> "Sign":
        return Sign(-self.value)

    def __int__(self) -> int:
        return self.value

    def __lt__(self, other: "Sign") -> bool:
        return self.value < other.value


POSITIVE = Sign(1)
NEGATIVE = Sign(-1)


@dataclass(frozen=True)
class Term:
    """
    One rung of the hyperoperator tower.

    Properties:
        operator:
            Which hyperoperator level this rung counts.
            0 is the plain magnitude, 1 counts iterated exponentiations,
            2 counts tetrations, and so on.

        base:
            The magnitude (operator 0) or the repeat count (operator >= 1).
            NaN and infinity are allowed here; the normalizer collapses them
            into a single sentinel term.

    Example:
        10^10^1000 is Term(0, 1000) under Term(1, 2).
    """

    operator: int
    base: float


@dataclass(frozen=True, eq=False)
class CanonicalNumber:
    """
    A signed, layered sequence of tower terms.

    This is THE value type. Constructors in `hypernum.constructors`,
    `hypernum.tower_parser` and `hypernum.hyper_e` build instances and always
    run the normalizer first, so every instance they hand out is canonical.

    Properties:
        sign:
            Sign of the number

        terms:
            Terms sorted by strictly increasing operator.
            terms[0] is the operator-0 anchor whenever the term count is below
            the configured cap.

        layer:
            Meta-nesting counter. It goes up when the topmost operator index
            itself would exceed MAX_SAFE_INTEGER.

    INVARIANTS (after normalization):
        - Non-empty, strictly increasing operators
        - NaN / infinity live alone in terms[0]
        - Non-zero bases are whole numbers below MAX_SAFE_INTEGER
        - No zero base above terms[0]
    """

    sign: Sign = POSITIVE
    terms: Tuple[Term, ...] = (Term(0, 0.0),)
    layer: int = 0

    @property
    def leading(self) -> float:
        """The base of the least-significant term, where sentinels live."""
        return self.terms[0].base

    def is_nan(self) -> bool:
        return math.isnan(self.leading)

    def is_finite(self) -> bool:
        return math.isfinite(self.leading)

    def is_zero(self) -> bool:
        return len(self.terms) == 1 and self.terms[0].operator == 0 and self.leading == 0

    def clone(self) -> "CanonicalNumber":
        return replace(self, terms=tuple(Term(t.operator, t.base) for t in self.terms))

    def find_operator(self, i: float) -> Tuple[int, bool]:
        """
        Locate operator `i` among the terms.

        Returns:
            (index, True) if a term with that operator exists,
            otherwise (insertion index, False).

        Raises:
            InvalidArgumentError: If `i` is not a finite number
        """
        _check_index(i)
        operators = [t.operator for t in self.terms]
        index = bisect_left(operators, i)
        return index, index < len(operators) and operators[index] == i

    def get_operator(self, i: float) -> float:
        """
        Read the base stored at operator `i`.

        An absent operator 0 reads as 10 (the tower radix), any other absent
        operator reads as 0.
        """
        index, found = self.find_operator(i)
        if found:
            return self.terms[index].base
        return 10.0 if i == 0 else 0.0

    def with_operator(self, i: float, value: float, config=None) -> "CanonicalNumber":
        """Return a renormalized copy with operator `i` set to `value`."""
        from .constructors import from_terms

        index, found = self.find_operator(i)
        terms = list(self.terms)
        if found:
            terms[index] = Term(terms[index].operator, value)
        else:
            terms.insert(index, Term(i, value))
        return from_terms(terms, sign=self.sign, layer=self.layer, config=config)

    def __abs__(self) -> "CanonicalNumber":
        return replace(self, sign=POSITIVE)

    def __neg__(self) -> "CanonicalNumber":
        return replace(self, sign=self.sign.flip())

    def _ordering(self, other):
        from .coercion import to_canonical
        from .comparator import compare

        if not isinstance(other, CanonicalNumber):
            other = to_canonical(other)
            if other is None:
                return None
        return compare(self, other)

    def __eq__(self, other):
        ordering = self._ordering(other)
        if ordering is None:
            return NotImplemented
        return ordering.is_equal()

    def __ne__(self, other):
        ordering = self._ordering(other)
        if ordering is None:
            return NotImplemented
        return not ordering.is_equal()

    def __lt__(self, other):
        ordering = self._ordering(other)
        if ordering is None:
            return NotImplemented
        return ordering.is_less()

    def __le__(self, other):
        ordering = self._ordering(other)
        if ordering is None:
            return NotImplemented
        return ordering.is_less() or ordering.is_equal()

    def __gt__(self, other):
        ordering = self._ordering(other)
        if ordering is None:
            return NotImplemented
        return ordering.is_greater()

    def __ge__(self, other):
        ordering = self._ordering(other)
        if ordering is None:
            return NotImplemented
        return ordering.is_greater() or ordering.is_equal()

    def __hash__(self):
        # Zero compares equal whatever its sign.
        if self.is_zero():
            return hash(0)
        return hash((self.sign.value, self.terms, self.layer))

    def __str__(self):
        from .tower_parser import format_tower

        return format_tower(self)


def _check_index(i) -> None:
    if isinstance(i, bool) or not isinstance(i, numbers.Real) or not math.isfinite(i):
        raise InvalidArgumentError(f"Invalid Arguments: Index out of range: {i!r}")
