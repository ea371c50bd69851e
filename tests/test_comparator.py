"""
Tests for the comparator.

The length tie-break (equal top terms, different term counts) is pinned with
literal fixtures: the longer value wins only when its top term has operator
>= 1 or base > 10.
"""

import pytest

from hypernum.coercion import EmptyValueError
from hypernum.comparator import Ordering, compare, eq, eq_tolerance, gt, gte, lt, lte, neq
from hypernum.config import Configuration
from hypernum.constants import NAN, NEGATIVE_INFINITY, POSITIVE_INFINITY, ZERO
from hypernum.constructors import from_number, from_terms
from hypernum.model import CanonicalNumber, Term
from hypernum.tower_parser import from_string


class TestOrdering:
    """Test the Ordering enum."""

    def test_predicates(self):
        """Each member answers its own predicate."""
        assert Ordering.LESS.is_less()
        assert Ordering.EQUAL.is_equal()
        assert Ordering.GREATER.is_greater()
        assert not Ordering.UNORDERED.is_equal()

    def test_flip(self):
        """flip() swaps LESS and GREATER only."""
        assert Ordering.LESS.flip() is Ordering.GREATER
        assert Ordering.EQUAL.flip() is Ordering.EQUAL
        assert Ordering.UNORDERED.flip() is Ordering.UNORDERED


class TestCompare:
    """Test compare() step by step."""

    def test_nan_is_unordered(self):
        """NaN is unordered against everything, itself included."""
        assert compare(NAN, NAN) is Ordering.UNORDERED
        assert compare(NAN, from_number(5)) is Ordering.UNORDERED
        assert compare(POSITIVE_INFINITY, NAN) is Ordering.UNORDERED

    def test_infinity_dominates(self):
        """+Infinity beats any finite value, -Infinity loses to it."""
        big = from_string("J^100 10^^10")
        assert compare(POSITIVE_INFINITY, big) is Ordering.GREATER
        assert compare(big, POSITIVE_INFINITY) is Ordering.LESS
        assert compare(NEGATIVE_INFINITY, -big) is Ordering.LESS
        assert compare(-big, NEGATIVE_INFINITY) is Ordering.GREATER

    def test_infinities(self):
        """Equal infinities are equal, opposite ones are ordered by sign."""
        assert compare(POSITIVE_INFINITY, POSITIVE_INFINITY) is Ordering.EQUAL
        assert compare(NEGATIVE_INFINITY, POSITIVE_INFINITY) is Ordering.LESS

    def test_signed_zeros_are_equal(self):
        """+0 and -0 are equal."""
        assert compare(ZERO, -ZERO) is Ordering.EQUAL

    def test_sign_decides(self):
        """Positive beats negative whatever the magnitudes."""
        assert compare(from_number(1), from_string("-1e1000")) is Ordering.GREATER
        assert compare(from_string("-1e1000"), from_number(1)) is Ordering.LESS

    def test_layer_decides(self):
        """A higher layer is bigger, or smaller when negative."""
        assert compare(from_string("J5"), from_string("10^^100")) is Ordering.GREATER
        assert compare(from_string("-J5"), from_string("-10^^100")) is Ordering.LESS

    def test_top_terms_decide(self):
        """Terms are compared from the most significant one down."""
        assert compare(from_string("1e1000"), from_string("1e999")) is Ordering.GREATER
        assert compare(from_string("ee10"), from_string("1e1000")) is Ordering.GREATER
        assert compare(from_number(3), from_number(4)) is Ordering.LESS

    def test_negative_magnitudes_reverse(self):
        """Among negatives the larger magnitude is smaller."""
        assert compare(from_number(-5), from_number(-3)) is Ordering.LESS

    def test_equal(self):
        """Identical canonical forms are equal."""
        assert compare(from_string("10^^5"), from_string("10^^5")) is Ordering.EQUAL

    def test_coerces_plain_values(self):
        """Plain numbers and text are coerced first."""
        assert compare(5, "1e3") is Ordering.LESS
        assert compare(from_number(5), 5) is Ordering.EQUAL

    def test_uncoercible_operand_raises(self):
        """Values without a canonical reading raise."""
        with pytest.raises(EmptyValueError):
            compare(from_number(5), object())


class TestLengthTieBreak:
    """Equal top terms with different term counts."""

    def test_longer_with_high_top_operator_is_greater(self):
        """Top term at operator >= 1: the longer value wins."""
        a = from_terms([Term(0, 20), Term(1, 3)])
        b = from_terms([Term(0, 20), Term(1, 3)], config=Configuration(max_terms=1))
        assert a.terms == (Term(0, 20.0), Term(1, 3.0))
        assert b.terms == (Term(1, 3.0),)
        assert compare(a, b) is Ordering.GREATER
        assert compare(b, a) is Ordering.LESS

    def test_longer_with_small_top_base_is_less(self):
        """
        Top term at operator 0 with base <= 10: the longer value loses.

        Both sides are hand-built denormal shapes. A canonical value with more
        than one term always has a top operator >= 1, so no constructor can
        reach this branch.
        """
        a = CanonicalNumber(terms=(Term(0, 3.0), Term(0, 7.0)))
        b = CanonicalNumber(terms=(Term(0, 7.0),))
        assert compare(a, b) is Ordering.LESS
        assert compare(b, a) is Ordering.GREATER

    def test_longer_with_large_top_base_is_greater(self):
        """Top term at operator 0 with base > 10: the longer value wins. Hand-built, as above."""
        a = CanonicalNumber(terms=(Term(0, 3.0), Term(0, 70.0)))
        b = CanonicalNumber(terms=(Term(0, 70.0),))
        assert compare(a, b) is Ordering.GREATER

    def test_tie_break_flips_for_negatives(self):
        """The tie-break result is sign-adjusted."""
        a = from_terms([Term(0, 20), Term(1, 3)], sign=-1)
        b = from_terms([Term(0, 20), Term(1, 3)], sign=-1, config=Configuration(max_terms=1))
        assert compare(a, b) is Ordering.LESS


class TestPredicates:
    """Test gt / gte / lt / lte / eq / neq."""

    def test_ordered(self):
        """Predicates follow compare()."""
        a, b = from_number(3), from_string("1e1000")
        assert lt(a, b) and lte(a, b) and neq(a, b)
        assert gt(b, a) and gte(b, a)
        assert eq(a, from_number(3)) and gte(a, 3) and lte(a, 3)

    def test_unordered(self):
        """NaN fails every predicate except neq."""
        assert not any(p(NAN, NAN) for p in (gt, gte, lt, lte, eq))
        assert neq(NAN, NAN)

    @pytest.mark.parametrize("n", [0.0, 1.0, 12345.0, 1e15, 1e100, 1e300])
    def test_reflexive(self, n):
        """Every finite value equals itself."""
        assert compare(from_number(n), from_number(n)) is Ordering.EQUAL

    @pytest.mark.parametrize("n", [1.0, 2.0, 100.0, 9007199254740991.0, 9007199254740992.0])
    def test_successor_is_greater(self, n):
        """from_number(n) > from_number(n - 1)."""
        assert gt(from_number(n), from_number(n - 1))

    def test_carry_boundary_keeps_order(self):
        """The first value past the ceiling is above the ceiling."""
        assert compare(from_number(2 ** 53), from_number(2 ** 53 - 1)) is Ordering.GREATER
        assert compare(from_string("9007199254740992"), from_number(2 ** 53 - 1)) is Ordering.GREATER

    def test_fractional_count_below_one_is_equal(self):
        """A count below 1 adds nothing to the value."""
        assert compare(from_terms([Term(0, 1e10), Term(1, 0.5)]), from_number(1e10)) is Ordering.EQUAL


class TestEqTolerance:
    """Test approximate equality."""

    def test_equal_values(self):
        """Identical values are close."""
        assert eq_tolerance(from_string("1e1000"), "1e1000")

    def test_relative_tolerance(self):
        """Bases within the relative tolerance match."""
        assert eq_tolerance(from_number(1e15), from_number(1e15 + 1))
        assert not eq_tolerance(from_number(1000), from_number(1001))
        assert eq_tolerance(from_number(1000), from_number(1001), tolerance=1e-2)

    def test_operator_on_one_side_only(self):
        """An operator present on one side only is compared against 0."""
        assert not eq_tolerance(from_number(1000), from_string("1e1000"))

    def test_differing_counts(self):
        """Different exponent counts are not close."""
        assert not eq_tolerance(from_string("1e1000"), from_string("ee1000"))

    def test_rejects_nan_infinite_and_mixed_signs(self):
        """NaN, infinities and mixed signs are never close."""
        assert not eq_tolerance(NAN, NAN)
        assert not eq_tolerance(POSITIVE_INFINITY, POSITIVE_INFINITY)
        assert not eq_tolerance(from_number(5), from_number(-5))

    def test_layers_too_far_apart(self):
        """Layers more than one apart are never close."""
        assert not eq_tolerance(from_string("J^3 5"), from_string("J5"))

    def test_adjacent_layers(self):
        """One layer up, the single base must match the top operator below."""
        higher = from_terms([Term(0, 5)], layer=1)
        lower = from_terms([Term(0, 1e10), Term(1, 1), Term(5, 1)])
        assert eq_tolerance(higher, lower)
        assert eq_tolerance(lower, higher)
        assert not eq_tolerance(from_terms([Term(0, 6)], layer=1), lower)

    def test_adjacent_layers_need_single_term(self):
        """A multi-term higher value is never close to the layer below."""
        higher = from_string("J1e1000")
        lower = from_terms([Term(0, 1e10), Term(1, 1), Term(1000, 1)])
        assert not eq_tolerance(higher, lower)
