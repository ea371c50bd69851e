"""
Normalizer: reduces raw terms + layer to the canonical form.

The work happens on a private buffer of [operator, base] pairs that only this
module ever sees. Passes repeat until one of them changes nothing:

    1. sanitize          (sentinels, flooring, zero pruning;
                          a negative operator is NaN; the operator-0
                          base keeps its fraction under an operator-1 count)
    2. sort & cap
    3. layer promotion   (top operator past the ceiling)
    4. layer demotion    (lone non-zero-operator term)
    5. anchor insertion  (operator 0, base 10)
    6. merge             (equal operators are summed)
    7. overflow carry    (operator 0 -> 1)
    8. underflow borrow  (operator 1 -> 0)
    9. fixed-point-at-one fix
   10. gap telescoping
   11. ripple carry      (operator k -> k+1)

NaN and infinity never raise; they collapse to a single sentinel term.
"""

import logging
import math
from typing import Iterable, List, Optional, Tuple

from hypernum.model import MAX_E, MAX_SAFE_INTEGER, Term


_logger = logging.getLogger(__name__)

RADIX = 10.0


def normalize(terms: Iterable[Term], layer: int, max_terms: int) -> Tuple[List[Term], int]:
    """
    Canonicalize a term sequence.

    Args:
        terms: Raw terms, in any order, possibly denormal
        layer: Raw layer counter
        max_terms: Cap on the number of terms kept

    Returns:
        (canonical terms, canonical layer)
    """
    buf = [[t.operator, t.base] for t in terms]
    if not buf:
        buf = [[0, 0.0]]

    if layer > MAX_SAFE_INTEGER:
        return _sentinel(math.inf)
    if math.isnan(layer):
        return _sentinel(math.nan)
    layer = int(math.floor(layer))

    passes = 0
    changed = True
    while changed:
        passes += 1
        if layer > MAX_SAFE_INTEGER:
            return _sentinel(math.inf)

        sentinel = _sanitize(buf)
        if sentinel is not None:
            return _sentinel(sentinel)

        changed = _sort_and_cap(buf, max_terms)
        if not buf:
            buf.append([0, 0.0])

        top = buf[-1][0]
        if top > MAX_SAFE_INTEGER:
            layer += 1
            buf[:] = [[0, _as_float(top)]]
            changed = True
        elif len(buf) == 1 and buf[0][0] != 0 and layer > 0:
            layer -= 1
            operator, base = buf[0]
            buf[:] = [[0, RADIX]]
            if base != 0:
                buf.append([operator - 1, float(round(base))])
            changed = True

        if len(buf) < max_terms and buf[0][0] != 0:
            buf.insert(0, [0, RADIX])
            changed = True

        changed = _merge(buf) or changed
        changed = _carry_up(buf) or changed
        changed = _borrow_down(buf) or changed
        changed = _unstick_one(buf) or changed
        changed = _telescope(buf) or changed
        changed = _ripple(buf) or changed

        _logger.debug("normalize pass %d: layer=%d terms=%s", passes, layer, buf)

    return [Term(operator, base) for operator, base in buf], layer


def _sentinel(base: float) -> Tuple[List[Term], int]:
    return [Term(0, base)], 0


def _sanitize(buf: List[list]) -> Optional[float]:
    """Clean the buffer in place; return a sentinel base if the value collapses."""
    kept = []
    for operator, base in buf:
        if operator is None:
            operator = 0
        operator, base = _as_float(operator), _as_float(base)
        if math.isnan(operator) or math.isnan(base) or operator < 0:
            return math.nan
        if math.isinf(operator) or math.isinf(base):
            return math.inf
        operator = int(math.floor(operator))
        if operator != 0:
            base = math.floor(base)
            if base == 0:
                continue
        kept.append([operator, float(base)])
    # Under an exponent count the operator-0 base is a log10 and keeps its fraction.
    if not any(operator == 1 for operator, _ in kept):
        for pair in kept:
            if pair[0] == 0 and pair[1] != 0:
                pair[1] = float(math.floor(pair[1]))
    buf[:] = kept
    return None


def _as_float(x) -> float:
    try:
        return float(x)
    except OverflowError:
        return math.inf


def _sort_and_cap(buf: List[list], max_terms: int) -> bool:
    buf.sort(key=lambda pair: pair[0])
    if len(buf) > max_terms:
        del buf[:len(buf) - max_terms]
        return True
    return False


def _merge(buf: List[list]) -> bool:
    changed = False
    i = 0
    while i < len(buf) - 1:
        if buf[i][0] == buf[i + 1][0]:
            buf[i][1] += buf[i + 1][1]
            del buf[i + 1]
            changed = True
        else:
            i += 1
    return changed


def _decrement(buf: List[list], i: int) -> None:
    if buf[i][1] > 1:
        buf[i][1] -= 1
    else:
        del buf[i]


def _has_exponent_count(buf: List[list]) -> bool:
    return len(buf) >= 2 and buf[0][0] == 0 and buf[1][0] == 1 and buf[1][1] != 0


def _carry_up(buf: List[list]) -> bool:
    changed = False
    while buf[0][0] == 0 and buf[0][1] > MAX_SAFE_INTEGER:
        if len(buf) >= 2 and buf[1][0] == 1:
            buf[1][1] += 1
        else:
            buf.insert(1, [1, 1.0])
        buf[0][1] = math.log10(buf[0][1])
        changed = True
    return changed


def _borrow_down(buf: List[list]) -> bool:
    changed = False
    while _has_exponent_count(buf) and buf[0][1] < MAX_E:
        buf[0][1] = RADIX ** buf[0][1]
        _decrement(buf, 1)
        changed = True
    return changed


def _unstick_one(buf: List[list]) -> bool:
    # 10^0 == 1 would otherwise never unwind.
    changed = False
    while _has_exponent_count(buf) and buf[0][1] == 1:
        _decrement(buf, 1)
        buf[0][1] = RADIX
        changed = True
    return changed


def _telescope(buf: List[list]) -> bool:
    if len(buf) < 2 or buf[0][0] != 0 or buf[1][0] == 1:
        return False
    source = 1
    if buf[0][1]:
        buf.insert(1, [buf[1][0] - 1, buf[0][1]])
        source = 2
    buf[0][1] = 1.0
    _decrement(buf, source)
    return True


def _ripple(buf: List[list]) -> bool:
    for i in range(1, len(buf)):
        operator, base = buf[i]
        if base > MAX_SAFE_INTEGER:
            if i + 1 < len(buf) and buf[i + 1][0] == operator + 1:
                buf[i + 1][1] += 1
            else:
                buf.insert(i + 1, [operator + 1, 1.0])
            buf[:] = [[0, base + 1]] + buf[i + 1:]
            return True
    return False
