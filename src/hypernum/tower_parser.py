"""
Decimal / tower text parser (raw text -> canonical number).

Grammar (informal):
    number      := sign* body
    body        := 'NaN' | 'nan' | 'Infinity' | 'Inf' | 'inf'
                 | layerPrefix? towerTerm* tail
    layerPrefix := 'J'+ | 'J^' digits ' '
    towerTerm   := '10' ('^'+ | '{' digits '}')
                 | '(10' ('^'+ | '{' digits '}') ')^' digits ' '
    tail        := (decimal ('e'|'E') sign*)* decimal

Examples:
    "1e1000"          -> 10^1000
    "ee10"            -> 10^10^10
    "10^^5"           -> 10^10^10^10^10
    "(10^)^5 10"      -> 10^10^10^10^10^10
    "J^3 1e100"       -> layer 3

Syntax Notes:
    - An odd number of '-' in a sign run negates.
    - One arrow adds to the operator-1 count; two arrows promote the value
      into the operator-2 rung. Three or more arrows are not supported: such a
      tower term is dropped and parsing carries on.
    - The tail is evaluated right to left. Digit runs of 17 or more integer
      digits are estimated in log space instead of being parsed.
    - Text starting with '[' or '{' is first tried as the structured JSON form.
    - Malformed text gives NaN and a UserWarning; it never raises.
"""

import json
import logging
import math
import re
import warnings
from typing import List, Optional, Tuple

from hypernum.config import Configuration, resolve_configuration
from hypernum.constructors import StructureError, build, from_object
from hypernum.model import (
    MAX_E,
    MAX_SAFE_INTEGER,
    NEGATIVE,
    POSITIVE,
    CanonicalNumber,
    Term,
)


_logger = logging.getLogger(__name__)

TOWER_PATTERN = re.compile(
    r"^[-+]*(Infinity|Inf|inf|NaN|nan|"
    r"(J+|J\^\d+ )?"
    r"(10(\^+|\{[1-9]\d*\})|\(10(\^+|\{[1-9]\d*\})\)\^[1-9]\d* )*"
    r"((\d+(\.\d*)?|\d*\.\d+)?([Ee][-+]*))*"
    r"(0|\d+(\.\d*)?|\d*\.\d+))$",
    re.ASCII,
)

_TOWER_TERM = re.compile(
    r"10(?:(\^+)|\{([1-9]\d*)\})|\(10(?:(\^+)|\{([1-9]\d*)\})\)\^([1-9]\d*) ",
    re.ASCII,
)

_LAYER_PREFIX = re.compile(r"J\^(\d+) |J+", re.ASCII)

NAN_LITERALS = ("NaN", "nan")
INFINITY_LITERALS = ("Infinity", "Inf", "inf")

LONG_STRING_MIN_LENGTH = 17


def from_string(text: str, config: Optional[Configuration] = None) -> CanonicalNumber:
    """
    Parse decimal / tower text into a canonical number.

    Args:
        text: Text in the grammar above, or a JSON structured form

    Returns:
        CanonicalNumber (NaN if the text is malformed)
    """
    cfg = resolve_configuration(config)

    if text.startswith(("[", "{")):
        try:
            return from_object(json.loads(text), config=cfg)
        except (ValueError, StructureError) as e:
            _logger.debug("Not a structured number, trying tower text: %s", e)

    if not TOWER_PATTERN.match(text):
        return malformed(text)

    negative, body = split_sign_run(text)
    sign = NEGATIVE if negative else POSITIVE

    if body in NAN_LITERALS:
        return build([Term(0, math.nan)], sign, 0, cfg)
    if body in INFINITY_LITERALS:
        return build([Term(0, math.inf)], sign, 0, cfg)

    terms, layer = _parse_body(body)
    return build([Term(operator, base) for operator, base in terms], sign, layer, cfg)


def malformed(text: str) -> CanonicalNumber:
    """The NaN sentinel, with a diagnostic."""
    warnings.warn(f"Invalid Arguments: Malformed input: {text!r}", UserWarning, stacklevel=3)
    return CanonicalNumber(sign=POSITIVE, terms=(Term(0, math.nan),), layer=0)


def split_sign_run(text: str) -> Tuple[bool, str]:
    """Strip leading '+'/'-'; return (negative?, rest)."""
    stripped = text.lstrip("+-")
    signs = text[:len(text) - len(stripped)]
    return signs.count("-") % 2 == 1, stripped


def _parse_body(body: str) -> Tuple[List[list], int]:
    """Parse layer prefix, tower terms and tail into provisional terms."""
    terms = [[0, 0.0]]
    layer, pos = _parse_layer_prefix(body, 0)

    while True:
        match = _TOWER_TERM.match(body, pos)
        if not match:
            break
        pos = match.end()

        carets, braces, paren_carets, paren_braces, repeat = match.groups()
        if carets or braces:
            arrows = len(carets) if carets else int(braces)
        else:
            arrows = len(paren_carets) if paren_carets else int(paren_braces)
        multiplicity = int(repeat) if repeat else 1

        if arrows == 1:
            _add_count(terms, 1, multiplicity)
        elif arrows == 2:
            _promote_to_tetration(terms, multiplicity)
        else:
            _logger.info("Dropping unsupported %d-arrow tower term in %r", arrows, body)

    value, height = _parse_tail(body[pos:], terms[0][1])
    terms[0][1] = value
    if height:
        _add_count(terms, 1, height)
    return terms, layer


def _parse_layer_prefix(body: str, pos: int) -> Tuple[int, int]:
    match = _LAYER_PREFIX.match(body, pos)
    if not match:
        return 0, pos
    if match.group(1) is not None:
        return int(match.group(1)), match.end()
    return match.end() - pos, match.end()


def _find(terms: List[list], operator: int) -> Optional[int]:
    for i, (op, _) in enumerate(terms):
        if op == operator:
            return i
    return None


def _add_count(terms: List[list], operator: int, count: float) -> None:
    i = _find(terms, operator)
    if i is not None:
        terms[i][1] += count
        return
    terms.append([operator, float(count)])
    terms.sort(key=lambda pair: pair[0])


def _promote_to_tetration(terms: List[list], multiplicity: int) -> None:
    """Apply 10^^multiplicity on top of what has been read so far."""
    i = _find(terms, 1)
    height = terms[i][1] if i is not None else 0
    base = terms[0][1]
    if base >= 1e10:
        height += 1
    if base >= 10:
        height += 1

    if i is not None:
        del terms[i]
    terms[0][1] = float(height)
    _add_count(terms, 2, multiplicity)


def _parse_tail(tail: str, start: float) -> Tuple[float, int]:
    """
    Evaluate an e-chain right to left.

    The accumulator is (value, height): the number is `value` with `height`
    extra powers of ten stacked on it. Each 'e' boundary exponentiates.

    Returns:
        (value, height)
    """
    value, height = start, 0

    for item in reversed(re.split(r"[Ee]", tail)):
        if value < MAX_E and height == 0:
            value = 10.0 ** value
        else:
            height += 1

        negative, digits = split_sign_run(item)
        point = digits.find(".")
        int_part = digits if point == -1 else digits[:point]
        long_int = int_part.lstrip("0")
        is_long = len(long_int) >= LONG_STRING_MIN_LENGTH

        if height == 0 and not is_long:
            if digits:
                value *= float(digits)
            if negative:
                value = -value
        elif negative:
            # 10 to a hugely negative power: the next step lands on 0.
            value, height = -math.inf, 0
            continue
        elif height == 0:
            value, height = _log10(value) + _log10_long(long_int), 1
        else:
            if is_long:
                d = _log10_long(long_int)
            elif digits:
                d = _log10(float(digits))
            else:
                d = 0.0
            if height == 1:
                value += d
            elif height == 2 and d > 0 and value < MAX_E + math.log10(d):
                value += math.log10(1 + 10.0 ** (math.log10(d) - value))

        if value < MAX_E and height:
            value = 10.0 ** value
            height -= 1
        elif value > MAX_SAFE_INTEGER:
            value = math.log10(value)
            height += 1

    return value, height


def _log10(x: float) -> float:
    if x <= 0:
        return -math.inf
    return math.log10(x)


def _log10_long(digits: str) -> float:
    return _log10(float(digits[:LONG_STRING_MIN_LENGTH])) + (len(digits) - LONG_STRING_MIN_LENGTH)


def format_tower(x: CanonicalNumber) -> str:
    """
    Render a canonical number in the tower grammar.

    Values whose top operator is 2 or less parse back to the same canonical
    form. Operators of 3 and up are written out but not read back.
    """
    if x.sign.is_negative():
        return "-" + format_tower(abs(x))
    if x.is_nan():
        return "NaN"
    if not x.is_finite():
        return "Infinity"

    parts = []
    if x.layer:
        parts.append("J" * x.layer if x.layer < 3 else f"J^{x.layer} ")

    for term in reversed(x.terms):
        if term.operator < 2:
            continue
        arrows = "^" * term.operator if term.operator < 5 else "{%d}" % term.operator
        if term.base > 1:
            parts.append(f"(10{arrows})^{_whole(term.base)} ")
        elif term.base == 1:
            parts.append(f"10{arrows}")

    magnitude = x.get_operator(0)
    exponents = int(x.get_operator(1))
    if not exponents:
        parts.append(_decimal(magnitude))
    elif exponents < 3:
        parts.append("e" * (exponents - 1) + "1e" + _decimal(magnitude))
    elif exponents < 8:
        parts.append("e" * exponents + _decimal(magnitude))
    else:
        parts.append(f"(10^)^{exponents} {_decimal(magnitude)}")
    return "".join(parts)


def _whole(x: float) -> str:
    return "%d" % x


def _decimal(x: float) -> str:
    if x == int(x):
        return _whole(x)
    return repr(x)
