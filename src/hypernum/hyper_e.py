"""
Hyper-E notation (raw text -> canonical number, and back).

Grammar:
    sign* ( 'NaN' | 'Infinity' | 'Inf' | number | 'E' number ('#' number)* )

    "5"          -> 5
    "E100"       -> 10^100
    "E100#3"     -> 10^10^10^100
    "E10#1#2"    -> segment 2 counts tetrations (stored one lower)

Segment i becomes the count at operator i. Segments from index 2 on are
decremented by one, which lines the notation up with the tower encoding.
"""

import math
import re
from typing import Optional

from hypernum.config import Configuration, resolve_configuration
from hypernum.constructors import build
from hypernum.model import NEGATIVE, POSITIVE, CanonicalNumber, InvalidArgumentError, Term
from hypernum.tower_parser import INFINITY_LITERALS, NAN_LITERALS, malformed, split_sign_run


HYPER_E_PATTERN = re.compile(
    r"^[-+]*(0|[1-9]\d*(\.\d*)?|Infinity|Inf|inf|NaN|nan|E[1-9]\d*(\.\d*)?(#[1-9]\d*)*)$",
    re.ASCII,
)


def from_hyper_e(text: str, config: Optional[Configuration] = None) -> CanonicalNumber:
    """
    Parse hyper-E text.

    Returns:
        CanonicalNumber (NaN with a UserWarning if the text is malformed)
    """
    cfg = resolve_configuration(config)
    if not HYPER_E_PATTERN.match(text):
        return malformed(text)

    negative, body = split_sign_run(text)
    sign = NEGATIVE if negative else POSITIVE

    if body in NAN_LITERALS:
        terms = [Term(0, math.nan)]
    elif body in INFINITY_LITERALS:
        terms = [Term(0, math.inf)]
    elif not body.startswith("E"):
        terms = [Term(0, float(body))]
    elif "#" not in body:
        terms = [Term(0, float(body[1:])), Term(1, 1.0)]
    else:
        terms = [
            Term(i, float(segment) - 1 if i >= 2 else float(segment))
            for i, segment in enumerate(body[1:].split("#"))
        ]
    return build(terms, sign, 0, cfg)


def format_hyper_e(x: CanonicalNumber) -> str:
    """
    Render a layer-0 canonical number as hyper-E text.

    Every operator up to the top one gets a segment, so sparse towers with
    a very high top operator give very long text.

    Raises:
        InvalidArgumentError: If the number has a non-zero layer
    """
    if x.sign.is_negative():
        return "-" + format_hyper_e(abs(x))
    if x.is_nan():
        return "NaN"
    if not x.is_finite():
        return "Infinity"
    if x.layer:
        raise InvalidArgumentError(f"Invalid Arguments: hyper-E text has no layers (layer={x.layer})")

    if len(x.terms) == 1 and x.terms[0].operator == 0:
        return _segment(x.terms[0].base)

    top = x.terms[-1].operator
    segments = [x.get_operator(0), x.get_operator(1)]
    segments.extend(x.get_operator(i) + 1 for i in range(2, top + 1))
    return "E" + "#".join(_segment(s) for s in segments)


def _segment(x: float) -> str:
    if x == int(x):
        return "%d" % x
    return repr(x)
