"""
Serialization helpers for canonical numbers.

Provides lossless JSON/YAML round-trip via an intermediate dict representation:

    {"terms": [{"operator": 0, "base": 1000.0}, {"operator": 1, "base": 1.0}],
     "sign": 1, "layer": 0}

NaN and infinite bases are written as the strings "NaN" / "Infinity" so the
output stays valid JSON. The constructors read those strings back.
"""
from __future__ import annotations

import json
import math
from typing import Any, Dict

import yaml

from hypernum.config import Configuration, SerializationMode, resolve_configuration
from hypernum.constructors import from_object
from hypernum.model import CanonicalNumber, Term
from hypernum.tower_parser import format_tower, from_string


def base_to_value(base: float) -> float | str:
    if math.isnan(base):
        return "NaN"
    if math.isinf(base):
        return "Infinity" if base > 0 else "-Infinity"
    return base


def term_to_dict(t: Term) -> Dict[str, Any]:
    return {"operator": t.operator, "base": base_to_value(t.base)}


def number_to_dict(x: CanonicalNumber) -> Dict[str, Any]:
    return {
        "terms": [term_to_dict(t) for t in x.terms],
        "sign": x.sign.value,
        "layer": x.layer,
    }


def number_from_dict(d: Dict[str, Any], config: Configuration | None = None) -> CanonicalNumber:
    return from_object(d, config=config)


def number_to_json(x: CanonicalNumber) -> str:
    return json.dumps(number_to_dict(x), sort_keys=True)


def number_from_json(s: str, config: Configuration | None = None) -> CanonicalNumber:
    d = json.loads(s)
    return number_from_dict(d, config=config)


def number_to_yaml(x: CanonicalNumber) -> str:
    return yaml.safe_dump(number_to_dict(x))


def number_from_yaml(s: str, config: Configuration | None = None) -> CanonicalNumber:
    d = yaml.safe_load(s)
    return number_from_dict(d, config=config)


def serialize(x: CanonicalNumber, config: Configuration | None = None) -> str:
    """JSON text in STRUCTURED mode, tower text in TEXT mode."""
    cfg = resolve_configuration(config)
    if cfg.serialization_mode is SerializationMode.TEXT:
        return format_tower(x)
    return number_to_json(x)


def parse(text: str, config: Configuration | None = None) -> CanonicalNumber:
    """Inverse of `serialize`; either mode is detected from the text itself."""
    return from_string(text, config=resolve_configuration(config))
