"""
hypernum: layered hyperoperator big numbers.

Represents real numbers far past floating-point range as a sign, a layer
counter and a short tower of (operator, base) terms, kept in one canonical
form by the normalizer.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO arithmetic. It defines:
    - the canonical encoding and its normalizer
    - constructors and text parsers that always normalize
    - a total order over canonical numbers
    - JSON / YAML / text serialization

Everything else consumes CanonicalNumber unchanged.
"""

__version__ = "0.1.0"
