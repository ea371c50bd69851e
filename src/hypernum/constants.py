"""
Named canonical numbers.

Built once at import under the default configuration. Since the normalizer
floors plain magnitudes, the fractional constants settle to their integer
part (PI is 3, LN2 is 0).
"""

import math

from hypernum.config import DEFAULT_CONFIGURATION
from hypernum.constructors import from_number
from hypernum.model import MAX_SAFE_INTEGER as _MAX_SAFE_INTEGER
from hypernum.tower_parser import from_string

ZERO = from_number(0, config=DEFAULT_CONFIGURATION)
ONE = from_number(1, config=DEFAULT_CONFIGURATION)

E = from_number(math.e, config=DEFAULT_CONFIGURATION)
LN2 = from_number(math.log(2), config=DEFAULT_CONFIGURATION)
LN10 = from_number(math.log(10), config=DEFAULT_CONFIGURATION)
LOG2E = from_number(math.log2(math.e), config=DEFAULT_CONFIGURATION)
LOG10E = from_number(math.log10(math.e), config=DEFAULT_CONFIGURATION)
PI = from_number(math.pi, config=DEFAULT_CONFIGURATION)
SQRT1_2 = from_number(math.sqrt(0.5), config=DEFAULT_CONFIGURATION)
SQRT2 = from_number(math.sqrt(2), config=DEFAULT_CONFIGURATION)

MAX_SAFE_INTEGER = from_number(_MAX_SAFE_INTEGER, config=DEFAULT_CONFIGURATION)
MIN_SAFE_INTEGER = from_number(-_MAX_SAFE_INTEGER, config=DEFAULT_CONFIGURATION)

NAN = from_number(math.nan, config=DEFAULT_CONFIGURATION)
NEGATIVE_INFINITY = from_number(-math.inf, config=DEFAULT_CONFIGURATION)
POSITIVE_INFINITY = from_number(math.inf, config=DEFAULT_CONFIGURATION)

E_MAX_SAFE_INTEGER = from_string(f"e{_MAX_SAFE_INTEGER}", config=DEFAULT_CONFIGURATION)
EE_MAX_SAFE_INTEGER = from_string(f"ee{_MAX_SAFE_INTEGER}", config=DEFAULT_CONFIGURATION)
TETRATED_MAX_SAFE_INTEGER = from_string(f"10^^{_MAX_SAFE_INTEGER}", config=DEFAULT_CONFIGURATION)
