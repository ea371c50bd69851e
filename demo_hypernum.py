#!/usr/bin/env python3
"""
Complete Pipeline Demo: text → canonical form → comparison → serialization

Shows the full workflow:
1. Parse tower and hyper-E text
2. Inspect the normalized terms
3. Compare values
4. Serialize as JSON, YAML and tower text
"""

import logging

from hypernum.comparator import compare, eq_tolerance
from hypernum.config import Configuration, DebugLevel, SerializationMode, configure
from hypernum.constants import TETRATED_MAX_SAFE_INTEGER
from hypernum.constructors import from_int, from_number
from hypernum.hyper_e import format_hyper_e, from_hyper_e
from hypernum.serialization import number_to_yaml, parse, serialize
from hypernum.tower_parser import from_string


SAMPLES = [
    "12345",
    "1e1000",
    "ee10",
    "10^^5",
    "(10^)^5 10",
    "-1e-5",
    "J^3 1e100",
]


def main():
    logging.basicConfig(format="%(name)s: %(message)s")
    configure(Configuration(debug_level=DebugLevel.INFO))

    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: text → canonical → compare → serialize")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Parse text
    # =========================================================================
    print("\n1. PARSING TEXT...")
    values = {}
    for text in SAMPLES:
        values[text] = from_string(text)
        print(f"   ✓ {text!r:16} -> {values[text]}")

    hyper = from_hyper_e("E10#2")
    print(f"   ✓ 'E10#2' (hyper-E) -> {hyper}")

    # =========================================================================
    # STEP 2: Canonical terms
    # =========================================================================
    print("\n2. CANONICAL TERMS...")
    for text, x in values.items():
        terms = ", ".join(f"({t.operator}, {t.base:g})" for t in x.terms)
        print(f"   {text!r:16} sign={x.sign.value:+d} layer={x.layer} terms=[{terms}]")

    print(f"   from_number(3.14)    -> {from_number(3.14)}")
    print(f"   from_int(7 * 10**400) -> {from_int(7 * 10 ** 400)}")

    # =========================================================================
    # STEP 3: Comparison
    # =========================================================================
    print("\n3. COMPARING...")
    ordered = sorted(values.values())
    print("   ascending: " + ", ".join(str(x) for x in ordered))
    print(f"   E10#2 vs ee10: {compare(hyper, 'ee10').name}")
    print(f"   10^^9007199254740991 > 1e1000: {TETRATED_MAX_SAFE_INTEGER > values['1e1000']}")
    print(f"   1e1000 ~ 1e1000: {eq_tolerance('1e1000', values['1e1000'])}")

    # =========================================================================
    # STEP 4: Serialization
    # =========================================================================
    print("\n4. SERIALIZING...")
    x = values["1e1000"]
    structured = serialize(x)
    text = serialize(x, Configuration(serialization_mode=SerializationMode.TEXT))
    print(f"   JSON:    {structured}")
    print(f"   text:    {text}")
    print(f"   hyper-E: {format_hyper_e(x)}")
    print("   YAML:")
    for line in number_to_yaml(x).splitlines():
        print(f"      {line}")
    print(f"   ✓ round trip: {parse(structured) == x and parse(text) == x}")

    print("\n" + "=" * 80)
    print("✅ PIPELINE COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
