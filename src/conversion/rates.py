"""Per-language unit vocabularies and conversion rates.

`amount_target = amount_source * rate`. Rates are exact fractions so reciprocal pairs (for example
inches -> yards = 1/36) carry no rounding error. Every direct pair is listed explicitly; lookups
never derive a rate from its reverse.
"""

from __future__ import annotations

from collections.abc import Mapping
from fractions import Fraction
from types import MappingProxyType


def _freeze(table: dict[str, dict[str, Fraction]]) -> Mapping[str, Mapping[str, Fraction]]:
    return MappingProxyType({unit: MappingProxyType(targets) for unit, targets in table.items()})


CONVERSION_RATES: Mapping[str, Mapping[str, Mapping[str, Fraction]]] = MappingProxyType(
    {
        "en": _freeze(
            {
                "yards": {"inches": Fraction(36), "feet": Fraction(3)},
                "inches": {"yards": Fraction(1, 36), "feet": Fraction(1, 12)},
                "feet": {"yards": Fraction(1, 3), "inches": Fraction(12)},
            }
        ),
        "es": _freeze(
            {
                "centímetros": {"metros": Fraction(1, 100), "kilómetros": Fraction(1, 100_000)},
                "metros": {"centímetros": Fraction(100), "kilómetros": Fraction(1, 1000)},
                "kilómetros": {"centímetros": Fraction(100_000), "metros": Fraction(1000)},
            }
        ),
    }
)


def lookup_rate(
        language: str,
        source_unit: str,
        target_unit: str,
        table: Mapping[str, Mapping[str, Mapping[str, Fraction]]] = CONVERSION_RATES,
) -> Fraction | None:
    """Return the rate for a (language, source, target) triple, or `None` if it is not listed."""

    return table.get(language, {}).get(source_unit, {}).get(target_unit)


def supported_units(
        language: str,
        table: Mapping[str, Mapping[str, Mapping[str, Fraction]]] = CONVERSION_RATES,
) -> frozenset[str]:
    """All units that appear as a source or target for `language`."""

    units: set[str] = set()
    for source, targets in table.get(language, {}).items():
        units.add(source)
        units.update(targets)
    return frozenset(units)
