"""
Recipe Parser has a deliberately small, fixed understanding of units and
numerals. No conversions between units are ever performed: units are only
recognised so that they can be separated from the amount and item text.

The complete list of units, in the order they are tried, is given by
:py:data:`UNITS`. The order matters since the first match wins (e.g. "cups"
must be tried before "cup").

.. autodata:: UNITS

.. autodata:: VULGAR_FRACTIONS

.. autodata:: METRIC_UNITS
"""

from typing import Tuple, Mapping


__all__ = [
    "UNITS",
    "VULGAR_FRACTIONS",
    "METRIC_UNITS",
    "UNIT_TERMINATORS",
]


UNITS: Tuple[str, ...] = (
    # Spoons and cups
    "tbsp",
    "tsp",
    "cups",
    "cup",
    # Countable things
    "cloves",
    "clove",
    "tins",
    "tin",
    "cans",
    "can",
    # Sizes
    "medium",
    "small",
    "large",
    # Metric
    "kg",
    "ml",
    "g",
    "l",
)
"""
The unit names recognised after an amount, in priority order.
"""


UNIT_TERMINATORS = ",("
"""
Characters (besides whitespace and the end of the text) which may immediately
follow a unit name. This prevents, for example, "g" matching the start of
"ginger".
"""


VULGAR_FRACTIONS: Mapping[str, float] = {
    "½": 0.5,
    "⅓": 1.0 / 3.0,
    "¼": 0.25,
    "¾": 0.75,
    "⅔": 2.0 / 3.0,
}
"""
The single-character fraction glyphs understood as numbers.
"""


METRIC_UNITS: Tuple[str, ...] = ("g", "kg", "ml", "l")
"""
Metric units which, in strict mode, must be separated from their amount by a
space (e.g. "500 g" rather than "500g").
"""
