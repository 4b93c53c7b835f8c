"""
Extraction of structured quantities from free-text ingredient descriptions.

.. autofunction:: parse_quantity

Grammar
=======

An ingredient's text is parsed, from left to right, as follows::

    [prefix] amount [("-" | "–") amount] [unit] [secondary] item

Where:

* ``prefix`` is one of :py:data:`PREFIXES` (e.g. "Juice of ").
* ``amount`` is parsed by :py:func:`recipe_parser.number_parser.parse_amount`.
* ``unit`` is parsed by :py:func:`recipe_parser.number_parser.parse_unit`.
* ``secondary`` is a bracketed amount and optional unit, optionally prefixed
  with "about", e.g. "(400 ml)" or "(about 150 g)".
* ``item`` is all remaining text.

If the secondary quantity does not immediately follow the unit, the first
"(about ...)" in the item text is used instead, e.g. "1 medium potato (about
150 g), peeled".

Text which does not start with an amount (after any prefix) has no quantity.
"""

from typing import Optional, Tuple, NamedTuple

from recipe_parser.recipe import ParsedQuantity

from recipe_parser.number_parser import skip_whitespace, parse_amount, parse_unit


__all__ = [
    "PREFIXES",
    "SecondaryQuantity",
    "parse_quantity",
]


PREFIXES: Tuple[str, ...] = ("Juice of ", "Zest of ")
"""Labels which may precede an amount. Matched case-insensitively."""

RANGE_SEPARATORS = "-–"

ESTIMATE_PREFIX = "about "


class SecondaryQuantity(NamedTuple):
    amount: float
    unit: Optional[str]
    prefix: Optional[str]


def parse_prefix(text: str) -> Tuple[Optional[str], int]:
    """
    Match a leading prefix phrase, returning the phrase (in its original case
    and without trailing space) and the position following it.
    """
    for phrase in PREFIXES:
        candidate = text[: len(phrase)]
        if candidate == phrase or candidate.lower() == phrase.lower():
            return (candidate.rstrip(), len(phrase))
    return (None, 0)


def parse_range_end(
    text: str, pos: int, minimum: float
) -> Optional[Tuple[float, int]]:
    """
    Parse the "-4" in "3-4", if present. Ranges whose upper bound is below
    minimum (e.g. "4-3") are not consumed.
    """
    if pos < len(text) and text[pos] in RANGE_SEPARATORS:
        range_end = parse_amount(text, pos + 1)
        if range_end is not None and range_end[0] >= minimum:
            return range_end
    return None


def parse_parenthetical(
    text: str, pos: int = 0
) -> Optional[Tuple[SecondaryQuantity, int]]:
    """
    Parse a bracketed secondary quantity such as "(400 ml)", "(1-3/4 cups)"
    or "(about 150 g)" at the given position.

    Returns None unless the brackets contain exactly an amount and an
    optional unit.
    """
    pos = skip_whitespace(text, pos)
    if not text.startswith("(", pos):
        return None
    close = text.find(")", pos)
    if close == -1:
        return None

    inner = text[pos + 1 : close].strip()
    prefix: Optional[str] = None
    if inner.startswith(ESTIMATE_PREFIX):
        prefix = ESTIMATE_PREFIX.strip()
        inner = inner[len(ESTIMATE_PREFIX) :].strip()

    amount = parse_amount(inner)
    if amount is None:
        return None
    value, inner_pos = amount

    unit, inner_pos = parse_unit(inner, inner_pos)
    if inner[inner_pos:].strip():
        return None

    return (SecondaryQuantity(value, unit, prefix), close + 1)


def extract_embedded_estimate(item: str) -> Tuple[Optional[SecondaryQuantity], str]:
    """
    Find and remove an "(about N unit)" secondary quantity from within an
    item's text.

    Returns
    =======
    (secondary, item)
        The secondary quantity (or None if not found) and the item text with
        the quantity removed.
    """
    start = item.find("(" + ESTIMATE_PREFIX)
    if start == -1:
        return (None, item)
    close = item.find(")", start)
    if close == -1:
        return (None, item)

    parsed = parse_parenthetical(item[start : close + 1])
    if parsed is None:
        return (None, item)
    secondary, _ = parsed

    before = item[:start].rstrip()
    after = item[close + 1 :].lstrip()
    if after.startswith(","):
        item = before + after
    elif before and after:
        item = f"{before}, {after}"
    else:
        item = before + after

    return (secondary, item.strip())


def parse_quantity(text: str) -> Optional[ParsedQuantity]:
    """
    Parse the quantity at the start of an ingredient's text.

    Returns None if the text does not begin with an amount (e.g. "Salt to
    taste"), or if nothing but a quantity was given. This is not an error:
    such ingredients just can't be scaled.
    """
    text = text.strip()
    if not text:
        return None

    prefix, pos = parse_prefix(text)

    amount = parse_amount(text, pos)
    if amount is None:
        return None
    value, pos = amount

    amount_max: Optional[float] = None
    range_end = parse_range_end(text, pos, value)
    if range_end is not None:
        amount_max, pos = range_end

    unit, pos = parse_unit(text, pos)

    secondary: Optional[SecondaryQuantity] = None
    parenthetical = parse_parenthetical(text, pos)
    if parenthetical is not None:
        secondary, pos = parenthetical

    item = text[pos:].strip()
    if item.startswith(","):
        item = item[1:].strip()

    if secondary is None:
        secondary, item = extract_embedded_estimate(item)

    if not item:
        return None

    return ParsedQuantity(
        amount=value,
        amount_max=amount_max,
        unit=unit,
        item=item,
        secondary_amount=secondary.amount if secondary is not None else None,
        secondary_unit=secondary.unit if secondary is not None else None,
        secondary_prefix=secondary.prefix if secondary is not None else None,
        prefix=prefix,
    )
