"""
Small recursive-descent parsers for the numeric and unit parts of ingredient
text.

Each parser takes the text being parsed and a cursor position and, on
success, returns the parsed value along with the position immediately after
the consumed characters. Leading whitespace at the cursor is skipped.

.. autofunction:: parse_amount

.. autofunction:: parse_unit
"""

from typing import Optional, Tuple

from recipe_parser.units import UNITS, UNIT_TERMINATORS, VULGAR_FRACTIONS


__all__ = [
    "skip_whitespace",
    "parse_amount",
    "parse_unit",
]


DIGITS = "0123456789"


def skip_whitespace(text: str, pos: int) -> int:
    """Return the position of the first non-whitespace character at or after pos."""
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def digit_run_end(text: str, pos: int) -> int:
    """Return the end of the (possibly empty) run of ASCII digits at pos."""
    while pos < len(text) and text[pos] in DIGITS:
        pos += 1
    return pos


def parse_fraction_suffix(text: str, pos: int) -> Optional[Tuple[float, int]]:
    """
    Parse a ``/denominator`` suffix, returning the (non-zero) denominator.
    """
    if not text.startswith("/", pos):
        return None
    end = digit_run_end(text, pos + 1)
    if end == pos + 1:
        return None
    denominator = float(text[pos + 1 : end])
    if denominator <= 0:
        return None
    return (denominator, end)


def parse_dashed_fraction(text: str, pos: int) -> Optional[Tuple[float, int]]:
    """
    Parse the ``-numerator/denominator`` part of a mixed number such as
    "1-3/4", returning the value of the fraction.
    """
    if not text.startswith("-", pos):
        return None
    numerator_end = digit_run_end(text, pos + 1)
    if numerator_end == pos + 1:
        return None
    fraction = parse_fraction_suffix(text, numerator_end)
    if fraction is None:
        return None
    denominator, end = fraction
    return (float(text[pos + 1 : numerator_end]) / denominator, end)


def parse_amount(text: str, pos: int = 0) -> Optional[Tuple[float, int]]:
    """
    Parse an amount at the given position in a string. Returns None if no
    amount is present.

    The following forms are accepted:

    * A vulgar fraction glyph, e.g. "½".
    * An integer or decimal, e.g. "2" or "1.5".
    * A fraction, e.g. "1/2".
    * A mixed number using a glyph, e.g. "1½".
    * A mixed number using a dash, e.g. "1-3/4".

    Returns
    =======
    (value, end)
        The value of the amount and the position just after it.
    """
    pos = skip_whitespace(text, pos)
    if pos >= len(text):
        return None

    if text[pos] in VULGAR_FRACTIONS:
        return (VULGAR_FRACTIONS[text[pos]], pos + 1)

    if text[pos] not in DIGITS:
        return None

    end = pos
    seen_point = False
    while end < len(text):
        if text[end] in DIGITS:
            end += 1
        elif text[end] == "." and not seen_point:
            seen_point = True
            end += 1
        else:
            break
    value = float(text[pos:end])

    # "1/2"
    fraction = parse_fraction_suffix(text, end)
    if fraction is not None:
        denominator, fraction_end = fraction
        return (value / denominator, fraction_end)

    # "1½"
    if end < len(text) and text[end] in VULGAR_FRACTIONS:
        return (value + VULGAR_FRACTIONS[text[end]], end + 1)

    # "1-3/4"
    dashed_fraction = parse_dashed_fraction(text, end)
    if dashed_fraction is not None:
        fraction_value, fraction_end = dashed_fraction
        return (value + fraction_value, fraction_end)

    return (value, end)


def parse_unit(text: str, pos: int = 0) -> Tuple[Optional[str], int]:
    """
    Parse a unit name (from :py:data:`recipe_parser.units.UNITS`) at the given
    position.

    Returns
    =======
    (unit, end)
        The matched unit name and the position just after it. If no unit
        matches, unit is None and end is the position of the first
        non-whitespace character at or after pos.
    """
    pos = skip_whitespace(text, pos)
    for unit in UNITS:
        if text.startswith(unit, pos):
            end = pos + len(unit)
            if (
                end == len(text)
                or text[end].isspace()
                or text[end] in UNIT_TERMINATORS
            ):
                return (unit, end)
    return (None, pos)
