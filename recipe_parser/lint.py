"""
A collection of (fairly basic) linting functions for sanity checking recipes
in strict mode.

The following function will lint a compiled :py:class:`Recipe`.

.. autofunction:: check

Linting problems are described by :py:class:`Lint` objects:

.. autoclass:: Lint
    :members:
    :undoc-members:

Different categories of lint are identified by members of the following
enumeration. Kinds listed in :py:data:`FATAL_LINT_KINDS` cause compilation to
fail in strict mode, all others are warnings.

.. autoclass:: LintKind
    :members:
    :undoc-members:

.. note::

    The check for unreferenced ingredients is a simple substring test: an
    ingredient counts as referenced if any ``{reference}`` used in the
    instructions appears anywhere within its text. As a result, for example,
    a reference to ``{oil}`` also marks "olive oil" as referenced even if a
    different oil was intended.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from dataclasses import dataclass

from enum import Enum, auto

from recipe_parser.recipe import Recipe

from recipe_parser.units import METRIC_UNITS, VULGAR_FRACTIONS

from recipe_parser.number_parser import DIGITS


class LintKind(Enum):
    """Kinds of lint."""

    empty_ingredient = auto()
    unit_spacing = auto()
    vulgar_fraction = auto()
    empty_step = auto()
    unscalable_quantity = auto()
    unreferenced_ingredient = auto()


FATAL_LINT_KINDS = frozenset(
    [
        LintKind.empty_ingredient,
        LintKind.unit_spacing,
        LintKind.vulgar_fraction,
        LintKind.empty_step,
    ]
)


@dataclass(frozen=True)
class Lint:
    """
    A description a piece of lint found in a recipe.
    """

    kind: LintKind
    description: str

    @property
    def fatal(self) -> bool:
        return self.kind in FATAL_LINT_KINDS


def find_unit_spacing_problem(text: str) -> Optional[Tuple[str, str]]:
    """
    Find an amount immediately followed by a metric unit, e.g. "500g".

    Returns
    =======
    (problem, suggestion)
        The offending word (e.g. "500g") and a suggested replacement (e.g.
        "500 g"), or None if no problem was found.
    """
    for word in text.split():
        # Ignore trailing punctuation (e.g. "500g," or "500g)")
        cleaned = word
        while cleaned and not cleaned[-1].isalnum():
            cleaned = cleaned[:-1]

        for unit in METRIC_UNITS:
            if cleaned.endswith(unit) and len(cleaned) > len(unit):
                number = cleaned[: -len(unit)]
                if number[-1] in DIGITS and all(c in DIGITS + "." for c in number):
                    return (cleaned, f"{number} {unit}")
    return None


def check_ingredient_formatting(recipe: Recipe) -> Iterator[Lint]:
    """
    Check for empty ingredients, amounts not separated from metric units by a
    space and vulgar fraction glyphs (e.g. "½" rather than "1/2").
    """
    for category, ingredient in recipe.iter_ingredients():
        text = ingredient.text
        if not text.strip():
            yield Lint(
                kind=LintKind.empty_ingredient,
                description=f"Empty ingredient found in category '{category.value}'",
            )
            continue

        spacing_problem = find_unit_spacing_problem(text)
        if spacing_problem is not None:
            problem, suggestion = spacing_problem
            yield Lint(
                kind=LintKind.unit_spacing,
                description=(
                    f"Improper unit spacing in '{text}' "
                    f"(category '{category.value}'): "
                    f"'{problem}' should be '{suggestion}'. "
                    "There must be a space between the number and unit."
                ),
            )

        for char in text:
            if char in VULGAR_FRACTIONS:
                yield Lint(
                    kind=LintKind.vulgar_fraction,
                    description=(
                        f"Unicode fraction '{char}' in '{text}' "
                        f"(category '{category.value}'). "
                        "Use text fractions instead (e.g., 1/2 not ½)."
                    ),
                )
                break


def check_steps(recipe: Recipe) -> Iterator[Lint]:
    """Check for empty instruction steps."""
    for number, step in enumerate(recipe.steps, 1):
        if not step.strip():
            yield Lint(
                kind=LintKind.empty_step,
                description=f"Empty instruction step found at position {number}",
            )


def check_for_unscalable_quantities(recipe: Recipe) -> Iterator[Lint]:
    """
    Check for ingredients which look like they start with an amount but for
    which no quantity could be parsed. For example "500 g" (where the item
    being measured has been left out).

    Ingredients explicitly annotated with ``<!-- no-scale -->`` are ignored.
    """
    for category, ingredient in recipe.iter_ingredients():
        if ingredient.no_scale or ingredient.quantity is not None:
            continue
        first_char = ingredient.text[:1]
        if first_char and (first_char in DIGITS or first_char in VULGAR_FRACTIONS):
            yield Lint(
                kind=LintKind.unscalable_quantity,
                description=(
                    f"Ingredient '{ingredient.text}' "
                    f"(category '{category.value}') starts with a number but "
                    "could not be parsed for scaling. "
                    "Add <!-- no-scale --> to suppress."
                ),
            )


def extract_references(steps_text: str) -> List[str]:
    """
    Extract the (non-empty) contents of all ``{reference}`` substrings.
    """
    references = []
    pos = 0
    while True:
        start = steps_text.find("{", pos)
        if start == -1:
            break
        end = steps_text.find("}", start + 1)
        if end == -1:
            break
        if end > start + 1:
            references.append(steps_text[start + 1 : end])
        pos = end + 1
    return references


def check_for_unreferenced_ingredients(recipe: Recipe) -> Iterator[Lint]:
    """
    Check for ingredients which are never referred to using a
    ``{reference}`` in an instruction step. For example, in the following
    recipe the garlic is never referenced::

        # Ingredients

        ## Fresh
        - 1 onion
        - 2 cloves garlic

        # Instructions

        1. Fry the {onion}.

    References are case insensitive and match any ingredient whose text
    contains the reference.
    """
    references = extract_references(" ".join(recipe.steps).lower())
    for category, ingredient in recipe.iter_ingredients():
        text = ingredient.text.lower()
        if not any(reference in text for reference in references):
            yield Lint(
                kind=LintKind.unreferenced_ingredient,
                description=(
                    f"Ingredient '{ingredient.text}' ({category.value}) is not "
                    "linked in any instruction step. Consider adding an "
                    "{ingredient} reference."
                ),
            )


def check(recipe: Recipe) -> Iterable[Lint]:
    """
    Run all linting checks against a given recipe.
    """
    yield from check_for_unscalable_quantities(recipe)
    yield from check_ingredient_formatting(recipe)
    yield from check_steps(recipe)
    yield from check_for_unreferenced_ingredients(recipe)
