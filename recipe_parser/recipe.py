r"""
The :py:mod:`recipe_parser.recipe` module defines the data model produced by
compiling a recipe markdown file.


Overview
========

A recipe file consists of a YAML header (the *frontmatter*) followed by a
markdown body. The header is decoded into a :py:class:`Frontmatter` while the
body is used to populate the remaining fields of a :py:class:`Recipe`::

    ---
    id: garlic-bread
    name: Garlic bread
    ...
    ---

    # Ingredients

    ## Fresh
    - 3-4 cloves garlic, minced

    # Instructions

    1. Mix the {garlic} with the butter.

Each ingredient line becomes an :py:class:`Ingredient` which, when the text
starts with a recognisable amount, carries a :py:class:`ParsedQuantity`
describing the amount, unit and item. Ingredients which cannot be scaled (e.g.
"Salt to taste") simply have no quantity.

Ingredients are grouped into one of a fixed set of :py:class:`Category`
values. The order of the members of this enumeration is also the order in
which categories are listed in a :py:class:`Recipe`, regardless of the order
they appeared in the document.

All of the classes in this module are immutable.

API
===

.. autoclass:: Category
    :members:
    :undoc-members:

.. autoclass:: Difficulty
    :members:
    :undoc-members:

.. autoclass:: Frontmatter
    :members:

.. autoclass:: ParsedQuantity
    :members:

.. autoclass:: Ingredient
    :members:

.. autoclass:: Recipe
    :members:
"""

from typing import Optional, Tuple, Mapping, Iterator

from dataclasses import dataclass

from enum import Enum


__all__ = [
    "Category",
    "Difficulty",
    "Frontmatter",
    "ParsedQuantity",
    "Ingredient",
    "Recipe",
]


class Category(Enum):
    """
    Ingredient categories, listed in their canonical display order.
    """

    fresh = "Fresh"
    fridge = "Fridge"
    pantry = "Pantry"
    spices = "Spices"


class Difficulty(Enum):
    """Recipe difficulty ratings."""

    easy = "easy"
    medium = "medium"
    hard = "hard"


@dataclass(frozen=True)
class Frontmatter:
    """
    The metadata given in the header of a recipe file.
    """

    id: str
    """
    A unique identifier for the recipe (lowercase letters and dashes), e.g.
    ``thai-green-curry``.
    """

    name: str
    description: str

    servings: int
    """The number of servings the ingredient quantities are given for."""

    time: int
    """Total preparation and cooking time in minutes."""

    difficulty: Difficulty

    tags: Tuple[str, ...]

    date: str
    """The date the recipe was added, formatted as YYYY-MM-DD."""

    author: Optional[str] = None


@dataclass(frozen=True)
class ParsedQuantity:
    """
    A quantity extracted from the start of an ingredient's text.

    For example "1 tin (400 ml) coconut milk" becomes::

        ParsedQuantity(
            amount=1.0,
            unit="tin",
            item="coconut milk",
            secondary_amount=400.0,
            secondary_unit="ml",
        )
    """

    amount: float

    item: str
    """The remaining descriptive text, e.g. "garlic, minced"."""

    amount_max: Optional[float] = None
    """
    When a range was given (e.g. "3-4 cloves garlic"), the upper end of the
    range (with :py:attr:`amount` giving the lower end).
    """

    unit: Optional[str] = None

    secondary_amount: Optional[float] = None
    secondary_unit: Optional[str] = None
    secondary_prefix: Optional[str] = None
    """
    An auxiliary quantity given in brackets, e.g. "(400 ml)" or "(about 150
    g)". The prefix is "about" when the quantity is an estimate. These
    attributes are only set when :py:attr:`secondary_amount` is set.
    """

    prefix: Optional[str] = None
    """A leading label such as "Juice of"."""


@dataclass(frozen=True)
class Ingredient:
    """A single ingredient line."""

    id: int
    """
    A 1-based sequential number, unique within a recipe, assigned in document
    order across all categories.
    """

    text: str
    """The ingredient text (with any no-scale annotation removed)."""

    quantity: Optional[ParsedQuantity] = None

    no_scale: bool = False
    """
    True if the ingredient was explicitly annotated with ``<!-- no-scale -->``
    in which case no quantity is parsed.
    """


@dataclass(frozen=True)
class Recipe:
    """
    A complete recipe.
    """

    frontmatter: Frontmatter

    ingredients: Mapping[Category, Tuple[Ingredient, ...]]
    """
    The ingredients in each category which appeared in the document. Always
    iterates in :py:class:`Category` order.
    """

    steps: Tuple[str, ...]
    """The instruction steps, in order."""

    notes: Optional[str] = None
    serving_suggestions: Optional[str] = None
    """
    Free text sections. Multiple paragraphs are separated by blank lines.
    """

    @property
    def id(self) -> str:
        return self.frontmatter.id

    @property
    def date(self) -> str:
        return self.frontmatter.date

    def iter_ingredients(self) -> Iterator[Tuple[Category, Ingredient]]:
        """
        Iterate over all ingredients, in category order, along with the
        category they belong to.
        """
        for category, ingredients in self.ingredients.items():
            for ingredient in ingredients:
                yield (category, ingredient)
