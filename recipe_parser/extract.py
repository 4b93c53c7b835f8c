"""
Extraction of the structured parts of a recipe from its markdown body.

The body is expected to be laid out using level-1 headings to introduce
sections, with ingredients further divided into categories by level-2
headings::

    # Notes

    Free text, any number of paragraphs.

    # Ingredients

    ## Fresh
    - 1 onion, diced
    - Salt to taste <!-- no-scale -->

    ## Pantry
    - 1 tin (400 ml) coconut milk

    # Instructions

    1. Fry the {onion}.
    2. Add the {coconut milk}.

    # Serving Suggestions

    More free text.

The body's :py:mod:`event stream <recipe_parser.markdown>` drives a small
state machine (see :py:class:`State`). Level-1 headings select the current
section and, within the ingredients section, level-2 headings select the
current category. What happens when a list item or paragraph ends depends
only on the current state (see :py:data:`CLOSE_ACTIONS`).

.. autofunction:: extract_recipe
"""

from typing import Callable, List, Mapping, MutableMapping, Optional, Tuple

from enum import Enum, auto

from collections import OrderedDict

from peggie.error_message_generation import offset_to_line_and_column, extract_line

from recipe_parser.recipe import Category, Frontmatter, Ingredient, Recipe

from recipe_parser.quantity_parser import parse_quantity

from recipe_parser.markdown import Event, EventType, Tag, iter_events

from recipe_parser.exceptions import (
    normalise_newlines,
    InvalidCategoryError,
    NoIngredientsError,
    NoStepsError,
)


__all__ = [
    "NO_SCALE_MARKER",
    "State",
    "RecipeBodyExtractor",
    "extract_recipe",
]


NO_SCALE_MARKER = "<!-- no-scale -->"
"""
Annotation which may be added to an ingredient to prevent its quantity being
parsed.
"""


class State(Enum):
    no_section = auto()
    notes = auto()
    ingredients = auto()
    ingredient_category = auto()
    instructions = auto()
    serving_suggestions = auto()


SECTION_TRANSITIONS: Mapping[str, State] = {
    "Notes": State.notes,
    "Ingredients": State.ingredients,
    "Instructions": State.instructions,
    "Serving Suggestions": State.serving_suggestions,
}
"""
The state entered on encountering a level-1 heading with a given text. Any
other heading enters :py:attr:`State.no_section`.
"""

CATEGORY_TRANSITIONS: Mapping[State, State] = {
    State.ingredients: State.ingredient_category,
    State.ingredient_category: State.ingredient_category,
}
"""
The states in which a level-2 heading names an ingredient category.
"""

BUFFERED_TAGS = frozenset([Tag.heading, Tag.paragraph, Tag.list, Tag.item])
"""Containers which start with an empty text buffer."""


class RecipeBodyExtractor:
    """
    Accumulates the ingredients, steps and free-text sections of a recipe as
    events are fed in using :py:meth:`feed`.
    """

    markdown_source: str
    first_line: int
    """
    The markdown source and the line number in the recipe file where it
    begins (used in error messages).
    """

    state: State
    category: Optional[Category]

    text: List[str]
    """Text accumulated within the current container."""

    no_scale: bool
    """Set when the current list item contains a no-scale HTML annotation."""

    list_depth: int

    heading_pos: Optional[int]
    """Source offset of the most recently started heading, if known."""

    ingredients: MutableMapping[Category, Optional[List[Ingredient]]]
    """
    Ingredients by category, pre-populated in display order. Categories are
    None until they appear in the document.
    """

    steps: List[str]
    notes: Optional[str]
    serving_suggestions: Optional[str]

    next_ingredient_id: int

    def __init__(self, markdown_source: str, first_line: int = 1) -> None:
        self.markdown_source = markdown_source
        self.first_line = first_line

        self.state = State.no_section
        self.category = None
        self.text = []
        self.no_scale = False
        self.list_depth = 0
        self.heading_pos = None

        self.ingredients = OrderedDict((category, None) for category in Category)
        self.steps = []
        self.notes = None
        self.serving_suggestions = None
        self.next_ingredient_id = 1

    def feed(self, event: Event) -> None:
        if event.type == EventType.start:
            self.start(event)
        elif event.type == EventType.end:
            self.end(event)
        elif event.type in (EventType.text, EventType.code):
            self.text.append(event.text)
        elif event.type in (EventType.soft_break, EventType.hard_break):
            self.text.append(" ")
        elif event.type == EventType.html:
            if (
                self.state == State.ingredient_category
                and self.list_depth > 0
                and "no-scale" in event.text
            ):
                self.no_scale = True

    def start(self, event: Event) -> None:
        if event.tag in BUFFERED_TAGS:
            self.text = []
        if event.tag == Tag.heading:
            self.heading_pos = event.pos
        elif event.tag == Tag.list:
            self.list_depth += 1
        elif event.tag == Tag.item:
            self.no_scale = False

    def end(self, event: Event) -> None:
        assert event.tag is not None
        text = "".join(self.text).strip()

        if event.tag == Tag.heading:
            if text:
                self.enter_heading(event.level, text)
            self.text = []
        elif event.tag == Tag.list:
            self.list_depth -= 1

        action = CLOSE_ACTIONS.get((self.state, event.tag))
        if action is not None:
            action(self, text)
            self.text = []
            self.no_scale = False

    def enter_heading(self, level: int, text: str) -> None:
        if level == 1:
            self.state = SECTION_TRANSITIONS.get(text, State.no_section)
            self.category = None
        elif level == 2 and self.state in CATEGORY_TRANSITIONS:
            self.category = self.parse_category(text)
            if self.ingredients[self.category] is None:
                self.ingredients[self.category] = []
            self.state = CATEGORY_TRANSITIONS[self.state]

    def parse_category(self, text: str) -> Category:
        try:
            return Category(text)
        except ValueError:
            if self.heading_pos is None:
                raise InvalidCategoryError(text)
            # Marko reports offsets into the newline-normalised source
            source = normalise_newlines(self.markdown_source)
            line, column = offset_to_line_and_column(source, self.heading_pos)
            snippet = extract_line(source, line)
            raise InvalidCategoryError(
                text, line + self.first_line - 1, column, snippet
            )

    def add_ingredient(self, text: str) -> None:
        text = text.replace(NO_SCALE_MARKER, "").strip()
        if not text:
            return

        assert self.category is not None
        ingredients = self.ingredients[self.category]
        assert ingredients is not None

        ingredients.append(
            Ingredient(
                id=self.next_ingredient_id,
                text=text,
                quantity=None if self.no_scale else parse_quantity(text),
                no_scale=self.no_scale,
            )
        )
        self.next_ingredient_id += 1

    def add_step(self, text: str) -> None:
        if text:
            self.steps.append(text)

    def add_notes(self, text: str) -> None:
        self.notes = join_paragraphs(self.notes, text)

    def add_serving_suggestions(self, text: str) -> None:
        self.serving_suggestions = join_paragraphs(self.serving_suggestions, text)

    def finish(self, frontmatter: Frontmatter) -> Recipe:
        """
        Check the recipe is complete and produce the final :py:class:`Recipe`.
        """
        ingredients = OrderedDict(
            (category, tuple(items))
            for category, items in self.ingredients.items()
            if items is not None
        )
        if not ingredients:
            raise NoIngredientsError(
                "Recipe must have at least one ingredient category\n"
                "  Add a '# Ingredients' section containing, e.g., a '## Pantry' "
                "heading followed by a list of ingredients."
            )
        if not self.steps:
            raise NoStepsError(
                "Recipe must have at least one instruction step\n"
                "  Add an '# Instructions' section containing a numbered list."
            )

        return Recipe(
            frontmatter=frontmatter,
            ingredients=ingredients,
            steps=tuple(self.steps),
            notes=self.notes,
            serving_suggestions=self.serving_suggestions,
        )


def join_paragraphs(existing: Optional[str], text: str) -> Optional[str]:
    if not text:
        return existing
    if existing is None:
        return text
    return f"{existing}\n\n{text}"


CLOSE_ACTIONS: Mapping[
    Tuple[State, Tag], Callable[[RecipeBodyExtractor, str], None]
] = {
    (State.ingredient_category, Tag.item): RecipeBodyExtractor.add_ingredient,
    (State.instructions, Tag.item): RecipeBodyExtractor.add_step,
    (State.notes, Tag.paragraph): RecipeBodyExtractor.add_notes,
    (State.serving_suggestions, Tag.paragraph): (
        RecipeBodyExtractor.add_serving_suggestions
    ),
}
"""
The action taken, given the current state, when a container ends. Actions are
passed the (stripped) text accumulated within the container.
"""


def extract_recipe(
    frontmatter: Frontmatter, markdown_source: str, first_line: int = 1
) -> Recipe:
    """
    Extract the ingredients, steps and free-text sections from a recipe's
    markdown body, producing a complete :py:class:`Recipe`.

    Throws :py:exc:`~recipe_parser.exceptions.InvalidCategoryError`,
    :py:exc:`~recipe_parser.exceptions.NoIngredientsError` or
    :py:exc:`~recipe_parser.exceptions.NoStepsError` if the body is
    malformed.
    """
    extractor = RecipeBodyExtractor(markdown_source, first_line)
    for event in iter_events(markdown_source):
        extractor.feed(event)
    return extractor.finish(frontmatter)
