import pytest

from textwrap import dedent

from recipe_parser.recipe import (
    Category,
    Difficulty,
    Frontmatter,
    Ingredient,
    ParsedQuantity,
)

from recipe_parser.exceptions import (
    InvalidCategoryError,
    NoIngredientsError,
    NoStepsError,
)

from recipe_parser.extract import State, RecipeBodyExtractor, extract_recipe


FRONTMATTER = Frontmatter(
    id="test-recipe",
    name="Test recipe",
    description="A recipe used in tests.",
    servings=2,
    time=10,
    difficulty=Difficulty.easy,
    tags=("test",),
    date="2026-01-15",
)


def extract(source: str, first_line: int = 1):  # type: ignore
    return extract_recipe(FRONTMATTER, dedent(source).lstrip(), first_line)


def test_complete_recipe() -> None:
    recipe = extract(
        """
        # Notes

        A family favourite.

        Best made a day ahead.

        # Ingredients

        ## Pantry
        - 1 tin (400 ml) coconut milk

        ## Fresh
        - 1 onion, diced
        - Salt to taste <!-- no-scale -->

        # Instructions

        1. Fry the onion.
        2. Add the coconut milk.

        # Serving Suggestions

        With rice.
        """
    )

    assert recipe.frontmatter == FRONTMATTER
    assert recipe.notes == "A family favourite.\n\nBest made a day ahead."
    assert recipe.serving_suggestions == "With rice."
    assert recipe.steps == ("Fry the onion.", "Add the coconut milk.")

    # Categories reordered, ids follow document order
    assert list(recipe.ingredients) == [Category.fresh, Category.pantry]
    assert recipe.ingredients[Category.fresh] == (
        Ingredient(
            id=2,
            text="1 onion, diced",
            quantity=ParsedQuantity(amount=1.0, item="onion, diced"),
        ),
        Ingredient(id=3, text="Salt to taste", no_scale=True),
    )
    assert recipe.ingredients[Category.pantry] == (
        Ingredient(
            id=1,
            text="1 tin (400 ml) coconut milk",
            quantity=ParsedQuantity(
                amount=1.0,
                unit="tin",
                item="coconut milk",
                secondary_amount=400.0,
                secondary_unit="ml",
            ),
        ),
    )


def test_ids_contiguous_across_categories() -> None:
    recipe = extract(
        """
        # Ingredients

        ## Spices
        - 1 tsp cumin

        ## Fridge
        - 2 eggs
        - 100 g butter

        ## Fresh
        - 1 lemon

        # Instructions

        1. Mix.
        """
    )
    assert list(recipe.ingredients) == [
        Category.fresh,
        Category.fridge,
        Category.spices,
    ]
    assert [(c, i.id) for c, i in recipe.iter_ingredients()] == [
        (Category.fresh, 4),
        (Category.fridge, 2),
        (Category.fridge, 3),
        (Category.spices, 1),
    ]


def test_no_scale_ingredient_has_no_quantity() -> None:
    recipe = extract(
        """
        # Ingredients

        ## Pantry
        - 2 cups stock <!-- no-scale -->

        # Instructions

        1. Boil.
        """
    )
    (ingredient,) = recipe.ingredients[Category.pantry]
    assert ingredient.text == "2 cups stock"
    assert ingredient.quantity is None
    assert ingredient.no_scale


def test_repeated_category_appends() -> None:
    recipe = extract(
        """
        # Ingredients

        ## Pantry
        - Rice

        ## Fresh
        - Basil

        ## Pantry
        - Stock

        # Instructions

        1. Cook.
        """
    )
    assert [i.text for i in recipe.ingredients[Category.pantry]] == [
        "Rice",
        "Stock",
    ]


def test_empty_category_kept() -> None:
    recipe = extract(
        """
        # Ingredients

        ## Pantry

        # Instructions

        1. Cook.
        """
    )
    assert recipe.ingredients == {Category.pantry: ()}


def test_ignored_content() -> None:
    recipe = extract(
        """
        Introductory text.

        - Not an ingredient

        # Ingredients

        Some text about ingredients.

        - Uncategorised

        ## Fresh
        - 1 onion

        # Method

        1. Not a step.

        # Instructions

        Some text about the instructions.

        1. Cook.

        ## Tips
        - Also a step.
        """
    )
    assert recipe.notes is None
    assert recipe.serving_suggestions is None
    assert [i.text for _, i in recipe.iter_ingredients()] == ["1 onion"]
    assert recipe.steps == ("Cook.", "Also a step.")


def test_formatting_stripped() -> None:
    recipe = extract(
        """
        # Ingredients

        ## Fresh
        - 1 *ripe* avocado
        - Salt &amp; pepper

        # Instructions

        1. Mash the `avocado`.
        2. Season
           generously.
        """
    )
    assert [i.text for _, i in recipe.iter_ingredients()] == [
        "1 ripe avocado",
        "Salt & pepper",
    ]
    assert recipe.steps == ("Mash the avocado.", "Season generously.")


def test_annotation_only_items_skipped() -> None:
    recipe = extract(
        """
        # Ingredients

        ## Fresh
        - 1 onion
        - <!-- no-scale -->
        - 1 lime

        # Instructions

        1. Cook.
        """
    )
    assert [(i.id, i.text) for _, i in recipe.iter_ingredients()] == [
        (1, "1 onion"),
        (2, "1 lime"),
    ]


def test_invalid_category() -> None:
    with pytest.raises(InvalidCategoryError) as exc_info:
        extract(
            """
            # Ingredients

            ## Vegetables
            - 1 onion

            # Instructions

            1. Cook.
            """,
            first_line=10,
        )
    assert exc_info.value.category == "Vegetables"
    assert exc_info.value.line == 12
    assert exc_info.value.column == 1
    assert exc_info.value.snippet == "## Vegetables"
    message = str(exc_info.value)
    assert "At line 12" in message
    assert "Invalid ingredient category: 'Vegetables'" in message
    assert "Valid categories: Fresh, Fridge, Pantry, Spices" in message


def test_categories_are_case_sensitive() -> None:
    with pytest.raises(InvalidCategoryError):
        extract(
            """
            # Ingredients

            ## fresh
            - 1 onion

            # Instructions

            1. Cook.
            """
        )


def test_level_two_headings_outside_ingredients_ignored() -> None:
    recipe = extract(
        """
        ## Vegetables

        # Notes

        ## Anything

        Text.

        # Ingredients

        ## Fresh
        - 1 onion

        # Instructions

        1. Cook.
        """
    )
    assert recipe.notes == "Text."


@pytest.mark.parametrize(
    "source",
    [
        "",
        "# Instructions\n\n1. Cook.\n",
        "# Ingredients\n\n- 1 onion\n\n# Instructions\n\n1. Cook.\n",
    ],
)
def test_no_ingredients(source: str) -> None:
    with pytest.raises(NoIngredientsError, match="at least one ingredient category"):
        extract_recipe(FRONTMATTER, source)


@pytest.mark.parametrize(
    "source",
    [
        "# Ingredients\n\n## Fresh\n- 1 onion\n",
        "# Ingredients\n\n## Fresh\n- 1 onion\n\n# Instructions\n\nJust cook.\n",
    ],
)
def test_no_steps(source: str) -> None:
    with pytest.raises(NoStepsError, match="at least one instruction step"):
        extract_recipe(FRONTMATTER, source)


def test_state_transitions() -> None:
    extractor = RecipeBodyExtractor("")
    assert extractor.state == State.no_section

    extractor.enter_heading(1, "Ingredients")
    assert extractor.state == State.ingredients

    extractor.enter_heading(2, "Fridge")
    assert extractor.state == State.ingredient_category
    assert extractor.category == Category.fridge

    extractor.enter_heading(2, "Fresh")
    assert extractor.state == State.ingredient_category
    assert extractor.category == Category.fresh

    extractor.enter_heading(1, "Ingredients")
    assert extractor.state == State.ingredients
    assert extractor.category is None

    extractor.enter_heading(1, "Instructions")
    assert extractor.state == State.instructions

    extractor.enter_heading(1, "Serving Suggestions")
    assert extractor.state == State.serving_suggestions

    extractor.enter_heading(1, "Notes")
    assert extractor.state == State.notes

    extractor.enter_heading(1, "Something else")
    assert extractor.state == State.no_section

    # Level three headings have no effect
    extractor.enter_heading(1, "Instructions")
    extractor.enter_heading(3, "Notes")
    assert extractor.state == State.instructions


def test_invalid_category_location_with_crlf() -> None:
    source = "# Ingredients\r\n\r\n## Fresh\r\n- 1 onion\r\n\r\n## Veg\r\n- 1 leek\r\n"
    with pytest.raises(InvalidCategoryError) as exc_info:
        extract_recipe(FRONTMATTER, source, first_line=3)
    assert exc_info.value.line == 8
    assert exc_info.value.column == 1
    assert exc_info.value.snippet == "## Veg"
    assert str(exc_info.value).startswith("At line 8 column 1:\n    ## Veg\n    ^\n")
