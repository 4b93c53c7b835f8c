import pytest

from typing import Mapping, Optional, Sequence, Tuple

from recipe_parser.recipe import (
    Category,
    Difficulty,
    Frontmatter,
    Ingredient,
    Recipe,
)

from recipe_parser.quantity_parser import parse_quantity

from recipe_parser.lint import (
    LintKind,
    Lint,
    find_unit_spacing_problem,
    extract_references,
    check,
)


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


def make_recipe(
    ingredients: Mapping[Category, Sequence[str]],
    steps: Sequence[str],
    no_scale: Sequence[str] = (),
) -> Recipe:
    next_id = 1
    categories = {}
    for category, texts in ingredients.items():
        items = []
        for text in texts:
            items.append(
                Ingredient(
                    id=next_id,
                    text=text,
                    quantity=None if text in no_scale else parse_quantity(text),
                    no_scale=text in no_scale,
                )
            )
            next_id += 1
        categories[category] = tuple(items)
    return Recipe(FRONTMATTER, categories, tuple(steps))


@pytest.mark.parametrize(
    "text, exp",
    [
        # Problems
        ("500g flour", ("500g", "500 g")),
        ("1.5kg potatoes", ("1.5kg", "1.5 kg")),
        ("1kg potatoes", ("1kg", "1 kg")),
        ("250ml, warmed", ("250ml", "250 ml")),
        ("2l water", ("2l", "2 l")),
        # No problems
        ("500 g flour", None),
        ("2 tbsp oil", None),
        ("1 tin (400 ml) tomatoes", None),
        ("Salt to taste", None),
        ("3 eggs", None),
        ("5mg caffeine", None),
        ("7-8g yeast", None),
        ("1.g sugar", None),
        ("", None),
    ],
)
def test_find_unit_spacing_problem(
    text: str, exp: Optional[Tuple[str, str]]
) -> None:
    assert find_unit_spacing_problem(text) == exp


@pytest.mark.parametrize(
    "steps_text, exp",
    [
        ("", []),
        ("fry the onion.", []),
        ("fry the {onion}.", ["onion"]),
        ("add {garlic} and {olive oil}.", ["garlic", "olive oil"]),
        ("empty {} braces", []),
        ("unclosed {brace", []),
        ("{a} then {b", ["a"]),
    ],
)
def test_extract_references(steps_text: str, exp: Sequence[str]) -> None:
    assert extract_references(steps_text) == exp


def test_clean_recipe() -> None:
    recipe = make_recipe(
        {Category.fresh: ["1 onion", "2 cloves garlic"]},
        ["Fry the {onion} and {Garlic}."],
    )
    assert list(check(recipe)) == []


def test_unit_spacing() -> None:
    recipe = make_recipe({Category.pantry: ["500g flour"]}, ["Sift the {flour}."])
    (lint,) = check(recipe)
    assert lint.kind == LintKind.unit_spacing
    assert lint.fatal
    assert "'500g' should be '500 g'" in lint.description
    assert "category 'Pantry'" in lint.description


def test_vulgar_fraction() -> None:
    recipe = make_recipe({Category.spices: ["½ tsp salt"]}, ["Add the {salt}."])
    (lint,) = check(recipe)
    assert lint.kind == LintKind.vulgar_fraction
    assert lint.fatal
    assert "Unicode fraction '½'" in lint.description


def test_empty_ingredient() -> None:
    recipe = make_recipe({Category.fresh: ["  "]}, ["Cook."])
    lints = [lint for lint in check(recipe) if lint.fatal]
    assert lints == [
        Lint(
            LintKind.empty_ingredient,
            "Empty ingredient found in category 'Fresh'",
        )
    ]


def test_empty_step() -> None:
    recipe = make_recipe({Category.fresh: ["1 onion"]}, ["Cook the {onion}.", " "])
    lints = [lint for lint in check(recipe) if lint.fatal]
    assert lints == [
        Lint(LintKind.empty_step, "Empty instruction step found at position 2")
    ]


def test_unscalable_quantity() -> None:
    recipe = make_recipe(
        {Category.pantry: ["500 g", "Salt to taste", "2 cups"]},
        ["Use the {500 g}, {salt} and {2 cups}."],
        no_scale=["2 cups"],
    )
    (lint,) = check(recipe)
    assert lint.kind == LintKind.unscalable_quantity
    assert not lint.fatal
    assert "'500 g'" in lint.description
    assert "<!-- no-scale -->" in lint.description


def test_unreferenced_ingredients() -> None:
    recipe = make_recipe(
        {
            Category.fresh: ["1 onion", "2 cloves garlic"],
            Category.pantry: ["2 tbsp olive oil"],
        },
        ["Fry the {onion} in the {OIL}."],
    )
    lints = list(check(recipe))
    assert lints == [
        Lint(
            LintKind.unreferenced_ingredient,
            "Ingredient '2 cloves garlic' (Fresh) is not linked in any "
            "instruction step. Consider adding an {ingredient} reference.",
        )
    ]
    assert not lints[0].fatal


def test_check_order() -> None:
    recipe = make_recipe(
        {Category.fresh: ["500g flour", "3"]},
        ["Mix."],
    )
    assert [lint.kind for lint in check(recipe)] == [
        LintKind.unscalable_quantity,
        LintKind.unit_spacing,
        LintKind.unreferenced_ingredient,
        LintKind.unreferenced_ingredient,
    ]
