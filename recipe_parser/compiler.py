"""
Compilation of a single recipe file into a :py:class:`Recipe`.

.. autofunction:: compile_recipe

During compilation any of the :py:exc:`~recipe_parser.exceptions.RecipeError`
subclasses may be thrown. In strict mode, recipes are additionally checked
using :py:func:`recipe_parser.lint.check`, with fatal lint causing a
:py:exc:`~recipe_parser.exceptions.LintError`.
"""

from typing import List, Tuple

from recipe_parser.recipe import Recipe

from recipe_parser.frontmatter import DELIMITER, split_frontmatter, load_frontmatter

from recipe_parser.extract import extract_recipe

from recipe_parser.lint import Lint, check

from recipe_parser.exceptions import IndentedRecipeError, LintError


__all__ = [
    "check_indentation",
    "compile_recipe",
]


def check_indentation(source: str) -> None:
    """
    Reject files where every line is indented, as commonly happens when a
    recipe is copy-pasted from elsewhere.
    """
    lines = [
        line
        for line in source.splitlines()
        if line.strip() and not line.startswith(DELIMITER)
    ]
    if lines and all(line.startswith(" ") for line in lines):
        raise IndentedRecipeError(
            "Every line in your recipe starts with extra spaces.\n"
            "  This usually happens when copy-pasting from a website or editor.\n"
            "  Please remove the leading spaces from all lines and try again."
        )


def compile_recipe(source: str, strict: bool = False) -> Tuple[Recipe, List[Lint]]:
    """
    Compile the source of a recipe file.

    Parameters
    ==========
    source : str
        The complete contents of a recipe file (header and markdown body).
    strict : bool
        If True, perform additional checks on the header and lint the
        compiled recipe.

    Returns
    =======
    recipe : :py:class:`~recipe_parser.recipe.Recipe`
        The compiled recipe.
    warnings : [:py:class:`~recipe_parser.lint.Lint`, ...]
        Non-fatal lint found in strict mode. Always empty otherwise.
    """
    check_indentation(source)
    header, body, body_line = split_frontmatter(source)
    frontmatter = load_frontmatter(header, strict=strict)
    recipe = extract_recipe(frontmatter, body, first_line=body_line)

    warnings: List[Lint] = []
    if strict:
        for lint in check(recipe):
            if lint.fatal:
                raise LintError(lint.description)
            warnings.append(lint)

    return (recipe, warnings)
