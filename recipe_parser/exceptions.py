"""
Exceptions thrown while compiling recipes.

All problems which prevent a recipe file from being compiled are subclasses
of :py:exc:`RecipeError`. Non-fatal problems are reported as
:py:class:`recipe_parser.lint.Lint` values instead.
"""

from typing import Optional

from dataclasses import dataclass

from peggie.error_message_generation import format_error_message

from recipe_parser.recipe import Category


class RecipeError(ValueError):
    """Base class for exceptions thrown when a recipe cannot be compiled."""


def normalise_newlines(source: str) -> str:
    return source.replace("\r\n", "\n").replace("\r", "\n")


class IndentedRecipeError(RecipeError):
    """Thrown when every line of a recipe file is indented."""


class MissingFrontmatterError(RecipeError):
    """Thrown when a recipe file does not start with a '---' delimited header."""


class FrontmatterSyntaxError(RecipeError):
    """Thrown when the recipe header is not valid YAML."""


class FrontmatterSchemaError(RecipeError):
    """
    Thrown when the recipe header contains unknown fields, is missing required
    fields or contains values of the wrong type.
    """


class FrontmatterValueError(RecipeError):
    """Thrown when a recipe header field has an invalid value."""


@dataclass
class InvalidCategoryError(RecipeError):
    """
    Thrown when an ingredient category heading is not one of the
    :py:class:`~recipe_parser.recipe.Category` names.
    """

    category: str
    """The offending heading text."""

    line: Optional[int] = None
    column: Optional[int] = None
    snippet: Optional[str] = None
    """The location and source line of the heading, when known."""

    @property
    def explanation(self) -> str:
        valid = ", ".join(category.value for category in Category)
        return (
            f"Invalid ingredient category: '{self.category}'. "
            f"Valid categories: {valid}"
        )

    def __str__(self) -> str:
        if self.line is None or self.column is None or self.snippet is None:
            return self.explanation
        return format_error_message(
            self.line, self.column, self.snippet, self.explanation
        )


class NoIngredientsError(RecipeError):
    """Thrown when a recipe has no ingredient categories."""


class NoStepsError(RecipeError):
    """Thrown when a recipe has no instruction steps."""


class LintError(RecipeError):
    """Thrown in strict mode when a recipe fails a formatting check."""


class DuplicateRecipeIdError(RecipeError):
    """Thrown when two recipe files share the same id."""


class NoRecipesError(RecipeError):
    """Thrown when no valid recipes are found in the input directory."""


class InputDirectoryError(RecipeError):
    """Thrown when the recipe input directory does not exist."""
