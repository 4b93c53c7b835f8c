"""
Utilities for compiling a directory of recipes into a single collection.

All files with a ``.md`` extension directly within the input directory are
assumed to be recipe files. Files are compiled in order of their names so
that the output does not depend on the order the filesystem lists them in.

Recipe ids must be unique across the collection. The compiled recipes are
listed newest first (by their ``date``).
"""

from typing import List, MutableMapping

from dataclasses import dataclass, field

from pathlib import Path

from recipe_parser.recipe import Recipe

from recipe_parser.compiler import compile_recipe

from recipe_parser.lint import Lint

from recipe_parser.exceptions import (
    DuplicateRecipeIdError,
    InputDirectoryError,
    NoRecipesError,
)


__all__ = [
    "RECIPE_EXTENSION",
    "find_recipe_files",
    "RecipeCollection",
]


RECIPE_EXTENSION = ".md"


def find_recipe_files(directory: Path) -> List[Path]:
    """
    List the recipe files within a directory, sorted by name.
    """
    if not directory.is_dir():
        raise InputDirectoryError(f"Input directory does not exist: {directory}")
    return sorted(
        path
        for path in directory.iterdir()
        if path.suffix == RECIPE_EXTENSION and path.is_file()
    )


@dataclass
class RecipeCollection:
    """
    A collection of compiled recipes with unique ids.
    """

    strict: bool = False
    """Compile recipes in strict mode."""

    recipes: List[Recipe] = field(default_factory=list)
    """The recipes added so far, in the order they were added."""

    sources: MutableMapping[str, Path] = field(default_factory=dict)
    """The file each recipe id was defined in."""

    def add_source(self, source: str, path: Path) -> List[Lint]:
        """
        Compile a recipe and add it to the collection.

        Throws a :py:exc:`~recipe_parser.exceptions.RecipeError` if the
        recipe does not compile or has the same id as an existing recipe in
        the collection (in which case the collection is unchanged).

        Returns
        =======
        [:py:class:`~recipe_parser.lint.Lint`, ...]
            Any warnings produced in strict mode.
        """
        recipe, warnings = compile_recipe(source, strict=self.strict)

        existing_path = self.sources.get(recipe.id)
        if existing_path is not None:
            raise DuplicateRecipeIdError(
                f"Duplicate recipe ID '{recipe.id}' found in "
                f"{existing_path} and {path}"
            )

        self.sources[recipe.id] = path
        self.recipes.append(recipe)
        return warnings

    def add_file(self, path: Path) -> List[Lint]:
        """Compile a recipe file and add it to the collection."""
        return self.add_source(path.read_text(encoding="utf-8"), path)

    def sorted_recipes(self) -> List[Recipe]:
        """
        The recipes in the collection, newest first. Throws
        :py:exc:`~recipe_parser.exceptions.NoRecipesError` if the collection
        is empty.
        """
        if not self.recipes:
            raise NoRecipesError("No valid recipes found")
        return sorted(self.recipes, key=lambda recipe: recipe.date, reverse=True)
