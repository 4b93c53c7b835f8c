import pytest

from pathlib import Path

from textwrap import dedent

from recipe_parser.exceptions import (
    DuplicateRecipeIdError,
    InputDirectoryError,
    NoRecipesError,
    NoStepsError,
)

from recipe_parser.lint import LintKind

from recipe_parser.collection import find_recipe_files, RecipeCollection


def make_source(recipe_id: str, date: str = "2026-01-15", extra: str = "") -> str:
    return dedent(
        f"""
        ---
        id: {recipe_id}
        name: Recipe {recipe_id}
        description: A recipe called {recipe_id}.
        servings: 2
        time: 10
        difficulty: easy
        tags: [test]
        date: {date}
        ---

        # Ingredients

        ## Pantry
        - 100 g rice
        {extra}

        # Instructions

        1. Cook the {{rice}}.
        """
    ).lstrip()


class TestFindRecipeFiles:
    def test_sorted_markdown_files_only(self, tmp_path: Path) -> None:
        (tmp_path / "b.md").write_text("")
        (tmp_path / "a.md").write_text("")
        (tmp_path / "notes.txt").write_text("")
        (tmp_path / "sub.md").mkdir()
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "c.md").write_text("")

        assert find_recipe_files(tmp_path) == [tmp_path / "a.md", tmp_path / "b.md"]

    def test_empty(self, tmp_path: Path) -> None:
        assert find_recipe_files(tmp_path) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(InputDirectoryError, match="does not exist"):
            find_recipe_files(tmp_path / "nope")


class TestRecipeCollection:
    def test_sorted_newest_first(self) -> None:
        collection = RecipeCollection()
        collection.add_source(make_source("old", "2025-06-01"), Path("old.md"))
        collection.add_source(make_source("new", "2026-03-01"), Path("new.md"))
        collection.add_source(make_source("mid-a", "2026-01-01"), Path("mid-a.md"))
        collection.add_source(make_source("mid-b", "2026-01-01"), Path("mid-b.md"))

        assert [r.id for r in collection.sorted_recipes()] == [
            "new",
            "mid-a",
            "mid-b",
            "old",
        ]

    def test_duplicate_id(self) -> None:
        collection = RecipeCollection()
        collection.add_source(make_source("rice"), Path("one.md"))
        with pytest.raises(
            DuplicateRecipeIdError,
            match="Duplicate recipe ID 'rice' found in one.md and two.md",
        ):
            collection.add_source(make_source("rice"), Path("two.md"))

        # First definition kept
        assert len(collection.recipes) == 1
        assert collection.sources == {"rice": Path("one.md")}

    def test_failed_recipe_not_added(self) -> None:
        collection = RecipeCollection()
        source = make_source("rice").replace("1. Cook the {rice}.", "")
        with pytest.raises(NoStepsError):
            collection.add_source(source, Path("rice.md"))
        assert collection.recipes == []
        assert collection.sources == {}

    def test_no_recipes(self) -> None:
        with pytest.raises(NoRecipesError, match="No valid recipes found"):
            RecipeCollection().sorted_recipes()

    def test_strict_warnings(self) -> None:
        collection = RecipeCollection(strict=True)
        lints = collection.add_source(
            make_source("rice", extra="- Salt to taste"), Path("rice.md")
        )
        assert [lint.kind for lint in lints] == [LintKind.unreferenced_ingredient]

        lints = RecipeCollection().add_source(
            make_source("rice", extra="- Salt to taste"), Path("rice.md")
        )
        assert lints == []

    def test_add_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rice.md"
        path.write_text(make_source("rice"), encoding="utf-8")

        collection = RecipeCollection()
        collection.add_file(path)
        assert collection.sources == {"rice": path}
